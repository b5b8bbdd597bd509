import pytest
from unittest.mock import call
from vnengine.core.config import EngineConfig
from vnengine.core.events import AudioEvent
from vnengine.resources.assets import AssetResolver
from vnframework.audio import NarrativeAudioController, SoundBank
from vnframework.playback import NarrativeSession

RECORDS = [
    {"speaker": "a", "text": "one", "portrait": "none", "bgm": "theme"},
    {"speaker": "a", "text": "two", "portrait": "none"},
    {"speaker": "a", "text": "three", "portrait": "none", "bgm": "night"},
    {"speaker": "a", "text": "four", "portrait": "none", "bgm": "none"},
]

@pytest.fixture
def asset_root(tmp_path):
    audio = tmp_path / "audio"
    audio.mkdir()
    for name in ("click.ogg", "back.ogg", "theme.ogg", "night.ogg"):
        (audio / name).write_bytes(b"")
    return tmp_path

@pytest.fixture
def controller(audio_backend, event_bus, config, asset_root):
    return NarrativeAudioController(audio_backend, event_bus, AssetResolver(config, asset_root))

@pytest.fixture
def session(config, event_bus, controller):
    session = NarrativeSession(config, event_bus=event_bus)
    session.load_records(RECORDS)
    return session

def test_bgm_starts_on_load(session, controller, audio_backend, asset_root):
    audio_backend.play_bgm.assert_called_once_with(
        asset_root / "audio" / "theme.ogg", loop=True, fade_ms=1000,
    )
    assert controller.current_bgm == "theme"

def test_advance_clicks(session, audio_backend, asset_root):
    session.advance()

    audio_backend.play_sfx.assert_called_once_with(asset_root / "audio" / "click.ogg")
    assert audio_backend.play_bgm.call_count == 1

def test_rewind_back_clicks(session, audio_backend, asset_root):
    session.advance()
    session.rewind()

    assert audio_backend.play_sfx.call_args_list == [
        call(asset_root / "audio" / "click.ogg"),
        call(asset_root / "audio" / "back.ogg"),
    ]

def test_bgm_switches_and_stops(session, controller, audio_backend, asset_root):
    session.advance()
    session.advance()

    audio_backend.play_bgm.assert_called_with(
        asset_root / "audio" / "night.ogg", loop=True, fade_ms=1000,
    )
    assert controller.current_bgm == "night"

    session.advance()

    audio_backend.stop_bgm.assert_called_once_with(1000)
    assert controller.current_bgm is None

def test_quit_stops_bgm(session, audio_backend):
    session.quit()

    audio_backend.stop_bgm.assert_called_once_with(1000)

def test_disabled_controller_is_silent(session, controller, audio_backend):
    controller.enabled = False

    session.advance()

    audio_backend.play_sfx.assert_not_called()

def test_unmapped_bank(controller, audio_backend):
    assert controller.play_sound(SoundBank.BRANCH_OPEN) is False
    audio_backend.play_sfx.assert_not_called()

def test_custom_bank_sound(controller, audio_backend, event_bus, asset_root):
    played = []
    event_bus.subscribe(AudioEvent.SFX_PLAYED, lambda e: played.append(e["bank"]), weak=False)
    controller.set_sound(SoundBank.BRANCH_OPEN, "audio/theme.ogg")

    assert controller.play_sound(SoundBank.BRANCH_OPEN) is True
    assert played == [SoundBank.BRANCH_OPEN]

def test_missing_sound_file(controller, audio_backend, caplog):
    controller.set_sound(SoundBank.ADVANCE, "audio/missing.ogg")

    assert controller.play_sound(SoundBank.ADVANCE) is False
    assert "Sound not found for ADVANCE" in caplog.text
    audio_backend.play_sfx.assert_not_called()

def test_configured_branch_sounds(audio_backend, event_bus, asset_root, branch_records):
    (asset_root / "audio" / "chime.ogg").write_bytes(b"")
    (asset_root / "audio" / "pick.ogg").write_bytes(b"")
    config = EngineConfig.model_validate({"assets": {"audio": {
        "branch_open_sound": "audio/chime.ogg",
        "branch_select_sound": "audio/pick.ogg",
    }}})
    NarrativeAudioController(audio_backend, event_bus, AssetResolver(config, asset_root))
    session = NarrativeSession(config, event_bus=event_bus)
    session.load_records(branch_records)

    session.advance()
    session.resolve_branch("right")

    audio = asset_root / "audio"
    assert audio_backend.play_sfx.call_args_list == [
        call(audio / "click.ogg"),
        call(audio / "chime.ogg"),
        call(audio / "pick.ogg"),
        call(audio / "click.ogg"),
    ]
