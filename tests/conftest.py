import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine modules can be imported
sys.path.append(os.getcwd())


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame subsystems to allow headless testing.
    Autoused for all tests to prevent accidental window or mixer creation.
    Event and key constants stay real so tests can build pygame events.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.mixer'), \
         patch('pygame.joystick'):
        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from vnengine.core.events import EventBus
    return EventBus()


@pytest.fixture
def config():
    """Config with a title, asset tables and a couple of variables."""
    from vnengine.core.config import EngineConfig
    return EngineConfig.model_validate({
        "title": "Test Hall",
        "assets": {
            "characters": {"alice": "portraits/alice.png"},
            "backgrounds": {"hall": "bg/hall.png"},
            "widgets": {"lantern": "widgets/lantern.swf"},
            "audio": {
                "bgm": {"theme": "audio/theme.ogg", "night": "audio/night.ogg"},
                "click_sound": "audio/click.ogg",
                "backclick_sound": "audio/back.ogg",
            },
        },
        "variables": {"player_name": "Alex", "brave": True},
    })


@pytest.fixture
def loader():
    from vnframework.script.loader import ScriptLoader
    return ScriptLoader()


@pytest.fixture
def linear_records():
    """Five plain entries, no labels or jumps."""
    return [
        {"speaker": f"s{i}", "text": f"line {i}", "portrait": "none"}
        for i in range(5)
    ]


@pytest.fixture
def jump_records():
    """A, B(label=L2), C(jump=L2)."""
    return [
        {"speaker": "a", "text": "A", "portrait": "none"},
        {"speaker": "b", "text": "B", "portrait": "none", "label": "L2"},
        {"speaker": "c", "text": "C", "portrait": "none", "jump": "L2"},
    ]


@pytest.fixture
def branch_records():
    """Intro, a choice between two labels, and the two branches."""
    return [
        {"speaker": "n", "text": "intro", "portrait": "none"},
        {
            "speaker": "alice", "text": "which way?", "portrait": "alice",
            "choices": [
                {"text": "left", "goto": "left"},
                {"text": "right", "goto": "right"},
            ],
        },
        {"speaker": "n", "text": "went left", "portrait": "none", "label": "left", "jump": "end"},
        {"speaker": "n", "text": "went right", "portrait": "none", "label": "right"},
        {"speaker": "n", "text": "the end", "portrait": "none", "label": "end"},
    ]


@pytest.fixture
def sink():
    from vnframework.playback.view import RecordingSink
    return RecordingSink()


@pytest.fixture
def make_engine(loader, event_bus, sink):
    """Factory: records -> PlaybackEngine wired to the bus and a recording sink."""
    from vnframework.playback.engine import PlaybackEngine

    def _make(records, **kwargs):
        script = loader.load_records(records)
        kwargs.setdefault("event_bus", event_bus)
        kwargs.setdefault("sinks", [sink])
        return PlaybackEngine(script, **kwargs)

    return _make


@pytest.fixture
def audio_backend():
    """Mock audio backend."""
    return MagicMock()
