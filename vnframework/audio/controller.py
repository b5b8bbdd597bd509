"""
Narrative Audio Controller - wires playback events to audio playback.

Subscribes to NarrativeEvents and calls an audio backend: click sounds on
navigation, music changes when an entry names a different bgm track.
The backend does the actual playback; this module never touches a mixer.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Protocol

from vnengine.core.events import AudioEvent, Event, EventBus, NarrativeEvent
from vnengine.resources.assets import AssetResolver


class AudioBackend(Protocol):
    """Playback surface the controller drives."""

    def play_sfx(self, path: Path) -> None:
        ...

    def play_bgm(self, path: Path, loop: bool = True, fade_ms: int = 1000) -> None:
        ...

    def stop_bgm(self, fade_ms: int = 1000) -> None:
        ...


class SoundBank(Enum):
    """Navigation sound categories."""
    ADVANCE = auto()
    REWIND = auto()
    BRANCH_OPEN = auto()
    BRANCH_SELECT = auto()


class NarrativeAudioController:
    """
    Central controller for playback audio.

    Responsibilities:
    - Play a click on advance/jump and a back-click on rewind
    - Play the configured branch sounds when a choice opens or resolves
    - Switch BGM when the current entry names another track
    - Stop BGM when the session quits

    Usage:
        audio_ctrl = NarrativeAudioController(backend, event_bus, resolver)
        audio_ctrl.set_sound(SoundBank.ADVANCE, "audio/page.ogg")
    """

    def __init__(
        self,
        backend: AudioBackend,
        event_bus: EventBus,
        resolver: AssetResolver,
        fade_ms: int = 1000,
    ):
        self.audio = backend
        self.event_bus = event_bus
        self.resolver = resolver
        self.fade_ms = fade_ms
        self.logger = logging.getLogger(__name__)

        audio_paths = resolver.config.assets.audio
        self._sounds: dict[SoundBank, Optional[str]] = {
            SoundBank.ADVANCE: audio_paths.click_sound,
            SoundBank.REWIND: audio_paths.backclick_sound,
            SoundBank.BRANCH_OPEN: audio_paths.branch_open_sound,
            SoundBank.BRANCH_SELECT: audio_paths.branch_select_sound,
        }

        # Runtime state
        self._current_bgm: Optional[str] = None
        self._enabled: bool = True

        self._subscribe_events()

    def _subscribe_events(self) -> None:
        bus = self.event_bus
        bus.subscribe(NarrativeEvent.SCRIPT_LOADED, self._on_arrival, weak=False)
        bus.subscribe(NarrativeEvent.LINE_ADVANCED, self._on_forward, weak=False)
        bus.subscribe(NarrativeEvent.LINE_JUMPED, self._on_forward, weak=False)
        bus.subscribe(NarrativeEvent.LINE_REWOUND, self._on_rewind, weak=False)
        bus.subscribe(NarrativeEvent.BRANCH_OPENED, self._on_branch_opened, weak=False)
        bus.subscribe(NarrativeEvent.BRANCH_RESOLVED, self._on_branch_resolved, weak=False)
        bus.subscribe(NarrativeEvent.SESSION_QUIT, self._on_session_quit, weak=False)

    # Configuration

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def current_bgm(self) -> Optional[str]:
        return self._current_bgm

    def set_sound(self, bank: SoundBank, path: str) -> None:
        """Set the sound file (relative to the asset base) for a bank entry."""
        self._sounds[bank] = path

    # Playback

    def play_sound(self, bank: SoundBank) -> bool:
        """
        Play a sound from the bank.

        Returns:
            True if a sound was handed to the backend
        """
        if not self._enabled:
            return False

        path = self._sounds.get(bank)
        if not path:
            return False

        full_path = self.resolver.base_path / path
        if not full_path.exists():
            self.logger.warning(f"Sound not found for {bank.name}: {full_path}")
            return False

        self.audio.play_sfx(full_path)
        self.event_bus.publish(AudioEvent.SFX_PLAYED, bank=bank, file=str(full_path))
        return True

    def _sync_bgm(self, track: Optional[str]) -> None:
        """Start the entry's track if it differs from the one playing."""
        if not track or track == self._current_bgm:
            return
        if track == "none":
            self.stop_bgm()
            return

        path = self.resolver.bgm(track)
        if path is None:
            return

        self.audio.play_bgm(path, loop=True, fade_ms=self.fade_ms)
        self._current_bgm = track
        self.event_bus.publish(AudioEvent.BGM_STARTED, track=track, file=str(path))

    def stop_bgm(self) -> None:
        if self._current_bgm is None:
            return
        self.audio.stop_bgm(self.fade_ms)
        self._current_bgm = None
        self.event_bus.publish(AudioEvent.BGM_STOPPED)

    # Event handlers

    def _on_arrival(self, event: Event) -> None:
        view = event.get("view")
        if view is not None:
            self._sync_bgm(view.bgm)

    def _on_forward(self, event: Event) -> None:
        self.play_sound(SoundBank.ADVANCE)
        self._on_arrival(event)

    def _on_rewind(self, event: Event) -> None:
        self.play_sound(SoundBank.REWIND)
        self._on_arrival(event)

    def _on_branch_opened(self, event: Event) -> None:
        self.play_sound(SoundBank.BRANCH_OPEN)

    def _on_branch_resolved(self, event: Event) -> None:
        self.play_sound(SoundBank.BRANCH_SELECT)

    def _on_session_quit(self, event: Event) -> None:
        self.stop_bgm()
