"""
Auto-play - advances the engine on a fixed interval.

An external timer in the sense of the playback engine: each tick that
crosses the interval calls advance(), exactly as a player click would.
"""

from __future__ import annotations

import logging
from typing import Optional

from vnengine.core.events import EventBus, NarrativeEvent
from vnframework.playback.engine import PlaybackEngine
from vnframework.playback.state import PlaybackStatus


class AutoPlayer:
    """
    Interval timer driving PlaybackEngine.advance().

    Stops itself when the script finishes or lands on a ``pause`` entry.
    While a branch is open the timer keeps running but nothing advances.
    """

    def __init__(
        self,
        engine: PlaybackEngine,
        interval: float = 2.0,
        event_bus: Optional[EventBus] = None,
    ):
        if interval <= 0:
            raise ValueError(f"Auto-play interval must be positive, got {interval}")
        self.engine = engine
        self.interval = interval
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

        self._enabled = False
        self._elapsed = 0.0

    @property
    def enabled(self) -> bool:
        return self._enabled

    def start(self) -> None:
        if self._enabled:
            return
        if self.engine.finished:
            self.logger.debug("auto-play not started: script finished")
            return
        self._enabled = True
        self._elapsed = 0.0
        self._publish(NarrativeEvent.AUTO_PLAY_STARTED)

    def stop(self) -> None:
        if not self._enabled:
            return
        self._enabled = False
        self._elapsed = 0.0
        self._publish(NarrativeEvent.AUTO_PLAY_STOPPED)

    def toggle(self) -> bool:
        """Flip auto-play; returns the new enabled state."""
        if self._enabled:
            self.stop()
        else:
            self.start()
        return self._enabled

    def update(self, dt: float) -> int:
        """
        Advance the timer.

        Args:
            dt: Seconds since the last update

        Returns:
            Number of advances performed
        """
        if not self._enabled:
            return 0

        self._elapsed += dt
        advances = 0

        while self._enabled and self._elapsed >= self.interval:
            self._elapsed -= self.interval

            if self.engine.status == PlaybackStatus.AWAITING_BRANCH:
                continue

            before = len(self.engine.history)
            self.engine.advance()
            if len(self.engine.history) != before:
                advances += 1

            if self.engine.finished:
                self.logger.info("Auto-play reached the end of the script")
                self.stop()
            elif self.engine.current_entry is not None and self.engine.current_entry.pause:
                self.stop()

        return advances

    def _publish(self, event_type: NarrativeEvent) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, position=self.engine.position)
