"""
Navigation state - the playback cursor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class PlaybackStatus(Enum):
    """Playback state derived from NavigationState."""
    PLAYING = auto()
    AWAITING_BRANCH = auto()
    FINISHED = auto()


@dataclass
class NavigationState:
    """
    Mutable playback cursor, owned and mutated only by PlaybackEngine.

    Attributes:
        position: Index of the current entry (== script length when finished)
        can_rewind: Whether rewind() may step back
        pending_jump: Label chosen by the branch UI, consumed on gate clear
        branch_gate: Forward advance is suspended while True
        history: Previously visited positions, most recent last
    """
    position: int = 0
    can_rewind: bool = False
    pending_jump: Optional[str] = None
    branch_gate: bool = False
    history: list[int] = field(default_factory=list)

    def status(self, length: int) -> PlaybackStatus:
        """Derive the playback status for a script of ``length`` entries."""
        if self.position >= length:
            return PlaybackStatus.FINISHED
        if self.branch_gate:
            return PlaybackStatus.AWAITING_BRANCH
        return PlaybackStatus.PLAYING

    def snapshot(self) -> NavigationState:
        """Copy of the state (history list included)."""
        return NavigationState(
            position=self.position,
            can_rewind=self.can_rewind,
            pending_jump=self.pending_jump,
            branch_gate=self.branch_gate,
            history=self.history.copy(),
        )
