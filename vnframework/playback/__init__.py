"""
Playback module - navigating a loaded script.

Provides:
- Navigation state and derived playback status
- The playback engine (advance, rewind, jumps, branch gate)
- Command objects and the view projection
- Auto-play timer and the owning session
"""

from vnframework.playback.state import NavigationState, PlaybackStatus
from vnframework.playback.view import DialogueView, PresentationSink, RecordingSink
from vnframework.playback.commands import (
    Advance,
    Rewind,
    JumpTo,
    JumpToIndex,
    SetBranchGate,
    ResolveBranch,
    ToggleAutoPlay,
    Quit,
    Command,
    command_for_action,
)
from vnframework.playback.engine import PlaybackEngine
from vnframework.playback.autoplay import AutoPlayer
from vnframework.playback.session import NarrativeSession

__all__ = [
    "NavigationState",
    "PlaybackStatus",
    "DialogueView",
    "PresentationSink",
    "RecordingSink",
    "Advance",
    "Rewind",
    "JumpTo",
    "JumpToIndex",
    "SetBranchGate",
    "ResolveBranch",
    "ToggleAutoPlay",
    "Quit",
    "Command",
    "command_for_action",
    "PlaybackEngine",
    "AutoPlayer",
    "NarrativeSession",
]
