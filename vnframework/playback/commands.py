"""
Commands accepted by the playback engine and session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from vnengine.core.actions import Action, DEBUG_JUMP_ACTIONS


@dataclass(frozen=True)
class Advance:
    pass


@dataclass(frozen=True)
class Rewind:
    pass


@dataclass(frozen=True)
class JumpTo:
    label: str


@dataclass(frozen=True)
class JumpToIndex:
    """Debug-only jump to a raw entry position."""
    index: int


@dataclass(frozen=True)
class SetBranchGate:
    active: bool


@dataclass(frozen=True)
class ResolveBranch:
    """Choose a branch: sets the pending jump and clears the gate."""
    label: str


@dataclass(frozen=True)
class ToggleAutoPlay:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[
    Advance,
    Rewind,
    JumpTo,
    JumpToIndex,
    SetBranchGate,
    ResolveBranch,
    ToggleAutoPlay,
    Quit,
]

# Commands the engine handles itself; the rest belong to the session
ENGINE_COMMANDS = (Advance, Rewind, JumpTo, JumpToIndex, SetBranchGate, ResolveBranch)

_ACTION_COMMANDS: dict[Action, Command] = {
    Action.ADVANCE: Advance(),
    Action.REWIND: Rewind(),
    Action.AUTO_PLAY: ToggleAutoPlay(),
    Action.QUIT: Quit(),
}


def command_for_action(action: Action) -> Optional[Command]:
    """Translate an input Action into a command (None if unmapped)."""
    if action in DEBUG_JUMP_ACTIONS:
        return JumpToIndex(DEBUG_JUMP_ACTIONS[action])
    return _ACTION_COMMANDS.get(action)
