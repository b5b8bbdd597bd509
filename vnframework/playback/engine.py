"""
Playback engine - the script state machine.

States (derived from NavigationState, see PlaybackStatus):

- PLAYING: advance() moves forward, following the entry's jump if any
- AWAITING_BRANCH: advance() is suspended until the branch is resolved
- FINISHED: position == len(script); advance() is a no-op, rewind() works

Every position change is recorded in the history stack, so rewind()
returns to where the player actually was, including across jumps.

After each effective change the engine pushes the new DialogueView to its
sinks and publishes NarrativeEvents. No-ops push and publish nothing.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from vnengine.core.events import EventBus, NarrativeEvent
from vnframework.playback.commands import (
    Advance,
    Command,
    JumpTo,
    JumpToIndex,
    ResolveBranch,
    Rewind,
    SetBranchGate,
)
from vnframework.playback.state import NavigationState, PlaybackStatus
from vnframework.playback.view import DialogueView, PresentationSink
from vnframework.script.labels import LabelIndex
from vnframework.script.loader import Script
from vnframework.script.models import DialogueEntry


logger = logging.getLogger(__name__)


class PlaybackEngine:
    """
    Drives one script.

    Usage:
        engine = PlaybackEngine(script, event_bus=bus, sinks=[renderer])
        engine.present()          # show the first entry
        engine.advance()
        engine.rewind()
        engine.resolve_branch("door")
    """

    def __init__(
        self,
        script: Script,
        *,
        rewind_enabled: bool = True,
        event_bus: Optional[EventBus] = None,
        sinks: Iterable[PresentationSink] = (),
    ):
        self._script = script
        self._labels: LabelIndex = script.labels
        self._state = NavigationState()
        self._event_bus = event_bus
        self._sinks: list[PresentationSink] = list(sinks)
        self._pending_events: list[tuple[NarrativeEvent, dict[str, Any]]] = []
        self.rewind_enabled = rewind_enabled

        # The first entry may itself be a choice
        self._arrive()
        self._pending_events.clear()

    # Read access

    @property
    def script(self) -> Script:
        return self._script

    @property
    def labels(self) -> LabelIndex:
        return self._labels

    @property
    def state(self) -> NavigationState:
        """Copy of the navigation state."""
        return self._state.snapshot()

    @property
    def position(self) -> int:
        return self._state.position

    @property
    def history(self) -> tuple[int, ...]:
        return tuple(self._state.history)

    @property
    def can_rewind(self) -> bool:
        return self._state.can_rewind

    @property
    def branch_gate(self) -> bool:
        return self._state.branch_gate

    @property
    def pending_jump(self) -> Optional[str]:
        return self._state.pending_jump

    @property
    def status(self) -> PlaybackStatus:
        return self._state.status(len(self._script))

    @property
    def finished(self) -> bool:
        return self.status == PlaybackStatus.FINISHED

    @property
    def current_entry(self) -> Optional[DialogueEntry]:
        """Entry at the cursor, or None when finished."""
        if self.finished:
            return None
        return self._script[self._state.position]

    @property
    def view(self) -> DialogueView:
        """Projection of the current entry."""
        entry = self.current_entry
        if entry is None:
            return DialogueView.end(self._state.position)
        return DialogueView.of(entry, self._state.position, self._state.branch_gate)

    # Sinks

    def add_sink(self, sink: PresentationSink) -> None:
        self._sinks.append(sink)

    def remove_sink(self, sink: PresentationSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def present(self) -> DialogueView:
        """Push the current view to every sink without changing state."""
        view = self.view
        for sink in self._sinks:
            sink.present(view)
        return view

    # Navigation

    def advance(self) -> DialogueView:
        """
        Move to the next entry, or to the current entry's jump target.

        No-op while the branch gate is active or after the script finished.
        """
        status = self.status
        if status != PlaybackStatus.PLAYING:
            logger.debug(f"advance ignored ({status.name})")
            return self.view

        entry = self._script[self._state.position]
        previous = self._state.position
        self._state.history.append(previous)

        if entry.jump is not None:
            self._state.position = self._labels[entry.jump]
            self._queue(NarrativeEvent.LINE_JUMPED, position=self._state.position,
                        previous=previous, label=entry.jump)
        else:
            self._state.position = previous + 1
            self._queue(NarrativeEvent.LINE_ADVANCED, position=self._state.position,
                        previous=previous)

        self._state.can_rewind = self.rewind_enabled
        self._arrive()
        return self._commit()

    def rewind(self) -> DialogueView:
        """
        Return to the previously visited position.

        No-op when rewind is disabled or there is no history. Works from
        the finished state too.
        """
        if not (self.rewind_enabled and self._state.can_rewind and self._state.history):
            logger.debug("rewind ignored (no history)")
            return self.view

        previous = self._state.position
        self._state.position = self._state.history.pop()
        self._state.can_rewind = bool(self._state.history)

        # Back at a choice the player has to choose again
        self._state.branch_gate = False
        self._state.pending_jump = None

        self._queue(NarrativeEvent.LINE_REWOUND, position=self._state.position,
                    previous=previous)
        self._arrive()
        return self._commit()

    def jump_to(self, label: str) -> DialogueView:
        """
        Jump to a label.

        Raises:
            UnknownLabelError: The label is not defined in the script
        """
        target = self._labels.position_of(label)
        return self._jump(target, label)

    def jump_to_index(self, index: int) -> DialogueView:
        """
        Debug jump to a raw position.

        Raises:
            IndexError: index is outside the script
        """
        if not 0 <= index < len(self._script):
            raise IndexError(f"Entry index out of range: {index}")
        return self._jump(index, None)

    # Branch selection

    def set_branch_gate(self, active: bool) -> DialogueView:
        """
        Suspend or resume forward advance.

        Clearing the gate with a pending jump performs that jump once.
        """
        if active:
            if self._state.branch_gate:
                return self.view
            self._state.branch_gate = True
            self._queue(NarrativeEvent.BRANCH_OPENED, position=self._state.position,
                        choices=self._current_choices())
            return self._commit()

        label = self._state.pending_jump
        if not self._state.branch_gate and label is None:
            return self.view

        self._state.branch_gate = False
        if label is None:
            return self._commit()

        self._state.pending_jump = None
        self._queue(NarrativeEvent.BRANCH_RESOLVED, position=self._state.position, label=label)
        return self._jump(self._labels.position_of(label), label)

    def resolve_branch(self, label: str) -> DialogueView:
        """
        Pick a branch: set the pending jump and clear the gate.

        Raises:
            UnknownLabelError: The label is not defined in the script
        """
        self._labels.position_of(label)
        self._state.pending_jump = label
        return self.set_branch_gate(False)

    # Commands

    def execute(self, command: Command) -> DialogueView:
        """Dispatch a command object to the matching operation."""
        if isinstance(command, Advance):
            return self.advance()
        if isinstance(command, Rewind):
            return self.rewind()
        if isinstance(command, JumpTo):
            return self.jump_to(command.label)
        if isinstance(command, JumpToIndex):
            return self.jump_to_index(command.index)
        if isinstance(command, SetBranchGate):
            return self.set_branch_gate(command.active)
        if isinstance(command, ResolveBranch):
            return self.resolve_branch(command.label)
        raise TypeError(f"PlaybackEngine cannot execute {type(command).__name__}")

    # Internals

    def _jump(self, target: int, label: Optional[str]) -> DialogueView:
        previous = self._state.position
        self._state.history.append(previous)
        self._state.position = target
        self._state.can_rewind = self.rewind_enabled
        self._state.branch_gate = False
        self._state.pending_jump = None

        logger.debug(f"jump {previous} -> {target} ({label or 'index'})")
        self._queue(NarrativeEvent.LINE_JUMPED, position=target, previous=previous, label=label)
        self._arrive()
        return self._commit()

    def _arrive(self) -> None:
        """Apply the effects of landing on the current position."""
        entry = self.current_entry
        if entry is None:
            self._queue(NarrativeEvent.SCRIPT_FINISHED, position=self._state.position)
            return

        if entry.has_choices and not self._state.branch_gate:
            self._state.branch_gate = True
            self._queue(NarrativeEvent.BRANCH_OPENED, position=self._state.position,
                        choices=entry.choices)

    def _current_choices(self) -> tuple:
        entry = self.current_entry
        return entry.choices if entry is not None else ()

    def _queue(self, event_type: NarrativeEvent, **data: Any) -> None:
        self._pending_events.append((event_type, data))

    def _commit(self) -> DialogueView:
        """Push the view to sinks, then publish queued events."""
        view = self.present()

        events, self._pending_events = self._pending_events, []
        if self._event_bus is not None:
            for event_type, data in events:
                self._event_bus.publish(event_type, view=view, **data)

        return view
