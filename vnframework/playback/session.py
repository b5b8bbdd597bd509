"""
Narrative session - owns the loaded script and its playback state.

The session is the single owner of the engine: loading a new script
replaces the engine (and its navigation state) only after the new script
has passed validation. Input events, commands and frame ticks all enter
through here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from vnengine.core.config import EngineConfig
from vnengine.core.events import EventBus, NarrativeEvent
from vnengine.input.mapper import InputMapper
from vnframework.playback.autoplay import AutoPlayer
from vnframework.playback.commands import (
    Advance,
    Command,
    ENGINE_COMMANDS,
    JumpToIndex,
    Quit,
    ResolveBranch,
    Rewind,
    ToggleAutoPlay,
    command_for_action,
)
from vnframework.playback.engine import PlaybackEngine
from vnframework.playback.view import DialogueView, PresentationSink
from vnframework.script.loader import Script, ScriptLoader


logger = logging.getLogger(__name__)


class NarrativeSession:
    """
    Ties config, loader, engine, auto-play and input together.

    Usage:
        session = NarrativeSession(config, event_bus=bus, sinks=[renderer])
        session.load_file("assets/dialogues.yaml")

        while session.running:
            for event in pygame.event.get():
                session.handle_event(event)
            session.update(dt)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        event_bus: Optional[EventBus] = None,
        sinks: Iterable[PresentationSink] = (),
        loader: Optional[ScriptLoader] = None,
        input_mapper: Optional[InputMapper] = None,
    ):
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self.loader = loader or ScriptLoader(self.config)
        self.input = input_mapper or InputMapper(
            debug_jumps=self.config.settings.debug_jumps,
        )
        self._sinks: list[PresentationSink] = list(sinks)

        self._engine: Optional[PlaybackEngine] = None
        self._autoplay: Optional[AutoPlayer] = None
        self.running = True

    # Script lifecycle

    @property
    def engine(self) -> PlaybackEngine:
        if self._engine is None:
            raise RuntimeError("No script loaded")
        return self._engine

    @property
    def autoplay(self) -> AutoPlayer:
        if self._autoplay is None:
            raise RuntimeError("No script loaded")
        return self._autoplay

    @property
    def is_loaded(self) -> bool:
        return self._engine is not None

    def load_file(self, path: str | Path) -> DialogueView:
        """Load a script file and start playing it."""
        return self.start(self.loader.load_file(path))

    def load_records(self, records: Sequence[Any], source: str = "<records>") -> DialogueView:
        """Load already-decoded records and start playing them."""
        return self.start(self.loader.load_records(records, source=source))

    def start(self, script: Script) -> DialogueView:
        """
        Begin playback of a validated script, discarding any previous state.

        Returns:
            The view of the first entry (also pushed to the sinks)
        """
        if self._autoplay is not None:
            self._autoplay.stop()

        self._engine = PlaybackEngine(
            script,
            rewind_enabled=self.config.settings.rewind,
            event_bus=self.event_bus,
            sinks=self._sinks,
        )
        self._autoplay = AutoPlayer(
            self._engine,
            interval=self.config.settings.auto_play_interval,
            event_bus=self.event_bus,
        )
        self.running = True

        logger.info(f"Session started: {script.source} ({len(script)} entries)")
        view = self._engine.present()
        self.event_bus.publish(
            NarrativeEvent.SCRIPT_LOADED,
            source=script.source,
            entries=len(script),
            view=view,
        )
        return view

    # Sinks

    def add_sink(self, sink: PresentationSink) -> None:
        self._sinks.append(sink)
        if self._engine is not None:
            self._engine.add_sink(sink)

    # Commands

    def handle(self, command: Command) -> Optional[DialogueView]:
        """
        Execute a command.

        Returns:
            The current view, or None for commands that end the session
        """
        if isinstance(command, Quit):
            self.quit()
            return None

        if isinstance(command, ToggleAutoPlay):
            self.autoplay.toggle()
            return self.engine.view

        if isinstance(command, ENGINE_COMMANDS):
            return self.engine.execute(command)

        raise TypeError(f"Unsupported command: {type(command).__name__}")

    def handle_event(self, event: Any) -> list[Optional[DialogueView]]:
        """Translate a raw pygame event through the input mapper and run it."""
        results = []
        for action in self.input.process_event(event):
            command = command_for_action(action)
            if command is None:
                continue
            if not self.is_loaded and not isinstance(command, Quit):
                logger.debug(f"Ignoring {action.name}: no script loaded")
                continue
            if isinstance(command, JumpToIndex) and command.index >= len(self.engine.script):
                logger.debug(f"Ignoring {action.name}: script has {len(self.engine.script)} entries")
                continue
            results.append(self.handle(command))
        return results

    def advance(self) -> DialogueView:
        return self.engine.execute(Advance())

    def rewind(self) -> DialogueView:
        return self.engine.execute(Rewind())

    def resolve_branch(self, label: str) -> DialogueView:
        return self.engine.execute(ResolveBranch(label))

    def quit(self) -> None:
        if not self.running:
            return
        self.running = False
        if self._autoplay is not None:
            self._autoplay.stop()
        self.event_bus.publish(NarrativeEvent.SESSION_QUIT)

    # Frame tick

    def update(self, dt: float) -> None:
        """Per-frame update; drives auto-play."""
        if self._autoplay is not None and self.running:
            self._autoplay.update(dt)
