"""
Input mapper with action-based abstraction.

Translates raw pygame events into semantic Actions. The mapper never
opens a window or polls devices; it only reads the events handed to it,
so it works with any loop that produces pygame events.

Usage:
    mapper = InputMapper(debug_jumps=config.settings.debug_jumps)

    for event in pygame.event.get():
        for action in mapper.process_event(event):
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import pygame

from vnengine.core.actions import (
    Action,
    DEBUG_JUMP_ACTIONS,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_MOUSE_BINDINGS,
)
from vnengine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"


class InputMapper:
    """
    Maps keyboard and mouse events to Actions.

    Debug jump actions are dropped unless ``debug_jumps`` is enabled.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        debug_jumps: bool = False,
    ):
        self.event_bus = event_bus
        self.debug_jumps = debug_jumps

        # Bindings (action -> list of keys / mouse buttons)
        self._key_bindings = {a: list(keys) for a, keys in DEFAULT_KEY_BINDINGS.items()}
        self._mouse_bindings = {a: list(btns) for a, btns in DEFAULT_MOUSE_BINDINGS.items()}
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        self._reverse_mouse_bindings: dict[int, list[Action]] = {}
        self._rebuild_reverse_bindings()

    def _rebuild_reverse_bindings(self) -> None:
        """Build reverse lookups: key/button -> actions."""
        self._reverse_key_bindings.clear()
        for action, keys in self._key_bindings.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, []).append(action)

        self._reverse_mouse_bindings.clear()
        for action, buttons in self._mouse_bindings.items():
            for button in buttons:
                self._reverse_mouse_bindings.setdefault(button, []).append(action)

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        """Add a key binding for an action."""
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
        self._rebuild_reverse_bindings()

    def unbind_key(self, action: Action, key: int) -> None:
        """Remove a key binding for an action."""
        if key in self._key_bindings.get(action, []):
            self._key_bindings[action].remove(key)
        self._rebuild_reverse_bindings()

    def bind_mouse_button(self, action: Action, button: int) -> None:
        """Add a mouse button binding for an action."""
        buttons = self._mouse_bindings.setdefault(action, [])
        if button not in buttons:
            buttons.append(button)
        self._rebuild_reverse_bindings()

    def clear_bindings(self, action: Action) -> None:
        """Clear all bindings for an action."""
        self._key_bindings[action] = []
        self._mouse_bindings[action] = []
        self._rebuild_reverse_bindings()

    def get_bindings(self, action: Action) -> list[int]:
        """Get all key bindings for an action."""
        return self._key_bindings.get(action, []).copy()

    # Event translation

    def process_event(self, event: Any) -> list[Action]:
        """
        Translate one pygame event into the actions it triggers.

        Args:
            event: A pygame event (anything with ``type`` and the
                matching ``key``/``button`` attribute)

        Returns:
            Triggered actions in binding order (possibly empty)
        """
        if event.type == pygame.KEYDOWN:
            actions = self._reverse_key_bindings.get(event.key, [])
        elif event.type == pygame.MOUSEBUTTONDOWN:
            actions = self._reverse_mouse_bindings.get(event.button, [])
        elif event.type == pygame.QUIT:
            actions = [Action.QUIT]
        else:
            return []

        result = [a for a in actions if self.debug_jumps or a not in DEBUG_JUMP_ACTIONS]

        if self.event_bus:
            for action in result:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)

        return result
