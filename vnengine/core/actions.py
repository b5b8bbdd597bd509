"""
Input action definitions.

Actions abstract raw input (keys, buttons) into semantic actions.
Playback code should use Actions, not raw keys. This enables:
- Key rebinding
- Multiple input methods (keyboard, mouse)
- A single translation point from device events to commands

Usage:
    mapper = InputMapper()
    for event in pygame.event.get():
        for action in mapper.process_event(event):
            session.handle(command_for_action(action))
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """
    Semantic input actions for script playback.

    Each action can be mapped to multiple input sources.
    """

    # Navigation
    ADVANCE = auto()
    REWIND = auto()

    # Playback modes
    AUTO_PLAY = auto()

    # System
    QUIT = auto()

    # Debug: jump to an absolute line index
    DEBUG_JUMP_0 = auto()
    DEBUG_JUMP_1 = auto()
    DEBUG_JUMP_2 = auto()
    DEBUG_JUMP_3 = auto()
    DEBUG_JUMP_4 = auto()
    DEBUG_JUMP_5 = auto()
    DEBUG_JUMP_6 = auto()
    DEBUG_JUMP_7 = auto()
    DEBUG_JUMP_8 = auto()
    DEBUG_JUMP_9 = auto()


DEBUG_JUMP_ACTIONS: dict[Action, int] = {
    Action.DEBUG_JUMP_0: 0,
    Action.DEBUG_JUMP_1: 1,
    Action.DEBUG_JUMP_2: 2,
    Action.DEBUG_JUMP_3: 3,
    Action.DEBUG_JUMP_4: 4,
    Action.DEBUG_JUMP_5: 5,
    Action.DEBUG_JUMP_6: 6,
    Action.DEBUG_JUMP_7: 7,
    Action.DEBUG_JUMP_8: 8,
    Action.DEBUG_JUMP_9: 9,
}


# Default key bindings (can be customized)
DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [pygame.K_SPACE, pygame.K_RETURN],
    Action.REWIND: [pygame.K_BACKSPACE, pygame.K_LEFT],
    Action.AUTO_PLAY: [pygame.K_a],
    Action.QUIT: [pygame.K_ESCAPE],

    Action.DEBUG_JUMP_0: [pygame.K_0],
    Action.DEBUG_JUMP_1: [pygame.K_1],
    Action.DEBUG_JUMP_2: [pygame.K_2],
    Action.DEBUG_JUMP_3: [pygame.K_3],
    Action.DEBUG_JUMP_4: [pygame.K_4],
    Action.DEBUG_JUMP_5: [pygame.K_5],
    Action.DEBUG_JUMP_6: [pygame.K_6],
    Action.DEBUG_JUMP_7: [pygame.K_7],
    Action.DEBUG_JUMP_8: [pygame.K_8],
    Action.DEBUG_JUMP_9: [pygame.K_9],
}

# Mouse button bindings (pygame button numbers: 1 = left, 3 = right)
DEFAULT_MOUSE_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [1],
    Action.REWIND: [3],
}
