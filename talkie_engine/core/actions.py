"""
Input action definitions.

Playback logic never looks at raw keys or buttons. Hosts report whether
each logical Action is currently held, and the dialogue layer derives
press/release edges from that.

Usage:
    if source.is_held(Action.CONFIRM):
        ...
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """
    Logical actions the dialogue presentation responds to.

    CONFIRM advances prompts, picks choices, and fast-forwards text
    while held. UP and DOWN move the choice cursor.
    """

    CONFIRM = auto()
    UP = auto()
    DOWN = auto()


# Default key bindings (can be customized per InputHandler)
DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [pygame.K_SPACE, pygame.K_RETURN],
    Action.UP: [pygame.K_UP, pygame.K_w],
    Action.DOWN: [pygame.K_DOWN, pygame.K_s],
}

# Gamepad button bindings (SDL controller layout)
DEFAULT_GAMEPAD_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [0],  # A button
}

# D-pad bindings (hat)
DEFAULT_GAMEPAD_HAT_BINDINGS: dict[tuple[int, int], Action] = {
    (0, 1): Action.UP,
    (0, -1): Action.DOWN,
}
