"""
Input handler with action-based abstraction.

Translates pygame keyboard and gamepad events into the set of logical
Actions currently held. Edge detection (press begin / end) is not done
here; see talkie_engine.input.tracker.

Usage:
    for event in pygame.event.get():
        handler.process_event(event)

    if handler.is_held(Action.CONFIRM):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

import pygame

from talkie_engine.core.actions import (
    Action,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
    DEFAULT_GAMEPAD_HAT_BINDINGS,
)


class ActionSource(Protocol):
    """Anything that can answer whether a logical action is held right now."""

    def is_held(self, action: Action) -> bool:
        ...


@dataclass(frozen=True)
class ActionSnapshot:
    """
    Immutable held-action set.

    For headless hosts, scripted playback and tests:
        machine.tick(0.1, ActionSnapshot.of(Action.CONFIRM))
    """
    held: frozenset[Action] = frozenset()

    @classmethod
    def of(cls, *actions: Action) -> ActionSnapshot:
        return cls(frozenset(actions))

    def is_held(self, action: Action) -> bool:
        return action in self.held


NOTHING_HELD = ActionSnapshot()


class InputHandler:
    """
    Tracks which Actions are held, from pygame events.

    An action stays held while any key, button or hat direction bound to
    it is down.
    """

    def __init__(self):
        self._keys_down: set[int] = set()
        self._buttons_down: set[int] = set()
        self._hat_action: Action | None = None

        # action -> list of keys
        self._key_bindings = {a: list(k) for a, k in DEFAULT_KEY_BINDINGS.items()}
        self._gamepad_bindings = {a: list(b) for a, b in DEFAULT_GAMEPAD_BINDINGS.items()}
        self._hat_bindings = DEFAULT_GAMEPAD_HAT_BINDINGS.copy()

        self._gamepads: dict[int, pygame.joystick.JoystickType] = {}
        pygame.joystick.init()
        self._refresh_gamepads()

    def _refresh_gamepads(self) -> None:
        """Refresh connected gamepads."""
        self._gamepads.clear()
        for i in range(pygame.joystick.get_count()):
            joy = pygame.joystick.Joystick(i)
            joy.init()
            self._gamepads[joy.get_instance_id()] = joy

    # Queries

    def is_held(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        if self._hat_action is action:
            return True
        if any(k in self._keys_down for k in self._key_bindings.get(action, ())):
            return True
        return any(b in self._buttons_down for b in self._gamepad_bindings.get(action, ()))

    def held_actions(self) -> frozenset[Action]:
        return frozenset(a for a in Action if self.is_held(a))

    def snapshot(self) -> ActionSnapshot:
        """Freeze the current held state."""
        return ActionSnapshot(self.held_actions())

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)

    def unbind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.get(action)
        if keys and key in keys:
            keys.remove(key)

    def clear_bindings(self, action: Action) -> None:
        self._key_bindings[action] = []

    def get_bindings(self, action: Action) -> list[int]:
        return list(self._key_bindings.get(action, []))

    def set_bindings(self, bindings: dict[Action, Iterable[int]]) -> None:
        """Replace the keyboard bindings for the given actions."""
        for action, keys in bindings.items():
            self._key_bindings[action] = list(keys)

    # Event processing

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event."""
        if event.type == pygame.KEYDOWN:
            self._keys_down.add(event.key)

        elif event.type == pygame.KEYUP:
            self._keys_down.discard(event.key)

        elif event.type == pygame.JOYBUTTONDOWN:
            self._buttons_down.add(event.button)

        elif event.type == pygame.JOYBUTTONUP:
            self._buttons_down.discard(event.button)

        elif event.type == pygame.JOYHATMOTION:
            self._hat_action = self._hat_bindings.get(tuple(event.value))

        elif event.type in (pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED):
            self._refresh_gamepads()

    def release_all(self) -> None:
        """Forget everything held (e.g. when the window loses focus)."""
        self._keys_down.clear()
        self._buttons_down.clear()
        self._hat_action = None
