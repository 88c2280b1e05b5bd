import pytest
from types import SimpleNamespace
import pygame

from talkie_engine.input.handler import InputHandler, ActionSnapshot, NOTHING_HELD
from talkie_engine.core.actions import Action

def key(event_type, k):
    return SimpleNamespace(type=event_type, key=k)

def test_key_press_and_release():
    handler = InputHandler()

    handler.process_event(key(pygame.KEYDOWN, pygame.K_SPACE))
    assert handler.is_held(Action.CONFIRM)
    assert not handler.is_held(Action.UP)

    handler.process_event(key(pygame.KEYUP, pygame.K_SPACE))
    assert not handler.is_held(Action.CONFIRM)

def test_any_bound_key_holds_action():
    handler = InputHandler()

    handler.process_event(key(pygame.KEYDOWN, pygame.K_SPACE))
    handler.process_event(key(pygame.KEYDOWN, pygame.K_RETURN))
    handler.process_event(key(pygame.KEYUP, pygame.K_SPACE))

    assert handler.is_held(Action.CONFIRM)

def test_arrow_and_wasd():
    handler = InputHandler()

    handler.process_event(key(pygame.KEYDOWN, pygame.K_w))
    handler.process_event(key(pygame.KEYDOWN, pygame.K_DOWN))

    assert handler.held_actions() == frozenset({Action.UP, Action.DOWN})

def test_gamepad_button_and_hat():
    handler = InputHandler()

    handler.process_event(SimpleNamespace(type=pygame.JOYBUTTONDOWN, button=0))
    handler.process_event(SimpleNamespace(type=pygame.JOYHATMOTION, value=(0, 1)))
    assert handler.held_actions() == frozenset({Action.CONFIRM, Action.UP})

    handler.process_event(SimpleNamespace(type=pygame.JOYBUTTONUP, button=0))
    handler.process_event(SimpleNamespace(type=pygame.JOYHATMOTION, value=(0, 0)))
    assert handler.held_actions() == frozenset()

def test_rebinding():
    handler = InputHandler()
    handler.clear_bindings(Action.CONFIRM)
    handler.bind_key(Action.CONFIRM, pygame.K_z)
    handler.bind_key(Action.CONFIRM, pygame.K_z)

    assert handler.get_bindings(Action.CONFIRM) == [pygame.K_z]

    handler.process_event(key(pygame.KEYDOWN, pygame.K_SPACE))
    assert not handler.is_held(Action.CONFIRM)

    handler.unbind_key(Action.CONFIRM, pygame.K_z)
    handler.set_bindings({Action.UP: [pygame.K_k]})
    assert handler.get_bindings(Action.CONFIRM) == []
    assert handler.get_bindings(Action.UP) == [pygame.K_k]

def test_release_all_and_snapshot():
    handler = InputHandler()
    handler.process_event(key(pygame.KEYDOWN, pygame.K_SPACE))

    snapshot = handler.snapshot()
    handler.release_all()

    assert snapshot.is_held(Action.CONFIRM)
    assert not handler.is_held(Action.CONFIRM)

def test_action_snapshot():
    held = ActionSnapshot.of(Action.UP)
    assert held.is_held(Action.UP)
    assert not held.is_held(Action.CONFIRM)
    assert not any(NOTHING_HELD.is_held(a) for a in Action)
