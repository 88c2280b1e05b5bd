import pytest
from talkie_engine.core.actions import Action
from talkie_engine.input.handler import ActionSnapshot, NOTHING_HELD
from talkie_engine.input.tracker import ActionTracker, ActionTrackerSet, EdgeEvents, NO_EDGES

def test_press_sequence():
    tracker = ActionTracker(Action.CONFIRM)

    edges = [tracker.update(held) for held in (False, True, True, False)]

    assert edges == [
        NO_EDGES,
        EdgeEvents(press_begin=True, pressed=True),
        EdgeEvents(pressed=True),
        EdgeEvents(press_end=True),
    ]

@pytest.mark.parametrize("was_held,is_held,expected", [
    (False, True, (True, True, False)),
    (True, True, (False, True, False)),
    (True, False, (False, False, True)),
    (False, False, (False, False, False)),
])
def test_edge_table(was_held, is_held, expected):
    tracker = ActionTracker(Action.UP)
    tracker.update(was_held)
    tracker.update(is_held)

    assert (tracker.press_begin, tracker.pressed, tracker.press_end) == expected

def test_press_begin_needs_release_in_between():
    tracker = ActionTracker(Action.CONFIRM)
    begins = [tracker.update(True).press_begin for _ in range(5)]
    assert begins == [True, False, False, False, False]

def test_edges_are_never_both_begin_and_end():
    import random
    rng = random.Random(7)
    tracker = ActionTracker(Action.DOWN)
    for _ in range(200):
        held = rng.random() < 0.5
        edges = tracker.update(held)
        assert edges.pressed == held
        assert not (edges.press_begin and edges.press_end)

def test_reset():
    tracker = ActionTracker(Action.CONFIRM)
    tracker.update(True)
    tracker.reset()

    assert tracker.edges == NO_EDGES
    assert tracker.update(True).press_begin

def test_tracker_logs_confirm_edges(caplog):
    import logging
    caplog.set_level(logging.DEBUG, logger="talkie_engine.input.tracker")
    tracker = ActionTracker(Action.CONFIRM)

    tracker.update(True)
    tracker.update(False)

    assert "confirm=down" in caplog.text
    assert "confirm=up" in caplog.text

def test_tracker_set():
    trackers = ActionTrackerSet(Action)

    edges = trackers.update(ActionSnapshot.of(Action.CONFIRM, Action.DOWN))
    assert edges[Action.CONFIRM].press_begin
    assert trackers.press_begin(Action.DOWN)
    assert not trackers.pressed(Action.UP)
    assert Action.UP in trackers

    trackers.update(NOTHING_HELD)
    assert trackers.press_end(Action.CONFIRM)
    assert trackers.edges(Action.DOWN) == EdgeEvents(press_end=True)
    assert trackers[Action.CONFIRM].action is Action.CONFIRM

    trackers.reset()
    assert trackers.edges(Action.CONFIRM) == NO_EDGES

def test_tracker_set_subset():
    trackers = ActionTrackerSet([Action.CONFIRM])
    trackers.update(ActionSnapshot.of(Action.UP))
    assert Action.UP not in trackers
    with pytest.raises(KeyError):
        trackers.pressed(Action.UP)
