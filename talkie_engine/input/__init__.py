"""Input handling module."""

from talkie_engine.input.handler import (
    InputHandler,
    ActionSource,
    ActionSnapshot,
    NOTHING_HELD,
)
from talkie_engine.input.tracker import (
    ActionTracker,
    ActionTrackerSet,
    EdgeEvents,
    NO_EDGES,
)

__all__ = [
    "InputHandler",
    "ActionSource",
    "ActionSnapshot",
    "NOTHING_HELD",
    "ActionTracker",
    "ActionTrackerSet",
    "EdgeEvents",
    "NO_EDGES",
]
