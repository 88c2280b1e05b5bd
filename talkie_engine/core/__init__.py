"""
Core engine module.

Exports:
- TalkieConfig: Playback and host configuration
- FixedTimestep: Variable frame time to fixed ticks
- Component: Pydantic base for data-only state
- EventBus, Event: Event system
- Action: Logical input actions

The pygame window loop lives in talkie_engine.core.host and is imported
from there directly.
"""

from talkie_engine.core.actions import Action
from talkie_engine.core.component import Component
from talkie_engine.core.config import TalkieConfig
from talkie_engine.core.events import EventBus, Event
from talkie_engine.core.timestep import FixedTimestep

__all__ = [
    "Action",
    "Component",
    "TalkieConfig",
    "EventBus",
    "Event",
    "FixedTimestep",
]
