"""
Talkie systems - logic that mutates playback components.
"""

from talkie.systems.playback import (
    PlaybackMachine,
    PlaybackState,
    DialogueEvent,
    Billboard,
)

__all__ = [
    "PlaybackMachine",
    "PlaybackState",
    "DialogueEvent",
    "Billboard",
]
