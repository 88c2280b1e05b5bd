"""
Talkie components - data-only playback state.

Components are pydantic models; the playback system is the only writer.
"""

from talkie.components.playback import PlaybackCursor, ChoiceMenu

__all__ = [
    "PlaybackCursor",
    "ChoiceMenu",
]
