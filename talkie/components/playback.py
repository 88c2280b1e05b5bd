"""
Playback components - play-head position and choice menu state.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from talkie_engine.core.component import Component
from talkie_engine.core.config import DEFAULT_GLYPHS_PER_SEC
from talkie.dialogue.model import Choice


class PlaybackCursor(Component):
    """
    Where playback is in the document and how far the current passage
    has been revealed.

    Attributes:
        passage_group_index: Group being shown
        passage_index: Passage within that group
        revealed_glyph_count: Length of the visible prefix
        carryover_seconds: Time left over from the last reveal, or None
            when starting a passage from scratch
        fast_forward: Whether the last reveal ran at the boosted rate
        glyphs_per_sec: Base reveal rate
    """
    passage_group_index: int = Field(0, ge=0)
    passage_index: int = Field(0, ge=0)
    revealed_glyph_count: int = Field(0, ge=0)
    carryover_seconds: Optional[float] = Field(None, ge=0)
    fast_forward: bool = False
    glyphs_per_sec: float = Field(DEFAULT_GLYPHS_PER_SEC, gt=0)

    @property
    def position(self) -> tuple[int, int]:
        return (self.passage_group_index, self.passage_index)

    def move_to(self, passage_group_index: int, passage_index: int = 0) -> None:
        """Point at a new passage and start its reveal from scratch."""
        self.passage_group_index = passage_group_index
        self.passage_index = passage_index
        self.reset_reveal()

    def reset_reveal(self) -> None:
        self.revealed_glyph_count = 0
        self.carryover_seconds = None


class ChoiceMenu(Component):
    """
    The open choice menu.

    Attributes:
        choices: Options carried over from the group that just finished
        selected_index: Highlighted option, clamped to the list (no wrap)
    """
    choices: tuple[Choice, ...]
    selected_index: int = Field(0, ge=0)

    @field_validator('choices')
    @classmethod
    def _not_empty(cls, value: tuple[Choice, ...]) -> tuple[Choice, ...]:
        if not value:
            raise ValueError("a choice menu needs at least one choice")
        return value

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(c.label for c in self.choices)

    @property
    def selected(self) -> Choice:
        return self.choices[self.selected_index]

    def select_prev(self) -> None:
        if self.selected_index > 0:
            self.selected_index -= 1

    def select_next(self) -> None:
        if self.selected_index < len(self.choices) - 1:
            self.selected_index += 1
