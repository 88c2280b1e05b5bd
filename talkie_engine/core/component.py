"""
Component base class for data-only state.

Components hold the mutable state a tick function works on (play-head
position, choice cursor) and nothing else. Pydantic gives them:
- Validation on construction and on every assignment
- Cheap deep copies for snapshots
- Readable reprs when logging

Usage:
    class PlayHead(Component):
        head: int = Field(0, ge=0)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Assigning an invalid value (e.g. a negative index) raises
    pydantic.ValidationError immediately instead of corrupting state
    that the next tick would read.
    """

    model_config = ConfigDict(
        # Allow arbitrary types (dialogue model dataclasses)
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    def clone(self) -> Component:
        """Create a deep copy of this component."""
        return self.model_copy(deep=True)
