"""
Choice/goto resolution.

A GotoRequest is produced when the player confirms a choice (or the host
asks for a jump) and is consumed exactly once when playback resumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from talkie.dialogue.errors import UnknownLabelError
from talkie.dialogue.model import Dialogue


@dataclass(frozen=True)
class GotoRequest:
    """
    A pending jump.

    label=None means "carry on with the next passage", which is where the
    cursor already points once a group's choices are shown.
    """
    label: Optional[str] = None

    @property
    def is_jump(self) -> bool:
        return self.label is not None


def resolve_label(dialogue: Dialogue, label: str) -> int:
    """
    Find the passage group a label refers to.

    Returns:
        Index of the first group whose id equals label

    Raises:
        UnknownLabelError: If no group has that id
    """
    index = dialogue.find_group(label)
    if index is None:
        raise UnknownLabelError(label)
    return index
