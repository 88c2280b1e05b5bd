"""
Dialogue document model.

A Dialogue is an ordered list of passage groups. Each group is one
speaker's turn: one or more passages shown in order, optionally followed
by a menu of choices that can jump to another group by id.

Documents are immutable once parsed and shared read-only by the playback
machine for the whole session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class Choice:
    """A menu option shown after a group's last passage."""
    label: str
    goto: Optional[str] = None  # Group id to jump to; None continues forward


@dataclass(frozen=True)
class PassageGroup:
    """
    A speaker turn.

    Attributes:
        passages: Reflowed text blocks, never empty
        id: Jump target for choices (optional)
        speaker: Name shown on the speaker tab (optional)
        choices: Menu offered once the last passage is revealed. An empty
            tuple behaves exactly like no choices at all.
    """
    passages: tuple[str, ...]
    id: Optional[str] = None
    speaker: Optional[str] = None
    choices: Optional[tuple[Choice, ...]] = None

    def __post_init__(self):
        if not self.passages:
            raise ValueError("a passage group needs at least one passage")

    @property
    def has_choices(self) -> bool:
        return bool(self.choices)

    @property
    def last_passage_index(self) -> int:
        return len(self.passages) - 1


@dataclass(frozen=True)
class Dialogue:
    """A complete script: passage groups in playback order."""
    passage_groups: tuple[PassageGroup, ...]

    def __post_init__(self):
        if not self.passage_groups:
            raise ValueError("a dialogue needs at least one passage group")

    def __len__(self) -> int:
        return len(self.passage_groups)

    def __iter__(self) -> Iterator[PassageGroup]:
        return iter(self.passage_groups)

    def __getitem__(self, index: int) -> PassageGroup:
        return self.passage_groups[index]

    @property
    def passage_count(self) -> int:
        return sum(len(g.passages) for g in self.passage_groups)

    @property
    def last_group_index(self) -> int:
        return len(self.passage_groups) - 1

    def find_group(self, label: str) -> Optional[int]:
        """Index of the first group whose id is label, or None."""
        for index, group in enumerate(self.passage_groups):
            if group.id == label:
                return index
        return None

    def group_ids(self) -> list[str]:
        return [g.id for g in self.passage_groups if g.id is not None]

    def unresolved_gotos(self) -> list[str]:
        """Choice targets that no group declares, in document order."""
        known = set(self.group_ids())
        missing: list[str] = []
        for group in self.passage_groups:
            for choice in group.choices or ():
                if choice.goto is not None and choice.goto not in known:
                    if choice.goto not in missing:
                        missing.append(choice.goto)
        return missing
