"""
Dialogue errors.

ParseError is fatal to starting a session; GotoError is fatal to the
running one. Neither is retried.
"""

from __future__ import annotations

from pathlib import Path


class DialogueError(Exception):
    """Base class for dialogue failures."""


class ParseError(DialogueError):
    """The document is malformed and cannot become a Dialogue."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message

    def with_path(self, path: str | Path) -> ParseError:
        return ParseError(self.message, path)


class GotoError(DialogueError):
    """A jump could not be carried out."""


class UnknownLabelError(GotoError):
    """No passage group has the requested id."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"no passage group with id {label!r}")
