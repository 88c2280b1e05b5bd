"""
Dialogue module - the script document and the pure pieces of playback.

Provides:
- Document model (passage groups, passages, choices)
- TOML and plain-text parsing with text reflow
- Glyph reveal timing
- Goto label resolution
"""

from talkie.dialogue.model import Choice, PassageGroup, Dialogue
from talkie.dialogue.parser import DialogueParser, parse, load_dialogue, reflow
from talkie.dialogue.reveal import calc_glyphs_to_reveal, effective_rate
from talkie.dialogue.goto import GotoRequest, resolve_label
from talkie.dialogue.errors import (
    DialogueError,
    ParseError,
    GotoError,
    UnknownLabelError,
)

__all__ = [
    "Choice",
    "PassageGroup",
    "Dialogue",
    "DialogueParser",
    "parse",
    "load_dialogue",
    "reflow",
    "calc_glyphs_to_reveal",
    "effective_rate",
    "GotoRequest",
    "resolve_label",
    "DialogueError",
    "ParseError",
    "GotoError",
    "UnknownLabelError",
]
