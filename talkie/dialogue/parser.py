"""
Dialogue parser - turns script files into Dialogue documents.

The main format is TOML with one `[[section]]` table per passage group:

```
[[section]]
id = "gate"
speaker = "Guard"
passages = [
    '''
    Halt. Nobody passes
    without a writ.

    Do you have one?
    ''',
]
choices = [
    { label = "Show the writ", goto = "inside" },
    { label = "Turn back" },
]
```

Every passage string is reflowed: each physical line is trimmed, lines in
the same paragraph are joined with one space, and blank lines separate
paragraphs. Each paragraph becomes its own passage, so the example above
yields "Halt. Nobody passes without a writ." and "Do you have one?".

Files without a .toml suffix use the plain format: the whole file is
blank-line-separated passages in a single group with no speaker.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from talkie.dialogue.errors import ParseError
from talkie.dialogue.model import Choice, Dialogue, PassageGroup

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schemas" / "dialogue.schema.json"

_SECTION_KEYS = frozenset({"id", "speaker", "passages", "choices"})
_CHOICE_KEYS = frozenset({"label", "goto"})


def reflow(text: str) -> list[str]:
    """
    Normalize free text into paragraphs.

    Lines are trimmed, consecutive non-blank lines are joined with a
    single space, and any blank line ends a paragraph.

        reflow("  A\\n  B\\n\\n  C  \\n") == ["A B", "C"]
    """
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            current.append(line)
        elif current:
            paragraphs.append(" ".join(current))
            current = []
    if current:
        paragraphs.append(" ".join(current))
    return paragraphs


def _load_schema() -> dict[str, Any]:
    with open(SCHEMA_PATH, 'r', encoding='utf-8') as f:
        return json.load(f)


class DialogueParser:
    """
    Parses dialogue scripts.

    One parser can be reused for any number of documents; the JSON Schema
    is loaded once.
    """

    def __init__(self, schema: dict[str, Any] | None = None):
        self._schema = schema if schema is not None else _load_schema()
        self._validator = jsonschema.Draft202012Validator(self._schema)

    def parse_file(self, path: str | Path) -> Dialogue:
        """Parse a script file, choosing the grammar by suffix."""
        path = Path(path)
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise ParseError(f"cannot read file: {e.strerror}", path) from e

        try:
            if path.suffix.lower() == ".toml":
                dialogue = self.parse_bytes(data)
            else:
                dialogue = self.parse_plain(_decode(data))
        except ParseError as e:
            raise e.with_path(path) from e

        logger.info(
            "Loaded %s: %d groups, %d passages",
            path.name, len(dialogue), dialogue.passage_count,
        )
        return dialogue

    def parse_bytes(self, data: bytes) -> Dialogue:
        """Parse UTF-8 encoded TOML."""
        return self.parse_string(_decode(data))

    def parse_string(self, content: str) -> Dialogue:
        """Parse a TOML dialogue document."""
        try:
            raw = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ParseError(f"invalid TOML: {e}") from e

        error = best_match(self._validator.iter_errors(raw))
        if error is not None:
            where = "/".join(str(p) for p in error.absolute_path) or "document"
            raise ParseError(f"{where}: {error.message}")

        groups = tuple(
            self._parse_section(index, section)
            for index, section in enumerate(raw["section"])
        )
        self._check_ids(groups)
        return Dialogue(passage_groups=groups)

    def parse_plain(self, content: str) -> Dialogue:
        """Parse the plain format: blank-line-separated passages, one group."""
        passages = reflow(content)
        if not passages:
            raise ParseError("document has no passages")
        return Dialogue(passage_groups=(PassageGroup(passages=tuple(passages)),))

    def _parse_section(self, index: int, section: dict[str, Any]) -> PassageGroup:
        unknown = set(section) - _SECTION_KEYS
        if unknown:
            logger.warning("section %d: ignoring unknown keys %s", index, sorted(unknown))

        passages: list[str] = []
        for text in section["passages"]:
            passages.extend(reflow(text))
        if not passages:
            raise ParseError(f"section/{index}: passages contain no text")

        choices = None
        if "choices" in section:
            choices = tuple(self._parse_choice(index, c) for c in section["choices"])

        return PassageGroup(
            passages=tuple(passages),
            id=section.get("id"),
            speaker=section.get("speaker"),
            choices=choices,
        )

    def _parse_choice(self, section_index: int, data: dict[str, Any]) -> Choice:
        unknown = set(data) - _CHOICE_KEYS
        if unknown:
            logger.warning(
                "section %d: ignoring unknown choice keys %s",
                section_index, sorted(unknown),
            )
        return Choice(label=data["label"], goto=data.get("goto"))

    def _check_ids(self, groups: tuple[PassageGroup, ...]) -> None:
        seen: set[str] = set()
        for index, group in enumerate(groups):
            if group.id is None:
                continue
            if group.id in seen:
                logger.warning(
                    "section %d: duplicate id %r, jumps go to the first one",
                    index, group.id,
                )
            seen.add(group.id)


def _decode(data: bytes) -> str:
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ParseError(f"not valid UTF-8: {e.reason} at byte {e.start}") from e


_default_parser: DialogueParser | None = None


def parse(source: bytes | str) -> Dialogue:
    """
    Parse a TOML dialogue document.

    Raises:
        ParseError: If the document is malformed
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = DialogueParser()
    if isinstance(source, bytes):
        return _default_parser.parse_bytes(source)
    return _default_parser.parse_string(source)


def load_dialogue(path: str | Path) -> Dialogue:
    """Parse a dialogue file (TOML or plain format by suffix)."""
    return DialogueParser().parse_file(path)
