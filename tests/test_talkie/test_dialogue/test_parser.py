import logging
import pytest
from talkie.dialogue.errors import ParseError
from talkie.dialogue.model import Choice
from talkie.dialogue.parser import DialogueParser, parse, load_dialogue, reflow

GATE = """
[[section]]
id = "gate"
speaker = "Guard"
passages = [
    '''
    Halt. Nobody passes
    without a writ.

    Do you have one?
    ''',
    "Well?",
]
choices = [
    { label = "Show the writ", goto = "inside" },
    { label = "Turn back" },
]

[[section]]
id = "inside"
passages = ["The gate swings open."]
"""

# Reflow

@pytest.mark.parametrize("line", ["abc", "Hello, world.", "a  b"])
def test_reflow_single_line_unchanged(line):
    assert reflow(line) == [line]

def test_reflow_paragraphs():
    assert reflow("  A\n  B\n\n  C  \n") == ["A B", "C"]

def test_reflow_lines_no_blanks():
    assert reflow("\n    abc\n    def\n    ") == ["abc def"]

def test_reflow_collapses_runs_of_blank_lines():
    assert reflow("abc\n\n\n   \ndef\r\nghi") == ["abc", "def ghi"]

def test_reflow_empty():
    assert reflow("") == []
    assert reflow("  \n\n ") == []

# TOML format

def test_parse_sections():
    dialogue = parse(GATE)

    assert len(dialogue) == 2
    gate = dialogue[0]
    assert gate.id == "gate"
    assert gate.speaker == "Guard"
    assert gate.passages == (
        "Halt. Nobody passes without a writ.",
        "Do you have one?",
        "Well?",
    )
    assert gate.choices == (Choice("Show the writ", "inside"), Choice("Turn back"))

    inside = dialogue[1]
    assert inside.speaker is None
    assert inside.choices is None

def test_parse_bytes():
    dialogue = parse(GATE.encode("utf-8"))
    assert dialogue.group_ids() == ["gate", "inside"]

def test_empty_choices_kept_as_empty():
    dialogue = parse('[[section]]\npassages = ["Hi"]\nchoices = []\n')
    assert dialogue[0].choices == ()
    assert not dialogue[0].has_choices

@pytest.mark.parametrize("source,message", [
    ("[[section]\n", "invalid TOML"),
    ("title = 'x'\n", "section"),
    ("section = []\n", "section"),
    ('[[section]]\nspeaker = "A"\n', "passages"),
    ('[[section]]\npassages = []\n', "section/0/passages"),
    ('[[section]]\npassages = [3]\n', "section/0/passages/0"),
    ('[[section]]\npassages = ["", "  \\n "]\n', "passages contain no text"),
    ('[[section]]\npassages = ["a"]\nchoices = [{ goto = "x" }]\n', "label"),
    ('[[section]]\nid = ""\npassages = ["a"]\n', "section/0/id"),
])
def test_malformed_documents(source, message):
    with pytest.raises(ParseError, match=message):
        parse(source)

def test_invalid_utf8():
    with pytest.raises(ParseError, match="UTF-8"):
        parse(b"\xff\xfe[[section]]")

def test_unknown_keys_warn(caplog):
    source = '[[section]]\nmood = "grim"\npassages = ["a"]\nchoices = [{ label = "x", colour = "red" }]\n'
    with caplog.at_level(logging.WARNING):
        dialogue = parse(source)

    assert dialogue[0].passages == ("a",)
    assert "mood" in caplog.text
    assert "colour" in caplog.text

def test_duplicate_ids_warn(caplog):
    source = '[[section]]\nid = "a"\npassages = ["one"]\n[[section]]\nid = "a"\npassages = ["two"]\n'
    with caplog.at_level(logging.WARNING):
        dialogue = parse(source)

    assert dialogue.find_group("a") == 0
    assert "duplicate id" in caplog.text

def test_custom_schema():
    schema = {"type": "object", "required": ["section", "version"]}
    parser = DialogueParser(schema)
    with pytest.raises(ParseError, match="version"):
        parser.parse_string('[[section]]\npassages = ["a"]\n')

# Files

def test_parse_toml_file(tmp_path):
    path = tmp_path / "gate.toml"
    path.write_text(GATE, encoding="utf-8")

    dialogue = load_dialogue(path)

    assert dialogue.passage_count == 4

def test_parse_plain_file(tmp_path):
    path = tmp_path / "intro.txt"
    path.write_text("  It was late.\n  The fire was out.\n\nSomeone knocked.\n", encoding="utf-8")

    dialogue = load_dialogue(path)

    assert len(dialogue) == 1
    assert dialogue[0].passages == ("It was late. The fire was out.", "Someone knocked.")
    assert dialogue[0].id is None
    assert dialogue[0].choices is None

def test_empty_plain_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n", encoding="utf-8")
    with pytest.raises(ParseError, match="no passages"):
        load_dialogue(path)

def test_file_errors_carry_path(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("section = 1\n", encoding="utf-8")

    with pytest.raises(ParseError) as exc:
        load_dialogue(path)

    assert exc.value.path == path
    assert str(exc.value).startswith(str(path))

def test_missing_file(tmp_path):
    with pytest.raises(ParseError, match="cannot read file"):
        load_dialogue(tmp_path / "nope.toml")

def test_sample_dialogue(sample_dialogue):
    assert sample_dialogue.group_ids() == ["start", "crossing"]
    assert sample_dialogue[0].passages[0] == "The river is high tonight. Most folk wait for morning."
    assert len(sample_dialogue[0].passages) == 3
    assert sample_dialogue.unresolved_gotos() == []
