import pytest
from talkie.dialogue.errors import GotoError, UnknownLabelError, DialogueError
from talkie.dialogue.goto import GotoRequest, resolve_label
from talkie.dialogue.model import PassageGroup, Dialogue

@pytest.fixture
def dialogue():
    return Dialogue((
        PassageGroup(("first",), id="a"),
        PassageGroup(("middle",)),
        PassageGroup(("second",), id="b"),
        PassageGroup(("shadow",), id="b"),
    ))

def test_resolve_label(dialogue):
    assert resolve_label(dialogue, "a") == 0
    assert resolve_label(dialogue, "b") == 2

def test_first_duplicate_wins(dialogue):
    assert resolve_label(dialogue, "b") != 3

def test_unknown_label(dialogue):
    with pytest.raises(UnknownLabelError) as exc:
        resolve_label(dialogue, "nonexistent")

    assert exc.value.label == "nonexistent"
    assert "nonexistent" in str(exc.value)
    assert isinstance(exc.value, GotoError)
    assert isinstance(exc.value, DialogueError)

def test_goto_request():
    assert GotoRequest("b").is_jump
    assert not GotoRequest().is_jump
    assert GotoRequest("b") == GotoRequest("b")
