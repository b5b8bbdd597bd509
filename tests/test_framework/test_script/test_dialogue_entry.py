import pytest
from pydantic import ValidationError
from vnframework.script import Choice, DialogueEntry, Widget

def test_defaults():
    entry = DialogueEntry(speaker="alice", text="Hi.", portrait="alice")

    assert entry.label is None
    assert entry.jump is None
    assert entry.widget is None
    assert entry.choices == ()
    assert entry.pause is False
    assert not entry.has_choices
    assert entry.targets() == []

def test_targets():
    entry = DialogueEntry(
        speaker="a", text="t", portrait="p", jump="end",
        choices=[Choice(text="x", goto="left"), Choice(text="y", goto="right")],
    )

    assert entry.has_choices
    assert entry.targets() == [
        ("jump", "end"),
        ("choices[0].goto", "left"),
        ("choices[1].goto", "right"),
    ]

def test_frozen():
    entry = DialogueEntry(speaker="a", text="t", portrait="p", widget=Widget(name="w"))

    with pytest.raises(ValidationError):
        entry.text = "other"
    with pytest.raises(ValidationError):
        entry.widget.visible = False

def test_extra_fields_rejected():
    with pytest.raises(ValidationError):
        DialogueEntry(speaker="a", text="t", portrait="p", mood="sad")
