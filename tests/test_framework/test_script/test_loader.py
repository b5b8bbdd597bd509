import json
import pytest
from pathlib import Path
from vnframework.script import (
    DialogueEntry,
    DuplicateLabelError,
    LoadError,
    MalformedScriptError,
    ScriptLoader,
    UnresolvedJumpError,
    Widget,
)

ASSETS = Path(__file__).resolve().parents[3] / "assets"

def test_load_valid_records(loader, jump_records):
    script = loader.load_records(jump_records)

    assert len(script) == 3
    assert script[1].label == "L2"
    assert script[2].jump == "L2"
    assert dict(script.labels) == {"L2": 1}

def test_label_index_contains_exactly_defined_labels(loader, branch_records):
    script = loader.load_records(branch_records)

    defined = {e.label for e in script if e.label is not None}
    assert set(script.labels) == defined
    for entry in script:
        for _, target in entry.targets():
            assert target in script.labels

def test_entries_are_immutable(loader, jump_records):
    script = loader.load_records(jump_records)

    with pytest.raises(Exception):
        script[0].text = "changed"

def test_widget_is_parsed(loader):
    script = loader.load_records([
        {"speaker": "a", "text": "t", "portrait": "p", "widget": {"name": "lantern"}},
    ])

    assert script[0].widget == Widget(name="lantern", visible=True)

def test_null_optional_fields(loader):
    script = loader.load_records([
        {"speaker": "a", "text": "t", "portrait": "p", "label": None, "jump": None,
         "widget": None, "choices": None, "pause": None},
    ])

    entry = script[0]
    assert entry.label is None
    assert entry.choices == ()
    assert entry.pause is False

def test_empty_script(loader):
    script = loader.load_records([])

    assert len(script) == 0
    assert len(script.labels) == 0

# Malformed

def test_missing_required_field(loader):
    with pytest.raises(MalformedScriptError) as exc:
        loader.load_records([
            {"speaker": "a", "text": "t", "portrait": "p"},
            {"speaker": "b", "portrait": "p"},
        ])

    assert exc.value.index == 1
    assert "text" in str(exc.value)

def test_wrong_field_type(loader):
    with pytest.raises(MalformedScriptError) as exc:
        loader.load_records([{"speaker": "a", "text": 3, "portrait": "p"}])

    assert exc.value.index == 0
    assert exc.value.field == "text"

def test_unknown_field(loader):
    with pytest.raises(MalformedScriptError):
        loader.load_records([{"speaker": "a", "text": "t", "portrait": "p", "colour": "red"}])

def test_record_not_an_object(loader):
    with pytest.raises(MalformedScriptError) as exc:
        loader.load_records(["just a string"])

    assert exc.value.index == 0

def test_script_not_a_list(loader):
    with pytest.raises(MalformedScriptError):
        loader.load_records("speaker: a")

def test_bad_choice_shape(loader):
    with pytest.raises(MalformedScriptError) as exc:
        loader.load_records([
            {"speaker": "a", "text": "t", "portrait": "p", "choices": [{"text": "go"}]},
        ])

    assert exc.value.field == "choices.0"

# Referential integrity

def test_duplicate_label(loader):
    with pytest.raises(DuplicateLabelError) as exc:
        loader.load_records([
            {"speaker": "a", "text": "t", "portrait": "p", "label": "x"},
            {"speaker": "b", "text": "t", "portrait": "p"},
            {"speaker": "c", "text": "t", "portrait": "p", "label": "x"},
        ])

    assert exc.value.label == "x"
    assert exc.value.index == 2
    assert exc.value.first_index == 0
    assert "'x'" in str(exc.value)

def test_unresolved_jump(loader):
    with pytest.raises(UnresolvedJumpError) as exc:
        loader.load_records([
            {"speaker": "a", "text": "t", "portrait": "p", "jump": "nowhere"},
        ])

    assert exc.value.label == "nowhere"
    assert exc.value.index == 0
    assert exc.value.field == "jump"

def test_unresolved_choice_target(loader):
    with pytest.raises(UnresolvedJumpError) as exc:
        loader.load_records([
            {"speaker": "a", "text": "t", "portrait": "p", "label": "here",
             "choices": [{"text": "ok", "goto": "here"}, {"text": "bad", "goto": "gone"}]},
        ])

    assert exc.value.label == "gone"
    assert exc.value.field == "choices[1].goto"

def test_load_errors_share_a_base(loader):
    with pytest.raises(LoadError):
        loader.load_records([{"speaker": "a", "text": "t", "portrait": "p", "jump": "x"}])

# Placeholders

def test_placeholder_substitution(config):
    loader = ScriptLoader(config)
    script = loader.load_records([
        {"speaker": "a", "text": "Hello $player_name, welcome to $title.", "portrait": "$characters.alice",
         "widget": {"name": "$widgets.lantern"}},
    ])

    entry = script[0]
    assert entry.text == "Hello Alex, welcome to Test Hall."
    assert entry.portrait == "portraits/alice.png"
    assert entry.widget.name == "widgets/lantern.swf"

def test_unknown_placeholder_is_kept(config):
    script = ScriptLoader(config).load_records([
        {"speaker": "a", "text": "costs $price", "portrait": "p"},
    ])

    assert script[0].text == "costs $price"

def test_placeholder_with_suffix(config):
    script = ScriptLoader(config).load_records([
        {"speaker": "a", "text": "t", "portrait": "$characters.alice.bak"},
    ])

    assert script[0].portrait == "portraits/alice.png.bak"

# Encodings

def test_load_json_file(tmp_path, loader, jump_records):
    path = tmp_path / "script.json"
    path.write_text(json.dumps(jump_records), encoding="utf-8")

    script = loader.load_file(path)

    assert len(script) == 3
    assert script.source == str(path)

def test_load_yaml_mapping(tmp_path, loader):
    path = tmp_path / "script.yml"
    path.write_text(
        "entries:\n"
        "  - speaker: a\n"
        "    text: hi\n"
        "    portrait: none\n"
        "    label: start\n"
        "  - speaker: b\n"
        "    text: again\n"
        "    portrait: none\n"
        "    jump: start\n",
        encoding="utf-8",
    )

    script = loader.load_file(path)

    assert [e.speaker for e in script] == ["a", "b"]
    assert script.labels["start"] == 0

def test_invalid_json(loader):
    with pytest.raises(MalformedScriptError) as exc:
        loader.load_string('[{"speaker": ', "json")

    assert exc.value.line == 1

def test_invalid_yaml(loader):
    with pytest.raises(MalformedScriptError):
        loader.load_string("- speaker: [a\n", "yaml")

def test_mapping_without_entries(loader):
    with pytest.raises(MalformedScriptError):
        loader.load_string("title: nothing here\n", "yaml")

def test_unsupported_suffix(tmp_path, loader):
    path = tmp_path / "script.txt"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(MalformedScriptError):
        loader.load_file(path)

def test_missing_file(tmp_path, loader):
    with pytest.raises(MalformedScriptError):
        loader.load_file(tmp_path / "missing.json")

def test_shipped_yaml_and_text_scripts_agree(config):
    from vnengine.core.config import load_config

    loader = ScriptLoader(load_config(ASSETS / "main.yaml"))
    from_yaml = loader.load_file(ASSETS / "dialogues.yaml")
    from_text = loader.load_file(ASSETS / "prologue.script")

    assert len(from_yaml) == len(from_text) == 6
    assert dict(from_yaml.labels) == dict(from_text.labels)
    assert from_yaml[0].text == "Welcome to The Raven Hall."
    assert from_text[0].text == from_yaml[0].text
    assert from_yaml[2].has_choices and from_text[2].has_choices
    assert from_text[4].pause
    assert isinstance(from_text[1], DialogueEntry)
