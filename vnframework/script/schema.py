"""
JSON schema for script records.

Structural validation only; label uniqueness and jump resolution are
checked by the loader after the schema passes.
"""

from typing import Any

_OPTIONAL_STRING = {"type": ["string", "null"]}

ENTRY_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "DialogueEntry",
    "type": "object",
    "required": ["speaker", "text", "portrait"],
    "additionalProperties": False,
    "properties": {
        "speaker": {"type": "string"},
        "text": {"type": "string"},
        "portrait": {"type": "string"},
        "label": {"type": ["string", "null"], "minLength": 1},
        "jump": {"type": ["string", "null"], "minLength": 1},
        "widget": {
            "type": ["object", "null"],
            "required": ["name"],
            "additionalProperties": False,
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "visible": {"type": "boolean"},
            },
        },
        "choices": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "required": ["text", "goto"],
                "additionalProperties": False,
                "properties": {
                    "text": {"type": "string"},
                    "goto": {"type": "string", "minLength": 1},
                },
            },
        },
        "background": _OPTIONAL_STRING,
        "bgm": _OPTIONAL_STRING,
        "pause": {"type": ["boolean", "null"]},
    },
}
