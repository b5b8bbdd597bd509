"""
Script module - loading and validating dialogue scripts.

Provides:
- Immutable dialogue entry models
- Text authoring format parser
- JSON/YAML/text loading with schema validation
- Label index construction
"""

from vnframework.script.models import DialogueEntry, Widget, Choice
from vnframework.script.errors import (
    LoadError,
    MalformedScriptError,
    DuplicateLabelError,
    UnresolvedJumpError,
    UnknownLabelError,
)
from vnframework.script.labels import LabelIndex, build_label_index
from vnframework.script.parser import ScriptParser
from vnframework.script.loader import Script, ScriptLoader

__all__ = [
    "DialogueEntry",
    "Widget",
    "Choice",
    "LoadError",
    "MalformedScriptError",
    "DuplicateLabelError",
    "UnresolvedJumpError",
    "UnknownLabelError",
    "LabelIndex",
    "build_label_index",
    "ScriptParser",
    "Script",
    "ScriptLoader",
]
