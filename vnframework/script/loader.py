"""
Script loader - decodes, validates and indexes dialogue scripts.

A script is only returned once it is statically consistent: every record
matches the schema, labels are unique and every jump or choice target
names a defined label. Playback code can therefore assume all authored
jumps resolve.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import jsonschema
import yaml
from pydantic import ValidationError

from vnengine.core.config import EngineConfig
from vnframework.script.errors import (
    DuplicateLabelError,
    MalformedScriptError,
    UnresolvedJumpError,
)
from vnframework.script.labels import LabelIndex, build_label_index
from vnframework.script.models import DialogueEntry
from vnframework.script.parser import ScriptParser
from vnframework.script.schema import ENTRY_SCHEMA


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Script:
    """A validated script: ordered entries plus their label index."""
    entries: tuple[DialogueEntry, ...]
    labels: LabelIndex
    source: str = "<records>"

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> DialogueEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[DialogueEntry]:
        return iter(self.entries)


class ScriptLoader:
    """
    Loads scripts from files, strings or already-decoded records.

    Handles:
    - Decoding JSON, YAML and the text authoring format
    - ``$name`` placeholder substitution from the engine config
    - Schema validation of each record
    - Label uniqueness and jump resolution
    """

    FORMATS: dict[str, str] = {
        ".json": "json",
        ".yaml": "yaml",
        ".yml": "yaml",
        ".script": "script",
    }

    PLACEHOLDER_PATTERN = re.compile(r'\$([A-Za-z_]\w*(?:\.[\w-]+)*)')

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        parser: Optional[ScriptParser] = None,
    ):
        self.config = config or EngineConfig()
        self.parser = parser or ScriptParser()
        self._placeholders = self.config.placeholders()

    # Entry points

    def load_file(self, path: str | Path) -> Script:
        """Load a script file, picking the decoder from its suffix."""
        path = Path(path)
        fmt = self.FORMATS.get(path.suffix.lower())
        if fmt is None:
            raise MalformedScriptError(f"unsupported script format: {path.suffix or path.name}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedScriptError(f"cannot read {path}: {e}") from e

        return self.load_string(content, fmt, source=str(path))

    def load_string(self, content: str, fmt: str, source: str = "<string>") -> Script:
        """
        Load a script from text.

        Args:
            content: Script text
            fmt: "json", "yaml" or "script"
            source: Name used in log messages
        """
        if fmt == "json":
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise MalformedScriptError(e.msg, line=e.lineno) from e
        elif fmt == "yaml":
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise MalformedScriptError(f"invalid YAML: {e}") from e
        elif fmt == "script":
            data = self.parser.parse_string(content)
        else:
            raise MalformedScriptError(f"unsupported script format: {fmt}")

        return self.load_records(self._unwrap(data), source=source)

    def load_records(self, records: Sequence[Any], source: str = "<records>") -> Script:
        """Validate decoded records and build the script."""
        if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
            raise MalformedScriptError(
                f"script must be a list of entries, got {type(records).__name__}"
            )

        entries = tuple(
            self._build_entry(index, self._substitute(record))
            for index, record in enumerate(records)
        )

        self._check_labels(entries)
        labels = build_label_index(entries)
        self._check_jumps(entries, labels)

        logger.info(f"Loaded script {source}: {len(entries)} entries, {len(labels)} labels")
        return Script(entries=entries, labels=labels, source=source)

    # Decoding helpers

    def _unwrap(self, data: Any) -> Any:
        """Accept either a bare list or a mapping with an ``entries`` list."""
        if isinstance(data, dict):
            if "entries" not in data:
                raise MalformedScriptError("script mapping has no 'entries' list")
            return data["entries"]
        if data is None:
            return []
        return data

    def _substitute(self, value: Any) -> Any:
        """Replace ``$name`` placeholders in every string of a record."""
        if isinstance(value, str):
            return self.PLACEHOLDER_PATTERN.sub(self._replace_placeholder, value)
        if isinstance(value, dict):
            return {k: self._substitute(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._substitute(v) for v in value]
        return value

    def _replace_placeholder(self, match: re.Match) -> str:
        # Try the longest dotted prefix first so "$title." or
        # "$characters.alice.png" still resolve.
        parts = match.group(1).split('.')
        for end in range(len(parts), 0, -1):
            key = '.'.join(parts[:end])
            if key in self._placeholders:
                rest = parts[end:]
                return self._placeholders[key] + ''.join(f".{p}" for p in rest)

        logger.debug(f"Unknown placeholder left as is: {match.group(0)}")
        return match.group(0)

    # Validation

    def _build_entry(self, index: int, record: Any) -> DialogueEntry:
        try:
            jsonschema.validate(instance=record, schema=ENTRY_SCHEMA)
        except jsonschema.ValidationError as e:
            field = '.'.join(str(p) for p in e.absolute_path) or None
            raise MalformedScriptError(e.message, index=index, field=field) from e

        # Nulls for the optional collection/flag fields mean "absent"
        cleaned = {
            k: v for k, v in record.items()
            if not (v is None and k in ("choices", "pause"))
        }

        try:
            return DialogueEntry.model_validate(cleaned)
        except ValidationError as e:
            raise MalformedScriptError(str(e), index=index) from e

    def _check_labels(self, entries: Sequence[DialogueEntry]) -> None:
        seen: dict[str, int] = {}
        for index, entry in enumerate(entries):
            if entry.label is None:
                continue
            if entry.label in seen:
                raise DuplicateLabelError(entry.label, index, seen[entry.label])
            seen[entry.label] = index

    def _check_jumps(self, entries: Sequence[DialogueEntry], labels: LabelIndex) -> None:
        for index, entry in enumerate(entries):
            for field, target in entry.targets():
                if target not in labels:
                    raise UnresolvedJumpError(target, index, field)
