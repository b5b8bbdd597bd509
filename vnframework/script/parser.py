"""
Script parser - converts the text authoring format to script records.

Supports a simple line-based format:

```
// comment
# intro
@alice [alice_smile]
Some dialogue text that can span
multiple lines.
~ lantern
bg: hall
bgm: theme

>> Open the door -> door
>> Stay put -> wait

---

@none
Narration without a speaker.
-> intro
```

A ``# name`` line labels the entry that follows it. ``@speaker
[portrait]`` starts an entry; a missing portrait becomes ``"none"``.
A text line that would otherwise read as a directive can be escaped
with a leading backslash.

The parser only checks the layout of the file. Label uniqueness and jump
targets are checked by ScriptLoader.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from vnframework.script.errors import MalformedScriptError


class ScriptParser:
    """
    Parses script text into a list of raw entry records.
    """

    # Regex patterns
    LABEL_PATTERN = re.compile(r'^#\s*([\w.-]+)\s*$')
    SPEAKER_PATTERN = re.compile(r'^@\s*([^\[\]]+?)\s*(?:\[\s*([^\]]+?)\s*\])?\s*$')
    CHOICE_PATTERN = re.compile(r'^>>\s*(.+?)\s*->\s*([\w.-]+)\s*$')
    JUMP_PATTERN = re.compile(r'^->\s*([\w.-]+)\s*$')
    WIDGET_PATTERN = re.compile(r'^~\s*([\w.$-]+)(?:\s+(hidden|visible))?\s*$')
    ASSET_PATTERN = re.compile(r'^(bg|bgm):\s*(\S.*?)\s*$')
    PAUSE_PATTERN = re.compile(r'^pause\s*$')

    def parse_file(self, path: str | Path) -> list[dict[str, Any]]:
        """Parse a script file."""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_string(content)

    def parse_string(self, content: str) -> list[dict[str, Any]]:
        """Parse script text."""
        records: list[dict[str, Any]] = []
        current: Optional[dict[str, Any]] = None
        text_lines: list[str] = []
        pending_label: Optional[str] = None
        label_line = 0

        def close_entry() -> None:
            nonlocal current, text_lines
            if current is not None:
                current["text"] = '\n'.join(text_lines).strip()
                records.append(current)
            current = None
            text_lines = []

        for line_no, raw in enumerate(content.split('\n'), start=1):
            line = raw.rstrip()
            stripped = line.strip()

            # Blank lines are kept inside text
            if not stripped:
                if current is not None and text_lines:
                    text_lines.append('')
                continue

            if stripped.startswith('//'):
                continue

            # Entry separator
            if stripped == '---':
                close_entry()
                continue

            match = self.LABEL_PATTERN.match(stripped)
            if match:
                if pending_label is not None:
                    raise MalformedScriptError(
                        f"label '{pending_label}' is not followed by an entry",
                        line=label_line,
                    )
                close_entry()
                pending_label = match.group(1)
                label_line = line_no
                continue

            match = self.SPEAKER_PATTERN.match(stripped)
            if match:
                close_entry()
                current = {
                    "speaker": match.group(1),
                    "portrait": match.group(2) or "none",
                }
                if pending_label is not None:
                    current["label"] = pending_label
                    pending_label = None
                continue

            if current is None:
                raise MalformedScriptError(
                    "content before the first '@speaker' line",
                    line=line_no,
                )

            if self._parse_directive(stripped, current, line_no):
                continue

            # Regular text line
            if stripped.startswith('\\'):
                line = line.replace('\\', '', 1)
            text_lines.append(line)

        close_entry()

        if pending_label is not None:
            raise MalformedScriptError(
                f"label '{pending_label}' is not followed by an entry",
                line=label_line,
            )

        return records

    def _parse_directive(self, line: str, entry: dict[str, Any], line_no: int) -> bool:
        """Apply a directive line to the entry; False if it is not one."""
        match = self.CHOICE_PATTERN.match(line)
        if match:
            entry.setdefault("choices", []).append({
                "text": match.group(1),
                "goto": match.group(2),
            })
            return True

        match = self.JUMP_PATTERN.match(line)
        if match:
            if "jump" in entry:
                raise MalformedScriptError("entry already has a jump", line=line_no)
            entry["jump"] = match.group(1)
            return True

        match = self.WIDGET_PATTERN.match(line)
        if match:
            if "widget" in entry:
                raise MalformedScriptError("entry already has a widget", line=line_no)
            entry["widget"] = {
                "name": match.group(1),
                "visible": match.group(2) != "hidden",
            }
            return True

        match = self.ASSET_PATTERN.match(line)
        if match:
            key = "background" if match.group(1) == "bg" else "bgm"
            entry[key] = match.group(2)
            return True

        if self.PAUSE_PATTERN.match(line):
            entry["pause"] = True
            return True

        return False
