"""
Script load errors.

Every violation is reported before playback starts. Messages name the
entry index and label so the script author can find the problem.
"""

from __future__ import annotations

from typing import Optional


class LoadError(ValueError):
    """Base class for script load failures."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"entry {index}: {message}"
        super().__init__(message)


class MalformedScriptError(LoadError):
    """Script data could not be decoded or does not match the schema."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        field: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.field = field
        self.line = line
        if field:
            message = f"{field}: {message}"
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message, index)


class DuplicateLabelError(LoadError):
    """Two entries define the same label."""

    def __init__(self, label: str, index: int, first_index: int):
        self.label = label
        self.first_index = first_index
        super().__init__(
            f"label '{label}' already defined at entry {first_index}",
            index,
        )


class UnresolvedJumpError(LoadError):
    """A jump (or choice target) names a label no entry defines."""

    def __init__(self, label: str, index: int, field: str = "jump"):
        self.label = label
        self.field = field
        super().__init__(f"{field} target '{label}' is not defined", index)


class UnknownLabelError(LookupError):
    """
    Runtime jump to a label missing from the index.

    Authored jumps are checked at load time, so this always points at a
    caller bug.
    """

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown label: '{label}'")
