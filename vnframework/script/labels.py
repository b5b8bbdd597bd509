"""
Label index - immutable label -> position mapping.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

from vnframework.script.errors import UnknownLabelError
from vnframework.script.models import DialogueEntry


class LabelIndex(Mapping[str, int]):
    """
    Read-only mapping from label to entry position.

    Built once per script by build_label_index(); exposes no mutators.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: Mapping[str, int]):
        self._positions = MappingProxyType(dict(positions))

    def __getitem__(self, label: str) -> int:
        return self._positions[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"LabelIndex({dict(self._positions)!r})"

    def position_of(self, label: str) -> int:
        """Position of a label, raising UnknownLabelError if undefined."""
        try:
            return self._positions[label]
        except KeyError:
            raise UnknownLabelError(label) from None

    def labels(self) -> list[str]:
        """Labels in script order."""
        return sorted(self._positions, key=self._positions.__getitem__)


def build_label_index(entries: Sequence[DialogueEntry]) -> LabelIndex:
    """
    Build the label index for a validated entry sequence.

    Assumes labels are unique (ScriptLoader guarantees it); if they are
    not, the first definition wins.
    """
    positions: dict[str, int] = {}
    for index, entry in enumerate(entries):
        if entry.label is not None:
            positions.setdefault(entry.label, index)
    return LabelIndex(positions)
