"""
View projection - what the presentation layer sees after each change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from vnframework.script.models import Choice, DialogueEntry, Widget


@dataclass(frozen=True)
class DialogueView:
    """
    Read-only snapshot of the current entry.

    Content fields are empty/None once playback has finished.
    """
    speaker: str = ""
    text: str = ""
    portrait: Optional[str] = None
    widget: Optional[Widget] = None
    finished: bool = False
    position: int = 0
    label: Optional[str] = None
    choices: tuple[Choice, ...] = ()
    background: Optional[str] = None
    bgm: Optional[str] = None
    awaiting_branch: bool = False

    @classmethod
    def of(cls, entry: DialogueEntry, position: int, awaiting_branch: bool = False) -> DialogueView:
        """Project an entry."""
        return cls(
            speaker=entry.speaker,
            text=entry.text,
            portrait=entry.portrait,
            widget=entry.widget,
            finished=False,
            position=position,
            label=entry.label,
            choices=entry.choices,
            background=entry.background,
            bgm=entry.bgm,
            awaiting_branch=awaiting_branch,
        )

    @classmethod
    def end(cls, position: int) -> DialogueView:
        """Projection once the script has run out."""
        return cls(finished=True, position=position)


class PresentationSink(Protocol):
    """Anything that displays views (renderer, logger, test recorder)."""

    def present(self, view: DialogueView) -> None:
        ...


@dataclass
class RecordingSink:
    """Sink that keeps every view it is given."""
    views: list[DialogueView] = field(default_factory=list)

    def present(self, view: DialogueView) -> None:
        self.views.append(view)

    @property
    def last(self) -> Optional[DialogueView]:
        return self.views[-1] if self.views else None

    def clear(self) -> None:
        self.views.clear()
