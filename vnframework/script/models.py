"""
Dialogue data models - immutable script entries.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class Widget(_FrozenModel):
    """An embedded overlay shown with an entry (e.g. an animation)."""
    name: str
    visible: bool = True


class Choice(_FrozenModel):
    """A single branch option."""
    text: str
    goto: str


class DialogueEntry(_FrozenModel):
    """
    One scripted beat.

    Attributes:
        speaker: Speaker identifier ("none" hides the name box)
        text: Display string
        portrait: Opaque portrait asset key
        label: Unique anchor naming this position
        widget: Embedded overlay descriptor
        jump: Label to continue at instead of the next entry
        choices: Branch options; arriving here opens the branch gate
        background: Background asset key
        bgm: Music track key
        pause: Stops auto-play on arrival
    """
    speaker: str
    text: str
    portrait: str
    label: Optional[str] = None
    widget: Optional[Widget] = None
    jump: Optional[str] = None
    choices: tuple[Choice, ...] = Field(default_factory=tuple)
    background: Optional[str] = None
    bgm: Optional[str] = None
    pause: bool = False

    @property
    def has_choices(self) -> bool:
        return len(self.choices) > 0

    def targets(self) -> list[tuple[str, str]]:
        """All labels this entry can transfer control to, as (field, label)."""
        result = []
        if self.jump is not None:
            result.append(("jump", self.jump))
        for i, choice in enumerate(self.choices):
            result.append((f"choices[{i}].goto", choice.goto))
        return result
