"""Input handling module."""

from vnengine.input.mapper import InputMapper, InputEvent

__all__ = [
    "InputMapper",
    "InputEvent",
]
