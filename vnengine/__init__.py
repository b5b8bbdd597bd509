"""
VN Engine

Infrastructure for the narrative script interpreter: typed events,
semantic input actions, configuration and asset resolution.

Quick Start:
    from vnengine import EventBus, load_config
    from vnframework.playback import NarrativeSession

    config = load_config("assets/main.yaml")
    session = NarrativeSession(config=config, event_bus=EventBus())
    session.load_file("assets/dialogues.yaml")
    session.advance()
"""

__version__ = "0.1.0"

from vnengine.core import (
    EventBus,
    Event,
    NarrativeEvent,
    AudioEvent,
    Action,
    EngineConfig,
    ConfigError,
    load_config,
)

from vnengine.input import InputMapper
from vnengine.resources import AssetResolver

__all__ = [
    # Events
    "EventBus",
    "Event",
    "NarrativeEvent",
    "AudioEvent",
    # Input
    "Action",
    "InputMapper",
    # Config
    "EngineConfig",
    "ConfigError",
    "load_config",
    # Resources
    "AssetResolver",
]
