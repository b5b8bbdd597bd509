"""
Core engine module.

Exports:
- EventBus, Event, NarrativeEvent, AudioEvent: Event system
- Action: Input actions
- EngineConfig, ConfigError, load_config: Configuration
"""

from vnengine.core.events import EventBus, Event, NarrativeEvent, AudioEvent
from vnengine.core.actions import Action
from vnengine.core.config import EngineConfig, ConfigError, load_config

__all__ = [
    # Events
    "EventBus",
    "Event",
    "NarrativeEvent",
    "AudioEvent",
    # Input
    "Action",
    # Config
    "EngineConfig",
    "ConfigError",
    "load_config",
]
