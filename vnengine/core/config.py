"""
Engine configuration.

Loaded from a YAML file (``main.yaml`` by convention) into Pydantic models:

```yaml
title: The Raven Hall
assets:
  characters:
    alice: portraits/alice.png
  backgrounds:
    hall: bg/hall.png
  widgets:
    lantern: widgets/lantern.swf
  audio:
    bgm:
      theme: audio/theme.ogg
    sfx: {}
    click_sound: audio/click.ogg
    backclick_sound: audio/back.ogg
    branch_open_sound: audio/chime.ogg
settings:
  rewind: true
  auto_play_interval: 2.0
variables:
  player_name: Alex
```

A missing file yields the defaults; a file that exists but cannot be
parsed or validated is an error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


logger = logging.getLogger(__name__)

# Scalar values usable in script placeholders
VariableValue = Union[bool, int, float, str, None, list]


class ConfigError(ValueError):
    """Raised when a configuration file exists but is invalid."""


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra='forbid')


class AudioPaths(_ConfigModel):
    """Audio asset paths."""
    bgm: dict[str, str] = Field(default_factory=dict)
    sfx: dict[str, str] = Field(default_factory=dict)
    click_sound: str = "audio/click.ogg"
    backclick_sound: str = "audio/back.ogg"
    branch_open_sound: Optional[str] = None
    branch_select_sound: Optional[str] = None


class AssetPaths(_ConfigModel):
    """Asset key -> relative path tables."""
    characters: dict[str, str] = Field(default_factory=dict)
    backgrounds: dict[str, str] = Field(default_factory=dict)
    widgets: dict[str, str] = Field(default_factory=dict)
    audio: AudioPaths = Field(default_factory=AudioPaths)


class PlaybackSettings(_ConfigModel):
    """
    Playback behaviour.

    Attributes:
        rewind: Whether the player may step back through history
        auto_play_interval: Seconds between automatic advances
        debug_jumps: Enable digit-key jumps to absolute line indices
    """
    rewind: bool = True
    auto_play_interval: float = Field(default=2.0, gt=0)
    debug_jumps: bool = False


class EngineConfig(_ConfigModel):
    """Top-level configuration."""
    title: str = "Untitled"
    assets: AssetPaths = Field(default_factory=AssetPaths)
    settings: PlaybackSettings = Field(default_factory=PlaybackSettings)
    variables: dict[str, VariableValue] = Field(default_factory=dict)

    def get_character_path(self, character: str) -> str | None:
        return self.assets.characters.get(character)

    def get_background_path(self, background: str) -> str | None:
        return self.assets.backgrounds.get(background)

    def placeholders(self) -> dict[str, str]:
        """
        Build the ``$name`` substitution table used by the script loader.

        Keys are returned without the leading ``$``.
        """
        table: dict[str, str] = {"title": self.title}

        groups: dict[str, dict[str, str]] = {
            "characters": self.assets.characters,
            "backgrounds": self.assets.backgrounds,
            "widgets": self.assets.widgets,
            "audio.bgm": self.assets.audio.bgm,
            "audio.sfx": self.assets.audio.sfx,
        }
        for prefix, entries in groups.items():
            for key, path in entries.items():
                table[f"{prefix}.{key}"] = path

        for key, value in self.variables.items():
            if isinstance(value, (list, type(None))):
                continue
            if isinstance(value, bool):
                table.setdefault(key, str(value).lower())
            else:
                table.setdefault(key, str(value))

        return table


def load_config(path: str | Path) -> EngineConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        The parsed configuration, or defaults if the file does not exist

    Raises:
        ConfigError: If the file exists but is not valid configuration
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Config file not found: {path}, using defaults")
        return EngineConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    try:
        config = EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    logger.info(f"Loaded config '{config.title}' from {path}")
    return config
