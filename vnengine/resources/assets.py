"""
Asset path resolution.

Maps the opaque asset keys used in scripts (portrait, background, widget,
bgm) to filesystem paths using the tables in EngineConfig. Nothing is
decoded here; renderers and audio backends load the returned paths.
"""

import logging
from pathlib import Path

from vnengine.core.config import EngineConfig


class AssetResolver:
    """
    Resolves asset keys to paths under a base directory.

    Lookup order for a key: the category table in the config, then the key
    itself as a relative path, then the key with a default extension.
    """

    DEFAULT_EXTENSIONS: dict[str, str] = {
        "characters": ".png",
        "backgrounds": ".png",
        "widgets": ".swf",
        "bgm": ".ogg",
        "sfx": ".ogg",
    }

    def __init__(self, config: EngineConfig, base_path: Path | str = "assets"):
        self._config = config
        self._base_path = Path(base_path)
        self.logger = logging.getLogger(__name__)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _table(self, category: str) -> dict[str, str]:
        assets = self._config.assets
        if category in ("bgm", "sfx"):
            return getattr(assets.audio, category)
        return getattr(assets, category)

    def resolve(self, category: str, key: str | None) -> Path | None:
        """
        Resolve an asset key to an existing path.

        Args:
            category: One of characters, backgrounds, widgets, bgm, sfx
            key: Asset key from the script (None or "none" means no asset)

        Returns:
            Path to the asset, or None if nothing on disk matches
        """
        if category not in self.DEFAULT_EXTENSIONS:
            raise KeyError(f"Unknown asset category: {category}")
        if not key or key == "none":
            return None

        candidates = []
        mapped = self._table(category).get(key)
        if mapped:
            candidates.append(Path(mapped))
        candidates.append(Path(key))
        candidates.append(Path(f"{key}{self.DEFAULT_EXTENSIONS[category]}"))

        for candidate in candidates:
            path = candidate if candidate.is_absolute() else self._base_path / candidate
            if path.exists():
                return path

        self.logger.warning(f"Asset not found: {category}/{key}")
        return None

    def portrait(self, key: str | None) -> Path | None:
        return self.resolve("characters", key)

    def background(self, key: str | None) -> Path | None:
        return self.resolve("backgrounds", key)

    def bgm(self, key: str | None) -> Path | None:
        return self.resolve("bgm", key)
