"""Asset resolution."""

from vnengine.resources.assets import AssetResolver

__all__ = [
    "AssetResolver",
]
