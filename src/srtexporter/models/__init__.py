"""
Data models for the exporter configuration.

All models are dataclasses with a ``to_dict()`` rendering used by the
configuration dump.
"""

from .config import (
    CollectorConfig,
    CollectorMode,
    FilterMode,
    FilterPreset,
    GlobalConfig,
    Label,
    ObjectConfig,
)

__all__ = [
    "CollectorConfig",
    "CollectorMode",
    "FilterMode",
    "FilterPreset",
    "GlobalConfig",
    "Label",
    "ObjectConfig",
]
