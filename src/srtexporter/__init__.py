"""
srtexporter: configuration core of the SRT statistics exporter.

This package resolves the runtime configuration of exported SRT
connections: listening address and port, collector mode, the statistic
variables to expose and the labels to attach.

The package is organized into specialized modules:
- config: Configuration loading, collector building and the ConfigStore
- models: Data structures and enums
- collectors: Statistic variable presets
- system: Listening port allocation
- validation: Input validation and error taxonomy

Usage:
    from srtexporter import ConfigStore
    store = ConfigStore()
    store.load("srt_exporter.yaml")
    port = store.get_server_port("camA")
"""

# Main interfaces
from .config import ConfigStore, StoreState, build_collector_config, default_collector_config

# Model classes for external use
from .models import (
    CollectorConfig,
    CollectorMode,
    FilterMode,
    FilterPreset,
    GlobalConfig,
    Label,
    ObjectConfig,
)

# Variable presets and port allocation
from .collectors import resolve_preset, resolve_variables
from .system import PortAllocator

# Errors
from .validation import (
    ConfigError,
    ConfigMalformed,
    ConfigSourceUnreadable,
    DuplicateName,
    NoPortAvailable,
    PortRangeError,
    UnknownEnumValue,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "ConfigStore",
    "StoreState",
    "build_collector_config",
    "default_collector_config",
    "resolve_preset",
    "resolve_variables",
    "PortAllocator",
    # Models
    "CollectorConfig",
    "CollectorMode",
    "FilterMode",
    "FilterPreset",
    "GlobalConfig",
    "Label",
    "ObjectConfig",
    # Errors
    "ValidationError",
    "UnknownEnumValue",
    "ConfigError",
    "ConfigSourceUnreadable",
    "ConfigMalformed",
    "PortRangeError",
    "NoPortAvailable",
    "DuplicateName",
]
