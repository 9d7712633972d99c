"""
Configuration management for the srtexporter package.

This module provides the configuration store queried by the exporter
runtime, together with the loaders and builders it is assembled from.
"""

# Main configuration interface
from .store import ConfigStore, StoreState

# For advanced usage - direct access to loaders, builders and validators
from .builder import (
    build_collector_config,
    default_collector_config,
    parse_collector_mode,
    parse_filter_mode,
    parse_labels,
)
from .loader import ConfigNode, read_config_source
from .validators import (
    DEFAULT_IP,
    DEFAULT_PORT_MAX,
    DEFAULT_PORT_MIN,
    default_global_config,
    validate_global_config,
    validate_object_entry,
)

__all__ = [
    # Main interface
    "ConfigStore",
    "StoreState",
    # Advanced interface
    "ConfigNode",
    "read_config_source",
    "build_collector_config",
    "default_collector_config",
    "parse_collector_mode",
    "parse_filter_mode",
    "parse_labels",
    "DEFAULT_IP",
    "DEFAULT_PORT_MIN",
    "DEFAULT_PORT_MAX",
    "default_global_config",
    "validate_global_config",
    "validate_object_entry",
]
