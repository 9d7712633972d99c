"""
Validation and error handling for the srtexporter package.

This module provides input validation and the configuration error
taxonomy with consistent error reporting across the package.
"""

from .exceptions import (
    ConfigError,
    ConfigMalformed,
    ConfigSourceUnreadable,
    DuplicateName,
    ErrorSeverity,
    NoPortAvailable,
    PortRangeError,
    UnknownEnumValue,
    ValidationError,
    handle_config_error,
    handle_error,
)
from .validators import (
    MAX_PORT,
    MIN_PORT,
    normalize_token,
    validate_host,
    validate_object_name,
    validate_port,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "ValidationError",
    "UnknownEnumValue",
    "ConfigError",
    "ConfigSourceUnreadable",
    "ConfigMalformed",
    "PortRangeError",
    "NoPortAvailable",
    "DuplicateName",
    "handle_error",
    "handle_config_error",
    # Validators
    "MIN_PORT",
    "MAX_PORT",
    "normalize_token",
    "validate_host",
    "validate_object_name",
    "validate_port",
    "validate_positive_integer",
]
