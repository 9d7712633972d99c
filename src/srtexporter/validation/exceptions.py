"""
Exception types and error handling helpers.

All configuration problems raised by the package derive from
ValidationError. Load-time failures are reported through handle_config_error
with reraise=False so a bad section degrades to defaults instead of
stopping the exporter.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    This is the base exception type used throughout the package.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class UnknownEnumValue(ValidationError):
    """A mode or filter value was not recognized."""

    def __init__(self, message: str, field_name: Optional[str] = None, value: Any = None):
        super().__init__(message, field_name=field_name, value=value,
                         severity=ErrorSeverity.WARNING)


class ConfigError(ValidationError):
    """Base class for configuration source and store errors."""


class ConfigSourceUnreadable(ConfigError):
    """The configuration file is missing or cannot be read."""


class ConfigMalformed(ConfigError):
    """The configuration source is structurally invalid."""


class PortRangeError(ConfigError):
    """The configured port range is not usable (e.g. portMin > portMax)."""


class NoPortAvailable(ConfigError):
    """Every port of the configured range is in use."""

    def __init__(self, ip: str, port_min: int, port_max: int):
        super().__init__(
            f"No free port on {ip} in range [{port_min}, {port_max}]",
            field_name="port",
            value=(port_min, port_max),
        )
        self.ip = ip
        self.port_min = port_min
        self.port_max = port_max


class DuplicateName(ConfigError):
    """An exporter object with the same name is already configured."""

    def __init__(self, name: str):
        super().__init__(
            f"Exporter object '{name}' is already configured",
            field_name="name",
            value=name,
        )
        self.name = name


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    # Handle both enum and string severity values
    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)
