"""
Scalar validation functions used by the configuration loaders.
"""

import ipaddress
import re
from typing import Any, Optional

from .exceptions import ValidationError

MIN_PORT = 1
MAX_PORT = 65535

_HOSTNAME_RE = re.compile(r'^[a-zA-Z0-9]([a-zA-Z0-9.-]*[a-zA-Z0-9])?$')


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # YAML turns "yes"/"no" into booleans; int(True) would silently pass
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    # Also covers YAML .inf/.nan, which int() cannot convert
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(
            f"{field_name} must be a whole number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError, OverflowError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_port(value: Any, field_name: str = "port") -> int:
    """Validate a TCP port number (1-65535)."""
    return validate_positive_integer(
        value, min_value=MIN_PORT, max_value=MAX_PORT, field_name=field_name
    )


def validate_host(value: Any, field_name: str = "ip") -> str:
    """
    Validate a listening address.

    Accepts IPv4/IPv6 literals and plain host names.

    Raises:
        ValidationError: If the value is empty or not a plausible address
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    host = value.strip()
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        pass
    if not _HOSTNAME_RE.match(host):
        raise ValidationError(
            f"{field_name} is not a valid IP address or host name: {value}",
            field_name=field_name,
            value=value
        )
    return host


def validate_object_name(name: Any, field_name: str = "name") -> str:
    """
    Validate an exporter object name.

    Names are free-form but must be non-empty strings; surrounding
    whitespace is stripped.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=name
        )
    return name.strip()


def normalize_token(value: str) -> str:
    """Lower-case a symbolic value and drop separators: ``Collect_On-Request`` -> ``collectonrequest``."""
    return re.sub(r'[\s_-]+', '', value).lower()
