"""
Configuration section validation.

This module turns the global section and the object entries of a parsed
document into model objects. Invalid global fields are reported and
replaced by compiled-in defaults; invalid object entries raise so the
store can skip them.
"""

import logging
from typing import List, Optional, Tuple

from ..models.config import CollectorConfig, GlobalConfig
from ..system.ports import check_port_range
from ..validation import (
    ErrorSeverity,
    PortRangeError,
    ValidationError,
    handle_config_error,
    validate_host,
    validate_object_name,
    validate_port,
)
from .builder import build_collector_config, default_collector_config
from .loader import ConfigNode

logger = logging.getLogger(__name__)

DEFAULT_IP = "0.0.0.0"
DEFAULT_PORT_MIN = 9100
DEFAULT_PORT_MAX = 9199

IP_KEYS = ("ip", "address")
PORT_MIN_KEYS = ("portMin", "port_min")
PORT_MAX_KEYS = ("portMax", "port_max")
PORT_KEYS = ("port",)
NAME_KEYS = ("name",)
COLLECTOR_KEYS = ("collector", "config")


def default_global_config() -> GlobalConfig:
    """The compiled-in global configuration."""
    return GlobalConfig(
        ip=DEFAULT_IP,
        port_min=DEFAULT_PORT_MIN,
        port_max=DEFAULT_PORT_MAX,
        collector=default_collector_config(),
    )


def report_config_error(
    error: ValidationError,
    context: str,
    errors: Optional[List[ValidationError]] = None,
    severity: ErrorSeverity = ErrorSeverity.WARNING,
) -> None:
    """Log a recoverable configuration error and remember it in ``errors``."""
    handle_config_error(error, context, severity=severity, reraise=False, logger=logger)
    if errors is not None:
        errors.append(error)


def validate_global_config(
    node: ConfigNode, errors: Optional[List[ValidationError]] = None
) -> GlobalConfig:
    """
    Validate the top-level settings of a configuration document.

    Each invalid field is reported and falls back to its compiled-in
    default. An inverted or invalid port range falls back to the default
    range as a whole.

    Args:
        node: Root node of the document
        errors: Collects the reported errors when given

    Returns:
        A complete GlobalConfig
    """
    config = default_global_config()

    if node.has(*IP_KEYS):
        try:
            config.ip = validate_host(node.get_scalar(*IP_KEYS))
        except ValidationError as e:
            report_config_error(e, "global ip", errors)

    port_min = node.get_scalar(*PORT_MIN_KEYS, default=DEFAULT_PORT_MIN)
    port_max = node.get_scalar(*PORT_MAX_KEYS, default=DEFAULT_PORT_MAX)
    try:
        check_port_range(port_min, port_max)
        config.port_min = int(port_min)
        config.port_max = int(port_max)
    except PortRangeError as e:
        report_config_error(e, "global port range", errors, severity=ErrorSeverity.ERROR)

    config.collector = build_collector_config(node.get_node(*COLLECTOR_KEYS))

    logger.debug(
        f"Global config: ip={config.ip}, ports=[{config.port_min}, {config.port_max}], "
        f"mode={config.collector.mode.name}"
    )
    return config


def validate_object_entry(
    node: ConfigNode, global_config: GlobalConfig
) -> Tuple[str, str, Optional[int], CollectorConfig]:
    """
    Validate one entry of the ``objects`` list.

    The entry's ip defaults to the global ip and its collector inherits
    every field it does not set from the global collector.

    Returns:
        ``(name, ip, port, collector)``; ``port`` is None when the entry
        sets none and one has to be allocated.

    Raises:
        ValidationError: If the name is missing or the ip or port is invalid
    """
    name = validate_object_name(node.get_scalar(*NAME_KEYS), field_name=f"{node.path}.name")

    ip = global_config.ip
    if node.has(*IP_KEYS):
        ip = validate_host(node.get_scalar(*IP_KEYS), field_name=f"{name}.ip")

    port = None
    if node.has(*PORT_KEYS):
        port = validate_port(node.get_scalar(*PORT_KEYS), field_name=f"{name}.port")

    collector = build_collector_config(
        node.get_node(*COLLECTOR_KEYS), defaults=global_config.collector
    )
    return name, ip, port, collector
