"""
System interaction utilities.

Currently limited to finding free listening ports for exporter objects.
"""

from .ports import DEFAULT_PROBE_TIMEOUT, PortAllocator, check_port_range

__all__ = [
    "DEFAULT_PROBE_TIMEOUT",
    "PortAllocator",
    "check_port_range",
]
