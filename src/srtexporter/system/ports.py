"""
Listening port allocation for exporter objects.

Ports are found by scanning a configured range in ascending order. A port
counts as free when nothing is listening on it according to psutil and a
test bind on the target address succeeds. The test socket is closed right
away, so the port is not reserved: the exporter may still lose the race
and must treat a late bind failure as retryable.
"""

import ipaddress
import logging
import socket
from typing import Any, Iterable, Set

import psutil

from ..validation import NoPortAvailable, PortRangeError, ValidationError, validate_port

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 0.2

_WILDCARD_ADDRESSES = {"", "0.0.0.0", "::"}


def _address_family(ip: str) -> socket.AddressFamily:
    try:
        if ipaddress.ip_address(ip).version == 6:
            return socket.AF_INET6
    except ValueError:
        # Host names are resolved by bind() itself
        pass
    return socket.AF_INET


def check_port_range(port_min: Any, port_max: Any) -> None:
    """
    Validate a [port_min, port_max] range.

    Raises:
        PortRangeError: If a bound is not a valid port or port_min > port_max
    """
    try:
        low = validate_port(port_min, field_name="portMin")
        high = validate_port(port_max, field_name="portMax")
    except ValidationError as e:
        raise PortRangeError(str(e), field_name=e.field_name, value=e.value) from e
    if low > high:
        raise PortRangeError(
            f"portMin ({low}) must not be greater than portMax ({high})",
            field_name="portMin",
            value=(port_min, port_max),
        )


class PortAllocator:
    """
    Finds the first usable listening port in a range.

    Args:
        probe_timeout: Socket timeout in seconds applied to each probe
    """

    def __init__(self, probe_timeout: float = DEFAULT_PROBE_TIMEOUT):
        self.probe_timeout = probe_timeout

    def allocate(
        self,
        ip: str,
        port_min: int,
        port_max: int,
        exclude: Iterable[int] = (),
    ) -> int:
        """
        Return the lowest free port in [port_min, port_max] on ``ip``.

        Args:
            ip: Address the exporter will listen on
            port_min: First port of the range (inclusive)
            port_max: Last port of the range (inclusive)
            exclude: Ports already handed out and not to be returned again

        Raises:
            PortRangeError: If the range is invalid; nothing is scanned
            NoPortAvailable: If every port in the range is taken
        """
        check_port_range(port_min, port_max)
        port_min, port_max = int(port_min), int(port_max)

        skipped: Set[int] = set(exclude)
        listening = self._listening_ports(ip)

        for port in range(port_min, port_max + 1):
            if port in skipped or port in listening:
                continue
            if self._probe(ip, port):
                logger.debug(f"Allocated port {port} on {ip}")
                return port

        raise NoPortAvailable(ip, port_min, port_max)

    def is_port_available(self, ip: str, port: int) -> bool:
        """Check a single port without scanning a range."""
        if port in self._listening_ports(ip):
            return False
        return self._probe(ip, port)

    def _probe(self, ip: str, port: int) -> bool:
        try:
            with socket.socket(_address_family(ip), socket.SOCK_STREAM) as sock:
                sock.settimeout(self.probe_timeout)
                sock.bind((ip, port))
        except OSError as e:
            logger.debug(f"Port {port} on {ip} not available: {e}")
            return False
        return True

    def _listening_ports(self, ip: str) -> Set[int]:
        """Ports in LISTEN state that would clash with a bind on ``ip``."""
        try:
            connections = psutil.net_connections(kind="tcp")
        except (psutil.Error, OSError) as e:
            # Not permitted on some platforms; the bind probe still applies
            logger.debug(f"Cannot inspect listening sockets: {e}")
            return set()

        ports = set()
        for conn in connections:
            if conn.status != psutil.CONN_LISTEN or not conn.laddr:
                continue
            if (
                ip in _WILDCARD_ADDRESSES
                or conn.laddr.ip == ip
                or conn.laddr.ip in _WILDCARD_ADDRESSES
            ):
                ports.add(conn.laddr.port)
        return ports
