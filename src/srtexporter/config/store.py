"""
Exporter configuration store.

ConfigStore owns the global configuration and the per-object entries and
answers lookups by exporter object name, falling back to the global
configuration for names without an entry. A store is created explicitly
and handed to whatever needs it; there is no module-level instance.

Loading never raises. A missing or malformed source leaves the store with
compiled-in defaults, and a bad object entry is skipped without affecting
the rest of the document. Problems of the last load are kept in
``load_errors``.

The global config and object list live in one immutable snapshot that
writers replace under a lock. Readers use whichever snapshot is current,
so a lookup during a reload sees either the old or the new state, never
a mix of both. Accessors hand out copies; changing them does not
change the store.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union

import yaml

from ..collectors.variables import resolve_variables
from ..models.config import (
    CollectorConfig,
    CollectorMode,
    FilterPreset,
    GlobalConfig,
    ObjectConfig,
)
from ..system.ports import PortAllocator
from ..validation import (
    ConfigError,
    ConfigMalformed,
    DuplicateName,
    ErrorSeverity,
    NoPortAvailable,
    ValidationError,
    handle_config_error,
    validate_host,
    validate_object_name,
    validate_port,
)
from .builder import default_collector_config
from .loader import ConfigNode, read_config_source
from .validators import (
    default_global_config,
    report_config_error,
    validate_global_config,
    validate_object_entry,
)

logger = logging.getLogger(__name__)

OBJECTS_KEYS = ("objects", "exporters")

ConfigSource = Union[str, Path, Mapping, ConfigNode, None]


class StoreState(Enum):
    """Lifecycle state of a ConfigStore."""

    UNLOADED = "unloaded"
    LOADED = "loaded"


@dataclass(frozen=True)
class _Snapshot:
    global_config: GlobalConfig
    objects: Tuple[ObjectConfig, ...] = ()


class ConfigStore:
    """
    Global and per-object exporter configuration.

    Args:
        port_allocator: Used to assign ports to objects loaded without one
    """

    def __init__(self, port_allocator: Optional[PortAllocator] = None):
        self._allocator = port_allocator or PortAllocator()
        self._lock = threading.RLock()
        self._snapshot = _Snapshot(default_global_config())
        self._state = StoreState.UNLOADED
        self._load_errors: List[ValidationError] = []
        self._source: Optional[str] = None

    # --- Loading ---

    def load(self, source: ConfigSource = None) -> List[ValidationError]:
        """
        Load the configuration, replacing the global config and all objects.

        Args:
            source: Path of a YAML/TOML file, an already parsed mapping or
                ConfigNode, or None for compiled-in defaults

        Returns:
            The problems found while loading; empty on a clean load
        """
        with self._lock:
            errors: List[ValidationError] = []
            try:
                root = self._read_source(source, errors)
                if root is None:
                    snapshot = _Snapshot(default_global_config())
                else:
                    global_config = validate_global_config(root, errors)
                    objects = self._load_objects(root, global_config, errors)
                    snapshot = _Snapshot(global_config, tuple(objects))
            except Exception as e:
                handle_config_error(
                    e,
                    "loading exporter configuration",
                    severity=ErrorSeverity.CRITICAL,
                    reraise=False,
                    logger=logger,
                )
                errors.append(
                    ConfigMalformed(f"Unexpected error while loading configuration: {e}")
                )
                snapshot = _Snapshot(default_global_config())

            self._snapshot = snapshot
            self._state = StoreState.LOADED
            self._load_errors = errors
            self._source = str(source) if isinstance(source, (str, Path)) else None

        logger.info(
            f"Loaded exporter configuration with {len(snapshot.objects)} objects"
            + (f" ({len(errors)} problems)" if errors else "")
        )
        return list(errors)

    def _read_source(
        self, source: ConfigSource, errors: List[ValidationError]
    ) -> Optional[ConfigNode]:
        if source is None or (isinstance(source, str) and not source.strip()):
            logger.info("No configuration source given, using defaults")
            return None
        if isinstance(source, ConfigNode):
            return source
        if isinstance(source, Mapping):
            return ConfigNode(source)
        if not isinstance(source, (str, Path)):
            report_config_error(
                ConfigMalformed(
                    f"Unsupported configuration source type: {type(source).__name__}",
                    field_name="source",
                    value=source,
                ),
                "reading source",
                errors,
                severity=ErrorSeverity.ERROR,
            )
            return None
        try:
            return read_config_source(source)
        except ConfigError as e:
            report_config_error(e, "reading source", errors, severity=ErrorSeverity.ERROR)
            logger.warning("Falling back to default exporter configuration")
            return None

    def _load_objects(
        self,
        root: ConfigNode,
        global_config: GlobalConfig,
        errors: List[ValidationError],
    ) -> List[ObjectConfig]:
        entries = root.get_sequence(*OBJECTS_KEYS)
        if not entries:
            return []

        # Explicit ports are collected first so allocation never hands them out.
        validated = []
        names: Set[str] = set()
        taken_ports: Set[int] = set()
        for index, entry in enumerate(entries):
            context = f"objects[{index}]"
            if not isinstance(entry, Mapping):
                report_config_error(
                    ConfigMalformed(
                        f"{context} must be a mapping, got {type(entry).__name__}",
                        field_name=context,
                        value=entry,
                    ),
                    context,
                    errors,
                )
                continue
            try:
                name, ip, port, collector = validate_object_entry(
                    ConfigNode(entry, context), global_config
                )
            except ValidationError as e:
                report_config_error(e, context, errors)
                continue
            except Exception as e:
                report_config_error(
                    ConfigMalformed(f"{context} could not be read: {e}", field_name=context, value=entry),
                    context,
                    errors,
                    severity=ErrorSeverity.ERROR,
                )
                continue
            if name in names:
                report_config_error(DuplicateName(name), context, errors)
                continue
            names.add(name)
            if port is not None:
                taken_ports.add(port)
            validated.append((name, ip, port, collector))

        objects = []
        for name, ip, port, collector in validated:
            if port is None:
                try:
                    port = self._allocator.allocate(
                        ip, global_config.port_min, global_config.port_max, exclude=taken_ports
                    )
                except ConfigError as e:
                    report_config_error(
                        e, f"port allocation for '{name}'", errors, severity=ErrorSeverity.ERROR
                    )
                    continue
                except Exception as e:
                    report_config_error(
                        NoPortAvailable(ip, global_config.port_min, global_config.port_max),
                        f"port allocation for '{name}' failed: {e}",
                        errors,
                        severity=ErrorSeverity.ERROR,
                    )
                    continue
                taken_ports.add(port)
                logger.debug(f"Assigned port {port} to '{name}'")
            objects.append(ObjectConfig(name=name, ip=ip, port=port, collector=collector))
        return objects

    # --- Programmatic updates ---

    def add_config(
        self,
        name: str,
        ip: str,
        port: int,
        collector: Optional[CollectorConfig] = None,
    ) -> ObjectConfig:
        """
        Append an exporter object.

        Args:
            name: Unique object name
            ip: Listening address
            port: Listening port
            collector: Collector policy; the default collector when None.
                An empty variable list is filled from the collector's preset,
                or the common preset when it has none

        Returns:
            The stored ObjectConfig

        Raises:
            DuplicateName: If an object with this name exists; the store is
                left unchanged
            ValidationError: If name, ip or port is invalid
        """
        name = validate_object_name(name)
        ip = validate_host(ip)
        port = validate_port(port)
        collector = collector.copy() if collector is not None else default_collector_config()
        if not collector.variables:
            collector.preset = collector.preset or FilterPreset.COMMON
            collector.variables = resolve_variables(preset=collector.preset)

        with self._lock:
            snapshot = self._snapshot
            if any(obj.name == name for obj in snapshot.objects):
                raise DuplicateName(name)
            obj = ObjectConfig(name=name, ip=ip, port=port, collector=collector)
            self._snapshot = _Snapshot(snapshot.global_config, snapshot.objects + (obj,))

        logger.info(f"Added exporter object '{name}' on {ip}:{port}")
        return obj.copy()

    # --- Lookups ---

    def find_object_config(self, name: str) -> Optional[ObjectConfig]:
        """The entry named ``name``, or None if there is none."""
        obj = self._find(self._snapshot, name)
        return obj.copy() if obj else None

    def get_server_ip(self, name: str) -> str:
        snapshot = self._snapshot
        obj = self._find(snapshot, name)
        return obj.ip if obj else snapshot.global_config.ip

    def get_server_port(self, name: str) -> int:
        """
        Port of the object, or the global ``port_min`` for unknown names.

        The global config holds a range rather than a port; its first
        port is what an unconfigured exporter listens on.
        """
        snapshot = self._snapshot
        obj = self._find(snapshot, name)
        return obj.port if obj else snapshot.global_config.port_min

    def get_collector_mode(self, name: str) -> CollectorMode:
        snapshot = self._snapshot
        obj = self._find(snapshot, name)
        return (obj.collector if obj else snapshot.global_config.collector).mode

    def get_collector_config(self, name: str) -> CollectorConfig:
        snapshot = self._snapshot
        obj = self._find(snapshot, name)
        collector = obj.collector if obj else snapshot.global_config.collector
        return collector.copy()

    @staticmethod
    def _find(snapshot: _Snapshot, name: str) -> Optional[ObjectConfig]:
        for obj in snapshot.objects:
            if obj.name == name:
                return obj
        return None

    # --- Introspection ---

    @property
    def global_config(self) -> GlobalConfig:
        return self._snapshot.global_config.copy()

    @property
    def object_configs(self) -> Tuple[ObjectConfig, ...]:
        return tuple(obj.copy() for obj in self._snapshot.objects)

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is StoreState.LOADED

    @property
    def load_errors(self) -> List[ValidationError]:
        return list(self._load_errors)

    @property
    def source(self) -> Optional[str]:
        return self._source

    def names(self) -> List[str]:
        return [obj.name for obj in self._snapshot.objects]

    def __len__(self) -> int:
        return len(self._snapshot.objects)

    def __iter__(self) -> Iterator[ObjectConfig]:
        return iter(self.object_configs)

    def __contains__(self, name: Any) -> bool:
        return self._find(self._snapshot, name) is not None

    def get_config_info(self) -> Dict[str, Any]:
        """
        Get information about the current configuration state.

        Returns:
            Dictionary with configuration metadata
        """
        return {
            "state": self._state.value,
            "config_path": self._source,
            "objects_count": len(self._snapshot.objects),
            "load_errors_count": len(self._load_errors),
        }

    def dump_config(self) -> str:
        """
        Render the global config and all objects as YAML.

        The rendering is also logged at INFO level. The store is not modified.
        """
        snapshot = self._snapshot
        document = {
            "global": snapshot.global_config.to_dict(),
            "objects": [obj.to_dict() for obj in snapshot.objects],
        }
        text = yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
        logger.info(f"Exporter configuration ({self._state.value}):\n{text}")
        return text
