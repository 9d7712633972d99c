"""
Configuration data models.

This module contains the data structures shared by the configuration
store and the exporter runtime: collector policy, global settings and
per-object settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class CollectorMode(Enum):
    """When statistics are gathered for an exporter object."""

    COLLECT_ON_REQUEST = 1
    COLLECT_PERIODICALLY = 2
    RECEIVE_PASSIVELY = 3


class FilterMode(Enum):
    """Whether the variable list selects or excludes statistics."""

    WHITELIST = 1
    BLACKLIST = 2


class FilterPreset(Enum):
    """
    Named variable-list presets.

    A preset is not a filter mode on its own; it resolves to a
    (FilterMode, variable list) pair through
    ``srtexporter.collectors.variables.resolve_preset``.
    """

    SOURCE = "source"
    DESTINATION = "destination"
    COMMON = "common"
    ALL = "all"


@dataclass
class Label:
    """A name/value tag attached to the exported metrics of an object."""

    name: str
    value: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass
class CollectorConfig:
    """
    Collector policy of one exporter object.

    Attributes:
        mode: When statistics are gathered
        filter_mode: Whitelist or blacklist semantics for ``variables``
        variables: Ordered statistic names; never empty once resolved
        labels: Ordered labels, duplicates allowed
        preset: The named preset ``variables`` came from, if any
    """

    mode: CollectorMode = CollectorMode.COLLECT_ON_REQUEST
    filter_mode: FilterMode = FilterMode.WHITELIST
    variables: List[str] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    preset: Optional[FilterPreset] = None

    def copy(self) -> "CollectorConfig":
        """Return a copy that shares no lists with this instance."""
        return CollectorConfig(
            mode=self.mode,
            filter_mode=self.filter_mode,
            variables=list(self.variables),
            labels=[Label(label.name, label.value) for label in self.labels],
            preset=self.preset,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "mode": self.mode.name.lower(),
            "filter_mode": self.filter_mode.name.lower(),
        }
        if self.preset is not None:
            data["preset"] = self.preset.value
        data["variables"] = list(self.variables)
        data["labels"] = [label.to_dict() for label in self.labels]
        return data


@dataclass
class GlobalConfig:
    """
    Settings used for exporter objects without their own entry.

    ``port_min``/``port_max`` bound the range from which ports are
    assigned to new exporter objects.
    """

    ip: str
    port_min: int
    port_max: int
    collector: CollectorConfig = field(default_factory=CollectorConfig)

    def copy(self) -> "GlobalConfig":
        return GlobalConfig(self.ip, self.port_min, self.port_max, self.collector.copy())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip": self.ip,
            "port_min": self.port_min,
            "port_max": self.port_max,
            "collector": self.collector.to_dict(),
        }


@dataclass
class ObjectConfig:
    """Settings of one named exporter object."""

    name: str
    ip: str
    port: int
    collector: CollectorConfig = field(default_factory=CollectorConfig)

    def copy(self) -> "ObjectConfig":
        return ObjectConfig(self.name, self.ip, self.port, self.collector.copy())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ip": self.ip,
            "port": self.port,
            "collector": self.collector.to_dict(),
        }
