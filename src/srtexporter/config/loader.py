"""
Configuration source loading utilities.

This module reads the exporter configuration file (YAML, or TOML by file
suffix) and wraps the parsed document in ConfigNode, the small tree
interface the rest of the package works against.
"""

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

import yaml

from ..validation import ConfigMalformed, ConfigSourceUnreadable

logger = logging.getLogger(__name__)

TOML_SUFFIXES = (".toml",)


class ConfigNode:
    """
    Read-only view of one mapping in a parsed configuration document.

    Every accessor takes one or more key aliases (e.g. ``"portMin"``,
    ``"port_min"``); the first alias present wins. A key whose value is
    null counts as absent.
    """

    def __init__(self, data: Any = None, path: str = ""):
        self._data = data if isinstance(data, Mapping) else {}
        self.path = path

    def __repr__(self) -> str:
        return f"ConfigNode(path={self.path!r}, keys={list(self._data)!r})"

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    @property
    def is_empty(self) -> bool:
        return not self._data

    def _lookup(self, keys) -> Optional[str]:
        for key in keys:
            if self._data.get(key) is not None:
                return key
        return None

    def _child_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def has(self, *keys: str) -> bool:
        """Whether any of ``keys`` is present with a non-null value."""
        return self._lookup(keys) is not None

    def get_scalar(self, *keys: str, default: Any = None) -> Any:
        """
        Scalar value of the first present key.

        Mappings and sequences are not scalars; they are reported and
        ``default`` is returned instead.
        """
        key = self._lookup(keys)
        if key is None:
            return default
        value = self._data[key]
        if isinstance(value, (Mapping, list, tuple)):
            logger.warning(
                f"Expected a scalar for '{self._child_path(key)}', "
                f"got {type(value).__name__}; ignoring it"
            )
            return default
        return value

    def get_sequence(self, *keys: str) -> Optional[List[Any]]:
        """List value of the first present key, or None if absent or not a list."""
        key = self._lookup(keys)
        if key is None:
            return None
        value = self._data[key]
        if not isinstance(value, (list, tuple)):
            logger.warning(
                f"Expected a list for '{self._child_path(key)}', "
                f"got {type(value).__name__}; ignoring it"
            )
            return None
        return list(value)

    def get_node(self, *keys: str) -> Optional["ConfigNode"]:
        """Child mapping of the first present key, or None if absent or not a mapping."""
        key = self._lookup(keys)
        if key is None:
            return None
        value = self._data[key]
        if not isinstance(value, Mapping):
            logger.warning(
                f"Expected a mapping for '{self._child_path(key)}', "
                f"got {type(value).__name__}; ignoring it"
            )
            return None
        return ConfigNode(value, self._child_path(key))


def read_config_source(file_path: Union[str, Path]) -> ConfigNode:
    """
    Load and parse an exporter configuration file.

    Files ending in ``.toml`` are parsed with tomllib, anything else as
    YAML. An empty file yields an empty node.

    Args:
        file_path: Path to the configuration file

    Returns:
        The root ConfigNode of the document

    Raises:
        ConfigSourceUnreadable: If the file is missing or cannot be read
        ConfigMalformed: If the file cannot be parsed or its top level is
            not a mapping
    """
    path = Path(file_path)
    logger.info(f"Loading exporter configuration from: {path}")

    if not path.is_file():
        raise ConfigSourceUnreadable(
            f"Configuration file not found: {path}", field_name="source", value=str(path)
        )

    try:
        if path.suffix.lower() in TOML_SUFFIXES:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigMalformed(
            f"Cannot parse configuration file {path}: {e}", field_name="source", value=str(path)
        ) from e
    except OSError as e:
        raise ConfigSourceUnreadable(
            f"Cannot read configuration file {path}: {e}", field_name="source", value=str(path)
        ) from e

    if data is None:
        logger.info(f"Configuration file {path} is empty")
        return ConfigNode({})
    if not isinstance(data, Mapping):
        raise ConfigMalformed(
            f"Top level of {path} must be a mapping, got {type(data).__name__}",
            field_name="source",
            value=str(path),
        )
    return ConfigNode(data)
