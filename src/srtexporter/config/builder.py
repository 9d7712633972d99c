"""
Collector configuration builder.

Builds one CollectorConfig from an optional ``collector`` section and a set
of defaults. A malformed section never fails the load; each field falls
back on its own:

- ``mode``: missing or unknown -> the default's mode
  (``collect_on_request`` for the compiled-in default).
- ``filterMode``: missing or unknown -> the default's filter mode and
  preset (``whitelist`` / common).
- ``variables``: explicit non-empty list wins. Otherwise a filter mode
  given in the section resolves through its preset (common when the mode
  names no preset); otherwise the default's variables.
- ``labels``: missing -> the default's labels; entries without a name
  are skipped.
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from ..collectors.variables import parse_preset, resolve_preset, resolve_variables
from ..models.config import (
    CollectorConfig,
    CollectorMode,
    FilterMode,
    FilterPreset,
    Label,
)
from ..validation import (
    ErrorSeverity,
    UnknownEnumValue,
    handle_config_error,
    normalize_token,
)
from .loader import ConfigNode

logger = logging.getLogger(__name__)

MODE_KEYS = ("mode", "collectorMode", "collector_mode")
FILTER_MODE_KEYS = ("filterMode", "filter_mode")
VARIABLES_KEYS = ("variables", "varList", "var_list")
LABELS_KEYS = ("labels", "labelList", "label_list")


def default_collector_config(preset: FilterPreset = FilterPreset.COMMON) -> CollectorConfig:
    """Collector used when nothing is configured: on-request, whitelist, preset variables."""
    filter_mode, variables = resolve_preset(preset)
    return CollectorConfig(
        mode=CollectorMode.COLLECT_ON_REQUEST,
        filter_mode=filter_mode,
        variables=variables,
        labels=[],
        preset=preset,
    )


def parse_collector_mode(value: Any) -> CollectorMode:
    """
    Parse a collector mode.

    Accepts enum members, their numeric values and symbolic names in any
    case and separator style (``collectPeriodically``, ``RECEIVE_PASSIVELY``).

    Raises:
        UnknownEnumValue: If the value names no collector mode
    """
    if isinstance(value, CollectorMode):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return CollectorMode(value)
        except ValueError:
            pass
    elif isinstance(value, str):
        token = normalize_token(value)
        for mode in CollectorMode:
            if normalize_token(mode.name) == token:
                return mode
    raise UnknownEnumValue(
        f"mode must be one of {[m.name.lower() for m in CollectorMode]}, got {value!r}",
        field_name="mode",
        value=value,
    )


def parse_filter_mode(value: Any) -> Tuple[FilterMode, Optional[FilterPreset]]:
    """
    Parse a filter mode or preset name.

    Returns:
        ``(filter_mode, preset)``; ``preset`` is None for plain
        ``whitelist``/``blacklist``.

    Raises:
        UnknownEnumValue: If the value is neither a filter mode nor a preset
    """
    if isinstance(value, FilterMode):
        return value, None
    if isinstance(value, FilterPreset):
        return resolve_preset(value)[0], value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return FilterMode(value), None
        except ValueError:
            pass
    elif isinstance(value, str):
        token = normalize_token(value)
        for mode in FilterMode:
            if normalize_token(mode.name) == token:
                return mode, None
        preset = parse_preset(value)
        if preset is not None:
            return resolve_preset(preset)[0], preset
    raise UnknownEnumValue(
        f"filterMode must be whitelist, blacklist or one of the presets "
        f"{[p.value for p in FilterPreset]}, got {value!r}",
        field_name="filterMode",
        value=value,
    )


def parse_labels(entries: List[Any], context: str = "labels") -> List[Label]:
    """
    Convert a list of ``{name, value}`` mappings to labels.

    Names and values are kept verbatim (values are stringified, a missing
    value becomes ``""``). Entries that are not mappings or have no name
    are skipped.
    """
    labels = []
    for index, entry in enumerate(entries):
        name = entry.get("name") if isinstance(entry, Mapping) else None
        if name is None or str(name) == "":
            logger.warning(f"Skipping {context}[{index}]: label without a name ({entry!r})")
            continue
        value = entry.get("value")
        labels.append(Label(name=str(name), value="" if value is None else str(value)))
    return labels


def _explicit_variables(node: ConfigNode) -> Optional[List[str]]:
    entries = node.get_sequence(*VARIABLES_KEYS)
    if not entries:
        return None
    return [str(entry) for entry in entries if entry is not None] or None


def build_collector_config(
    node: Optional[ConfigNode],
    defaults: Optional[CollectorConfig] = None,
) -> CollectorConfig:
    """
    Build a collector configuration from a ``collector`` section.

    Args:
        node: The parsed section, or None when the document has none
        defaults: Values for fields the section does not set; the
            compiled-in default collector when None

    Returns:
        A fully populated CollectorConfig with a non-empty variable list.
        ``defaults`` is never modified or shared.
    """
    base = defaults.copy() if defaults is not None else default_collector_config()
    if not base.variables:
        base.variables = resolve_variables(preset=base.preset)
    if node is None or node.is_empty:
        return base

    context = node.path or "collector"

    mode = base.mode
    if node.has(*MODE_KEYS):
        try:
            mode = parse_collector_mode(node.get_scalar(*MODE_KEYS))
        except UnknownEnumValue as e:
            handle_config_error(
                e, context, severity=ErrorSeverity.WARNING, reraise=False, logger=logger
            )

    filter_mode, preset = base.filter_mode, base.preset
    filter_given = False
    if node.has(*FILTER_MODE_KEYS):
        try:
            filter_mode, preset = parse_filter_mode(node.get_scalar(*FILTER_MODE_KEYS))
            filter_given = True
        except UnknownEnumValue as e:
            handle_config_error(
                e, context, severity=ErrorSeverity.WARNING, reraise=False, logger=logger
            )

    variables = _explicit_variables(node)
    if variables is None:
        if filter_given:
            variables = resolve_variables(preset=preset)
        else:
            variables = base.variables

    label_entries = node.get_sequence(*LABELS_KEYS)
    if label_entries is None:
        labels = base.labels
    else:
        labels = parse_labels(label_entries, context=f"{context}.labels")

    return CollectorConfig(
        mode=mode,
        filter_mode=filter_mode,
        variables=variables,
        labels=labels,
        preset=preset,
    )
