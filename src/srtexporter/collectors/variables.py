"""
Statistic variable presets and variable-list resolution.

The preset lists name fields of the SRT per-socket statistics structure.
Order matters to the exporter and duplicates are kept.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

from ..models.config import FilterMode, FilterPreset
from ..validation import normalize_token

logger = logging.getLogger(__name__)

SRT_SOURCE_VARLIST = [
    "pktSentTotal",
    "pktSndLossTotal",
    "pktSent",
    "pktSndLoss",
    "pktRetrans",
    "pktRecvACK",
    "pktRecvNAK",
    "byteSent",
    "byteRetrans",
    "byteSndDrop",
    "pktSndDrop",
    "mbpsSendRate",
    "usSndDuration",
    "msSndTsbPdDelay",
    "mbpsBandwidth",
    "msRTT",
]

SRT_DESTINATION_VARLIST = [
    "pktRecvTotal",
    "pktRcvLossTotal",
    "pktRecv",
    "pktRcvLoss",
    "pktRcvRetrans",
    "pktSentACK",
    "pktSentNAK",
    "byteRecv",
    "byteRcvDrop",
    "pktRcvDrop",
    "mbpsRecvRate",
    "usSndDuration",
    "msSndTsbPdDelay",
    "mbpsBandwidth",
    "msRTT",
]

SRT_COMMON_VARLIST = [
    "pktSentTotal",
    "pktSndLossTotal",
    "pktSent",
    "pktSndLoss",
    "pktRetrans",
    "pktRecvACK",
    "pktRecvNAK",
    "byteSent",
    "byteRetrans",
    "byteSndDrop",
    "pktSndDrop",
    "mbpsSendRate",
    "pktRecvTotal",
    "pktRcvLossTotal",
    "pktRecv",
    "pktRcvLoss",
    "pktRcvRetrans",
    "pktSentACK",
    "pktSentNAK",
    "byteRecv",
    "byteRcvDrop",
    "pktRcvDrop",
    "mbpsRecvRate",
    "usSndDuration",
    "msSndTsbPdDelay",
    "mbpsBandwidth",
    "msRTT",
]

SRT_ALL_VARLIST = [
    "msTimeStamp",
    "pktSentTotal",
    "pktRecvTotal",
    "pktSndLossTotal",
    "pktRcvLossTotal",
    "pktRetransTotal",
    "pktSentACKTotal",
    "pktRecvACKTotal",
    "pktSentNAKTotal",
    "pktRecvNAKTotal",
    "usSndDurationTotal",
    "pktSndDropTotal",
    "pktRcvDropTotal",
    "pktRcvUndecryptTotal",
    "byteSentTotal",
    "byteRecvTotal",
    "byteRcvLossTotal",
    "byteRetransTotal",
    "byteSndDropTotal",
    "byteRcvDropTotal",
    "byteRcvUndecryptTotal",
    "pktSent",
    "pktRecv",
    "pktSndLoss",
    "pktRcvLoss",
    "pktRetrans",
    "pktRcvRetrans",
    "pktSentACK",
    "pktRecvACK",
    "pktSentNAK",
    "pktRecvNAK",
    "mbpsSendRate",
    "mbpsRecvRate",
    "usSndDuration",
    "pktReorderDistance",
    "pktRcvAvgBelatedTime",
    "pktRcvBelated",
    "pktSndDrop",
    "pktRcvDrop",
    "pktRcvUndecrypt",
    "byteSent",
    "byteRecv",
    "byteRcvLoss",
    "byteRetrans",
    "byteSndDrop",
    "byteRcvDrop",
    "byteRcvUndecrypt",
    "usPktSndPeriod",
    "pktFlowWindow",
    "pktCongestionWindow",
    "pktFlightSize",
    "msRTT",
    "mbpsBandwidth",
    "byteAvailSndBuf",
    "byteAvailRcvBuf",
    "mbpsMaxBW",
    "byteMSS",
    "byteSndBuf",
    "msSndBuf",
    "msSndTsbPdDelay",
    "pktRcvBuf",
    "byteRcvBuf",
    "msRcvBuf",
    "msRcvTsbPdDelay",
    "pktSndFilterExtraTotal",
    "pktRcvFilterExtraTotal",
    "pktRcvFilterSupplyTotal",
    "pktRcvFilterLossTotal",
    "pktSndFilterExtra",
    "pktRcvFilterExtra",
    "pktRcvFilterSupply",
    "pktRcvFilterLoss",
]

_PRESET_VARIABLES = {
    FilterPreset.SOURCE: SRT_SOURCE_VARLIST,
    FilterPreset.DESTINATION: SRT_DESTINATION_VARLIST,
    FilterPreset.COMMON: SRT_COMMON_VARLIST,
    FilterPreset.ALL: SRT_ALL_VARLIST,
}

# Every preset currently selects statistics by whitelist.
_PRESET_FILTER_MODES = {
    FilterPreset.SOURCE: FilterMode.WHITELIST,
    FilterPreset.DESTINATION: FilterMode.WHITELIST,
    FilterPreset.COMMON: FilterMode.WHITELIST,
    FilterPreset.ALL: FilterMode.WHITELIST,
}


def parse_preset(name: Union[str, FilterPreset, None]) -> Optional[FilterPreset]:
    """Parse a preset name such as ``srtSource``, ``SRT_SOURCE`` or ``all``.

    Returns:
        The matching FilterPreset, or None when the name is not a preset.
    """
    if isinstance(name, FilterPreset):
        return name
    if not isinstance(name, str):
        return None
    token = normalize_token(name)
    if token.startswith("srt"):
        token = token[3:]
    for preset in FilterPreset:
        if preset.value == token:
            return preset
    return None


def resolve_preset(preset: Optional[FilterPreset]) -> Tuple[FilterMode, List[str]]:
    """
    Resolve a preset to its filter mode and variable list.

    ``None`` resolves to the common preset. The returned list is a fresh
    copy owned by the caller.
    """
    if preset not in _PRESET_VARIABLES:
        preset = FilterPreset.COMMON
    return _PRESET_FILTER_MODES[preset], list(_PRESET_VARIABLES[preset])


def resolve_variables(
    explicit: Optional[Iterable[str]] = None,
    preset: Optional[FilterPreset] = None,
) -> List[str]:
    """
    Resolve the variable list of a collector.

    An explicit, non-empty list always wins and is returned as given
    (order and duplicates preserved). Otherwise the list of ``preset`` is
    used; source and destination map to their own lists, anything else
    to the common list.
    """
    if explicit is not None:
        variables = [str(name) for name in explicit]
        if variables:
            return variables
    _, variables = resolve_preset(preset)
    return variables


def preset_variables(name: Union[str, FilterPreset, None]) -> List[str]:
    """Variable list for a preset given by name; unknown names get the common list."""
    preset = parse_preset(name)
    if preset is None:
        logger.debug(f"Unknown variable preset {name!r}, using common preset")
        preset = FilterPreset.COMMON
    return resolve_variables(preset=preset)
