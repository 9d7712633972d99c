"""
Statistic variable presets for the SRT collectors.
"""

from .variables import (
    SRT_ALL_VARLIST,
    SRT_COMMON_VARLIST,
    SRT_DESTINATION_VARLIST,
    SRT_SOURCE_VARLIST,
    parse_preset,
    preset_variables,
    resolve_preset,
    resolve_variables,
)

__all__ = [
    "SRT_SOURCE_VARLIST",
    "SRT_DESTINATION_VARLIST",
    "SRT_COMMON_VARLIST",
    "SRT_ALL_VARLIST",
    "parse_preset",
    "preset_variables",
    "resolve_preset",
    "resolve_variables",
]
