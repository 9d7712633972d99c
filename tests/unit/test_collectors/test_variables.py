"""
Unit tests for statistic variable presets and variable-list resolution.
"""

import pytest

from srtexporter.collectors.variables import (
    SRT_ALL_VARLIST,
    SRT_COMMON_VARLIST,
    SRT_DESTINATION_VARLIST,
    SRT_SOURCE_VARLIST,
    parse_preset,
    preset_variables,
    resolve_preset,
    resolve_variables,
)
from srtexporter.models import FilterMode, FilterPreset


@pytest.mark.unit
class TestPresetLists:
    """Test cases for the preset list contents."""

    def test_preset_sizes(self):
        assert len(SRT_SOURCE_VARLIST) == 16
        assert len(SRT_DESTINATION_VARLIST) == 15
        assert len(SRT_COMMON_VARLIST) == 27
        assert len(SRT_ALL_VARLIST) == 72

    def test_source_preset_order(self):
        assert SRT_SOURCE_VARLIST[:3] == ["pktSentTotal", "pktSndLossTotal", "pktSent"]
        assert SRT_SOURCE_VARLIST[-1] == "msRTT"

    def test_common_covers_source_and_destination(self):
        common = set(SRT_COMMON_VARLIST)
        assert set(SRT_SOURCE_VARLIST) <= common
        assert set(SRT_DESTINATION_VARLIST) <= common


@pytest.mark.unit
class TestParsePreset:
    """Test cases for preset name parsing."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("srtSource", FilterPreset.SOURCE),
            ("SRT_SOURCE", FilterPreset.SOURCE),
            ("source", FilterPreset.SOURCE),
            ("srt-destination", FilterPreset.DESTINATION),
            ("Common", FilterPreset.COMMON),
            ("srtAll", FilterPreset.ALL),
            (FilterPreset.ALL, FilterPreset.ALL),
        ],
    )
    def test_known_names(self, name, expected):
        assert parse_preset(name) is expected

    @pytest.mark.parametrize("name", ["whitelist", "srtEverything", "", None, 3])
    def test_unknown_names(self, name):
        assert parse_preset(name) is None


@pytest.mark.unit
class TestResolveVariables:
    """Test cases for variable list resolution."""

    def test_source_preset_returns_source_list(self):
        assert resolve_variables(preset=FilterPreset.SOURCE) == SRT_SOURCE_VARLIST

    def test_destination_preset_returns_destination_list(self):
        assert resolve_variables(preset=FilterPreset.DESTINATION) == SRT_DESTINATION_VARLIST

    def test_all_preset_returns_all_list(self):
        assert resolve_variables(preset=FilterPreset.ALL) == SRT_ALL_VARLIST

    def test_no_preset_returns_common_list(self):
        assert resolve_variables() == SRT_COMMON_VARLIST

    def test_explicit_list_wins_and_keeps_duplicates(self):
        explicit = ["msRTT", "pktSent", "msRTT"]
        assert resolve_variables(explicit, FilterPreset.SOURCE) == explicit

    def test_empty_explicit_list_falls_back_to_preset(self):
        assert resolve_variables([], FilterPreset.SOURCE) == SRT_SOURCE_VARLIST

    def test_result_is_a_copy(self):
        variables = resolve_variables(preset=FilterPreset.SOURCE)
        variables.append("extra")
        assert "extra" not in SRT_SOURCE_VARLIST

    def test_resolve_preset_uses_whitelist(self):
        for preset in FilterPreset:
            mode, variables = resolve_preset(preset)
            assert mode is FilterMode.WHITELIST
            assert variables

    def test_preset_variables_unknown_name_falls_back_to_common(self):
        assert preset_variables("srtEverything") == SRT_COMMON_VARLIST
        assert preset_variables("srtDestination") == SRT_DESTINATION_VARLIST
