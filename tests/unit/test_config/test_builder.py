"""
Unit tests for the collector configuration builder.

Covers the per-field fallback rules: unknown or missing values reset only
the affected field and never fail the build.
"""

import pytest

from srtexporter.collectors.variables import (
    SRT_COMMON_VARLIST,
    SRT_DESTINATION_VARLIST,
    SRT_SOURCE_VARLIST,
)
from srtexporter.config.builder import (
    build_collector_config,
    default_collector_config,
    parse_collector_mode,
    parse_filter_mode,
    parse_labels,
)
from srtexporter.config.loader import ConfigNode
from srtexporter.models import (
    CollectorConfig,
    CollectorMode,
    FilterMode,
    FilterPreset,
    Label,
)
from srtexporter.validation import UnknownEnumValue


@pytest.mark.unit
class TestParseCollectorMode:
    """Test cases for collector mode parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("collectOnRequest", CollectorMode.COLLECT_ON_REQUEST),
            ("COLLECT_PERIODICALLY", CollectorMode.COLLECT_PERIODICALLY),
            ("receive-passively", CollectorMode.RECEIVE_PASSIVELY),
            (2, CollectorMode.COLLECT_PERIODICALLY),
            (CollectorMode.RECEIVE_PASSIVELY, CollectorMode.RECEIVE_PASSIVELY),
        ],
    )
    def test_valid_values(self, value, expected):
        assert parse_collector_mode(value) is expected

    @pytest.mark.parametrize("value", ["sometimes", 7, True, None])
    def test_invalid_values(self, value):
        with pytest.raises(UnknownEnumValue) as exc_info:
            parse_collector_mode(value)
        assert exc_info.value.field_name == "mode"


@pytest.mark.unit
class TestParseFilterMode:
    """Test cases for filter mode and preset parsing."""

    def test_plain_modes_have_no_preset(self):
        assert parse_filter_mode("whitelist") == (FilterMode.WHITELIST, None)
        assert parse_filter_mode("BLACKLIST") == (FilterMode.BLACKLIST, None)
        assert parse_filter_mode(2) == (FilterMode.BLACKLIST, None)

    def test_presets_resolve_to_whitelist(self):
        assert parse_filter_mode("srtSource") == (FilterMode.WHITELIST, FilterPreset.SOURCE)
        assert parse_filter_mode("SRT_DESTINATION") == (
            FilterMode.WHITELIST,
            FilterPreset.DESTINATION,
        )

    def test_preset_and_mode_are_distinct(self):
        mode, preset = parse_filter_mode("srtCommon")
        assert mode is FilterMode.WHITELIST
        assert preset is FilterPreset.COMMON
        assert preset != FilterMode.WHITELIST

    def test_unknown_value(self):
        with pytest.raises(UnknownEnumValue):
            parse_filter_mode("greylist")


@pytest.mark.unit
class TestParseLabels:
    """Test cases for label list parsing."""

    def test_entries_passed_through(self):
        labels = parse_labels([{"name": "site", "value": "tokyo"}, {"name": "rack", "value": 4}])
        assert labels == [Label("site", "tokyo"), Label("rack", "4")]

    def test_duplicates_kept(self):
        labels = parse_labels([{"name": "a", "value": "1"}, {"name": "a", "value": "2"}])
        assert len(labels) == 2

    def test_entries_without_name_skipped(self, caplog):
        labels = parse_labels([{"value": "orphan"}, "site=tokyo", {"name": "ok"}])
        assert labels == [Label("ok", "")]
        assert "label without a name" in caplog.text


@pytest.mark.unit
class TestDefaultCollectorConfig:
    """Test cases for the compiled-in default collector."""

    def test_defaults(self):
        config = default_collector_config()
        assert config.mode is CollectorMode.COLLECT_ON_REQUEST
        assert config.filter_mode is FilterMode.WHITELIST
        assert config.preset is FilterPreset.COMMON
        assert config.variables == SRT_COMMON_VARLIST
        assert config.labels == []

    def test_preset_argument(self):
        config = default_collector_config(FilterPreset.SOURCE)
        assert config.variables == SRT_SOURCE_VARLIST


@pytest.mark.unit
class TestBuildCollectorConfig:
    """Test cases for building a collector from a configuration section."""

    def test_absent_node_gives_defaults(self):
        config = build_collector_config(None)
        assert config == default_collector_config()
        assert config.variables

    def test_empty_node_gives_defaults(self):
        config = build_collector_config(ConfigNode({}))
        assert config.mode is CollectorMode.COLLECT_ON_REQUEST
        assert config.variables == SRT_COMMON_VARLIST

    def test_full_section(self):
        node = ConfigNode(
            {
                "mode": "collectPeriodically",
                "filterMode": "blacklist",
                "variables": ["msRTT", "pktSent"],
                "labels": [{"name": "site", "value": "osaka"}],
            },
            "collector",
        )
        config = build_collector_config(node)
        assert config.mode is CollectorMode.COLLECT_PERIODICALLY
        assert config.filter_mode is FilterMode.BLACKLIST
        assert config.preset is None
        assert config.variables == ["msRTT", "pktSent"]
        assert config.labels == [Label("site", "osaka")]

    def test_preset_filter_mode_selects_preset_list(self):
        config = build_collector_config(ConfigNode({"filterMode": "srtDestination"}))
        assert config.filter_mode is FilterMode.WHITELIST
        assert config.preset is FilterPreset.DESTINATION
        assert config.variables == SRT_DESTINATION_VARLIST

    def test_plain_filter_mode_without_list_uses_common(self):
        config = build_collector_config(ConfigNode({"filterMode": "whitelist"}))
        assert config.variables == SRT_COMMON_VARLIST

    def test_unknown_mode_only_resets_mode(self, caplog):
        node = ConfigNode(
            {
                "mode": "sometimes",
                "filterMode": "srtSource",
                "labels": [{"name": "site", "value": "tokyo"}],
            },
            "collector",
        )
        config = build_collector_config(node)
        assert config.mode is CollectorMode.COLLECT_ON_REQUEST
        assert config.variables == SRT_SOURCE_VARLIST
        assert config.labels == [Label("site", "tokyo")]
        assert "sometimes" in caplog.text

    def test_unknown_filter_mode_keeps_default_variables(self):
        config = build_collector_config(ConfigNode({"filterMode": "greylist"}))
        assert config.filter_mode is FilterMode.WHITELIST
        assert config.variables == SRT_COMMON_VARLIST

    def test_malformed_fields_degrade(self):
        node = ConfigNode({"mode": ["x"], "variables": "msRTT", "labels": {"name": "x"}})
        config = build_collector_config(node)
        assert config == default_collector_config()

    def test_snake_case_keys(self):
        node = ConfigNode({"filter_mode": "srtSource", "label_list": [{"name": "a", "value": "b"}]})
        config = build_collector_config(node)
        assert config.preset is FilterPreset.SOURCE
        assert config.labels == [Label("a", "b")]

    def test_defaults_are_inherited(self):
        defaults = CollectorConfig(
            mode=CollectorMode.RECEIVE_PASSIVELY,
            filter_mode=FilterMode.BLACKLIST,
            variables=["msRTT"],
            labels=[Label("site", "tokyo")],
        )
        config = build_collector_config(ConfigNode({"labels": []}), defaults=defaults)
        assert config.mode is CollectorMode.RECEIVE_PASSIVELY
        assert config.filter_mode is FilterMode.BLACKLIST
        assert config.variables == ["msRTT"]
        assert config.labels == []

    def test_defaults_not_shared(self):
        defaults = default_collector_config()
        config = build_collector_config(None, defaults=defaults)
        config.variables.append("extra")
        config.labels.append(Label("x", "y"))
        assert "extra" not in defaults.variables
        assert defaults.labels == []

    def test_empty_default_variables_are_resolved(self):
        defaults = CollectorConfig(variables=[])
        config = build_collector_config(None, defaults=defaults)
        assert config.variables == SRT_COMMON_VARLIST
