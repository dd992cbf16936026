"""Tests for the YAML configuration loader and schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from helm_overrides.config.loader import (
    ConfigError,
    InvalidConfigError,
    MissingChartsError,
    dump_config,
    load_config,
    load_config_bytes,
    parse_config,
)
from helm_overrides.config.schema import ChartOverride, OverrideConfig

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

_FULL_YAML = """\
apiVersion: openinfradev.github.com/v1
kind: HelmValuesTransformer
metadata:
  name: site
global:
  env: prod
  replicas: 3
  monitors:
    - mon-0
    - mon-1
charts:
  - chartName: db
    chartRef: repo/$(env)-chart
    override:
      conf.replicas: $(replicas)
      conf.tag: $(env)-v1
      conf.monitors: $(monitors)
  - chartName: cache
    override:
      image.tag: "7.2"
"""


class TestLoadConfig:
    def test_full_config(self, make_config: Callable[[str], OverrideConfig]) -> None:
        cfg = make_config(_FULL_YAML)

        assert cfg.global_vars == {"env": "prod", "replicas": 3, "monitors": ["mon-0", "mon-1"]}
        assert cfg.charts is not None
        assert [c.name for c in cfg.charts] == ["db", "cache"]

        db = cfg.charts[0]
        assert db.reference == "repo/$(env)-chart"
        assert list(db.overrides) == ["conf.replicas", "conf.tag", "conf.monitors"]
        assert db.overrides["conf.tag"] == "$(env)-v1"

        cache = cfg.charts[1]
        assert cache.reference == ""
        assert cache.overrides == {"image.tag": "7.2"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidConfigError, match="Failed to read"):
            load_config(tmp_path / "nope.yaml")

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("charts: []\n")
        assert load_config(str(path)).charts == []


class TestLoadConfigBytes:
    def test_empty_charts_accepted(self) -> None:
        cfg = load_config_bytes(b"charts: []\n")
        assert cfg.charts == []
        assert cfg.global_vars == {}

    @pytest.mark.parametrize("raw", [b"global:\n  env: prod\n", b"charts:\n", b"charts: null\n"])
    def test_missing_charts(self, raw: bytes) -> None:
        with pytest.raises(MissingChartsError):
            load_config_bytes(raw)

    def test_yaml_syntax_error(self) -> None:
        with pytest.raises(InvalidConfigError, match="Failed to parse"):
            load_config_bytes(b"charts: [\n  - chartName: db\n")

    @pytest.mark.parametrize("raw", [b"", b"- a\n- b\n", b"just text\n"])
    def test_non_mapping_document(self, raw: bytes) -> None:
        with pytest.raises(InvalidConfigError, match="expected a mapping"):
            load_config_bytes(raw)

    def test_empty_chart_name_rejected(self) -> None:
        with pytest.raises(InvalidConfigError):
            load_config_bytes(b"charts:\n  - chartName: ''\n")

    def test_missing_chart_name_rejected(self) -> None:
        with pytest.raises(InvalidConfigError):
            load_config_bytes(b"charts:\n  - chartRef: master\n")

    def test_unknown_chart_key_rejected(self) -> None:
        with pytest.raises(InvalidConfigError, match="overrides"):
            load_config_bytes(b"charts:\n  - chartName: db\n    overrides: {a: 1}\n")

    def test_null_override_and_global(self) -> None:
        cfg = load_config_bytes(b"global:\ncharts:\n  - chartName: db\n    override:\n")
        assert cfg.global_vars == {}
        assert cfg.charts is not None
        assert cfg.charts[0].overrides == {}

    def test_config_errors_share_base(self) -> None:
        assert issubclass(InvalidConfigError, ConfigError)
        assert issubclass(MissingChartsError, ConfigError)


class TestRoundTrip:
    def test_dump_then_load_is_equal(self) -> None:
        cfg = load_config_bytes(_FULL_YAML.encode())
        again = load_config_bytes(dump_config(cfg).encode())
        assert again == cfg

    def test_dump_uses_wire_names(self) -> None:
        cfg = load_config_bytes(_FULL_YAML.encode())
        text = dump_config(cfg)
        assert "chartName: db" in text
        assert "chartRef: repo/$(env)-chart" in text
        assert "override:" in text
        assert "global:" in text

    def test_dump_keeps_null_values(self) -> None:
        cfg = load_config_bytes(b"charts:\n  - chartName: db\n    override:\n      conf.drop: null\n")
        again = load_config_bytes(dump_config(cfg).encode())
        assert again.charts is not None
        assert again.charts[0].overrides == {"conf.drop": None}


class TestSchema:
    def test_populate_by_name(self) -> None:
        chart = ChartOverride(name="db", reference="main", overrides={"a.b": 1})
        assert chart.model_dump(by_alias=True) == {
            "chartName": "db",
            "chartRef": "main",
            "override": {"a.b": 1},
        }

    def test_chart_override_is_frozen(self) -> None:
        chart = ChartOverride(name="db")
        with pytest.raises(ValidationError):
            chart.name = "other"  # type: ignore[misc]

    def test_parse_config_directly(self) -> None:
        cfg = parse_config({"global": {"a": 1}, "charts": [{"chartName": "x"}]})
        assert cfg.global_vars == {"a": 1}
        assert cfg.charts == [ChartOverride(name="x")]

    def test_charts_default_none(self) -> None:
        assert OverrideConfig().charts is None
