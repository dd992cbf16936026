"""YAML configuration loading and the convenience transform API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from helm_overrides.config.loader import (
    ConfigError,
    InvalidConfigError,
    MissingChartsError,
    dump_config,
    load_config,
    load_config_bytes,
)
from helm_overrides.config.schema import ChartOverride, OverrideConfig
from helm_overrides.engine.engine import OverrideEngine

if TYPE_CHECKING:
    from pathlib import Path

    from helm_overrides.core.resmap import ResMap
    from helm_overrides.engine.types import RunResult

__all__ = [
    "ChartOverride",
    "ConfigError",
    "InvalidConfigError",
    "MissingChartsError",
    "OverrideConfig",
    "dump_config",
    "load",
    "load_config",
    "load_config_bytes",
    "transform",
]


def load(path: Path | str) -> OverrideConfig:
    """Load a YAML configuration file."""
    return load_config(path)


def transform(
    config: OverrideConfig, resources: ResMap, *, logger: logging.Logger | None = None
) -> RunResult:
    """Apply *config*'s chart overrides to *resources* in place."""
    engine = OverrideEngine.from_config(config, logger=logger)
    return engine.run(resources)
