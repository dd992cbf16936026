"""YAML configuration loader."""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML

from helm_overrides.config.schema import OverrideConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised for configuration loading / validation errors."""


class InvalidConfigError(ConfigError):
    """The configuration cannot be parsed or does not match the schema."""


class MissingChartsError(ConfigError):
    """The configuration has no ``charts`` list."""


def parse_config(raw: Any, *, source: str = "<config>") -> OverrideConfig:
    """Validate an already-deserialized configuration mapping.

    Raises:
        InvalidConfigError: *raw* is not a mapping or fails validation.
        MissingChartsError: ``charts`` is absent or null.
    """
    if not isinstance(raw, dict):
        raise InvalidConfigError(f"{source}: expected a mapping, got {type(raw).__name__}")

    try:
        config = OverrideConfig.model_validate(raw)
    except ValidationError as exc:
        raise InvalidConfigError(f"{source}: {exc}") from exc

    if config.charts is None:
        raise MissingChartsError(f"{source}: 'charts' is required")

    logger.debug(
        "Parsed %s (%d global(s), %d chart(s))", source, len(config.global_vars), len(config.charts)
    )
    return config


def load_config_bytes(raw: bytes | str, *, source: str = "<config>") -> OverrideConfig:
    """Parse configuration from raw YAML text.

    Raises:
        InvalidConfigError: On YAML parse errors or validation failures.
        MissingChartsError: When the ``charts`` list is missing.
    """
    try:
        data = YAML(typ="safe").load(raw)
    except Exception as exc:
        raise InvalidConfigError(f"Failed to parse {source}: {exc}") from exc
    return parse_config(data, source=source)


def load_config(path: Path | str) -> OverrideConfig:
    """Load a YAML configuration file.

    Raises:
        ConfigError: On read errors, YAML parse errors, or validation failures.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise InvalidConfigError(f"Failed to read {path}: {exc}") from exc

    config = load_config_bytes(raw, source=str(path))
    logger.info("Loaded config from %s (%d chart override(s))", path, len(config.charts or []))
    return config


def dump_config(config: OverrideConfig) -> str:
    """Serialize *config* back to YAML; ``load_config_bytes`` reverses it."""
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    buf = StringIO()
    yaml.dump(config.to_wire(), buf)
    return buf.getvalue()
