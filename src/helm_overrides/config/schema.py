"""Configuration models for the override transformer."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _none_to_dict(v: Any) -> Any:
    return v if v is not None else {}


def _none_to_str(v: Any) -> Any:
    return v if v is not None else ""


class ChartOverride(BaseModel):
    """One ``charts`` entry: which HelmRelease to touch and what to override.

    ``override`` maps dotted value paths (``conf.ceph.admin_keyring``) to
    values; both ``chartRef`` and override values may reference globals
    with ``$(name)``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    name: str = Field(alias="chartName", min_length=1)
    reference: Annotated[str, BeforeValidator(_none_to_str)] = Field(default="", alias="chartRef")
    overrides: Annotated[dict[str, Any], BeforeValidator(_none_to_dict)] = Field(
        default_factory=dict, alias="override"
    )


class OverrideConfig(BaseModel):
    """Transformer configuration — validates the YAML structure directly.

    Keys other than ``global`` and ``charts`` (kustomize's ``apiVersion``,
    ``kind``, ``metadata``) are ignored. ``charts`` is left as ``None`` when
    absent so the loader can tell a missing list from an empty one.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    global_vars: Annotated[dict[str, Any], BeforeValidator(_none_to_dict)] = Field(
        default_factory=dict, alias="global"
    )
    charts: list[ChartOverride] | None = None

    def to_wire(self) -> dict[str, Any]:
        """Dump using the YAML key names."""
        data: dict[str, Any] = {"global": dict(self.global_vars)}
        if self.charts is not None:
            data["charts"] = [c.model_dump(by_alias=True) for c in self.charts]
        return data
