"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from helm_overrides.config import load
from helm_overrides.core.resmap import ResMap
from helm_overrides.core.resource import Resource

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from helm_overrides.config.schema import OverrideConfig

_ENV_VARS = ("HELM_OVERRIDES_LOG", "HELM_OVERRIDES_NO_COLOR", "NO_COLOR")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove HELM_OVERRIDES_* env vars so unit tests don't leak host config."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_release() -> Callable[..., dict[str, Any]]:
    """Factory fixture: a HelmRelease document with a git chart source."""

    def _make(
        name: str, *, ref: str = "master", values: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "apiVersion": "helm.fluxcd.io/v1",
            "kind": "HelmRelease",
            "metadata": {"name": name, "namespace": "default"},
            "spec": {
                "chart": {"git": "https://github.com/example/charts", "path": name, "ref": ref},
                "releaseName": name,
            },
        }
        if values is not None:
            doc["spec"]["values"] = values
        return doc

    return _make


@pytest.fixture
def make_resmap() -> Callable[..., ResMap]:
    """Factory fixture: build a ResMap from plain documents."""

    def _make(*docs: dict[str, Any]) -> ResMap:
        return ResMap(Resource(doc) for doc in docs)

    return _make


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[str], OverrideConfig]:
    """Factory fixture: write YAML, return the loaded config."""

    def _make(yaml_str: str) -> OverrideConfig:
        (tmp_path / "overrides.yaml").write_text(yaml_str)
        return load(tmp_path / "overrides.yaml")

    return _make
