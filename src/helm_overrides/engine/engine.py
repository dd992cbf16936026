"""Chart override engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from helm_overrides.core.resource import Gvk, ResId, ResourceError, ResourceFactory
from helm_overrides.engine.errors import (
    EngineStateError,
    LookupFailedError,
    PatchFailedError,
    ReferenceFieldError,
)
from helm_overrides.engine.paths import build_patch
from helm_overrides.engine.types import ChartResult, EngineState, Outcome, RunResult
from helm_overrides.engine.variables import VariableResolver

if TYPE_CHECKING:
    from helm_overrides.config.schema import ChartOverride, OverrideConfig
    from helm_overrides.core.resmap import ResMap
    from helm_overrides.core.resource import Resource
    from helm_overrides.engine.paths import NestedPatch

HELM_RELEASE_GVK = Gvk(group="helm.fluxcd.io", version="v1", kind="HelmRelease")


def _chart_spec(document: dict[str, Any], chart: str) -> dict[str, Any]:
    """Return the target's ``spec.chart`` mapping, where the chart ref lives."""
    spec = document.get("spec")
    chart_spec = spec.get("chart") if isinstance(spec, dict) else None
    if not isinstance(chart_spec, dict):
        raise ReferenceFieldError(chart)
    return chart_spec


def values_envelope(values: dict[str, Any]) -> dict[str, Any]:
    """Wrap override values at the HelmRelease ``spec.values`` location."""
    return {"spec": {"values": values}}


class OverrideEngine:
    """Apply configured chart overrides to HelmReleases of a resource collection.

    Entries are processed in configuration order and each one is independent:
    a failing entry aborts the run but earlier entries keep their effects.
    A HelmRelease missing from the collection is logged and skipped.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        factory: ResourceFactory | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._factory = factory or ResourceFactory()
        self._config: OverrideConfig | None = None
        self._variables: VariableResolver | None = None
        self.state = EngineState.IDLE
        self.result: RunResult | None = None
        self.error: Exception | None = None

    @classmethod
    def from_config(
        cls, config: OverrideConfig, *, logger: logging.Logger | None = None
    ) -> OverrideEngine:
        """Build an engine configured from an already-validated config."""
        from helm_overrides.config.loader import MissingChartsError

        if config.charts is None:
            raise MissingChartsError("'charts' is required")
        engine = cls(logger=logger)
        engine._set_config(config)
        return engine

    @property
    def config(self) -> OverrideConfig | None:
        return self._config

    @property
    def _resolver(self) -> VariableResolver:
        if self._variables is None:
            raise EngineStateError("Engine must be configured before resolving variables")
        return self._variables

    def _set_config(self, config: OverrideConfig) -> None:
        self._config = config
        self._variables = VariableResolver(config.global_vars)
        self.state = EngineState.CONFIGURING

    def configure(self, raw: bytes | str) -> None:
        """Parse raw YAML configuration; no resource is touched.

        Raises:
            InvalidConfigError: The configuration cannot be parsed or validated.
            MissingChartsError: The ``charts`` list is absent.
        """
        from helm_overrides.config.loader import load_config_bytes

        self.state = EngineState.CONFIGURING
        try:
            config = load_config_bytes(raw)
        except Exception as exc:
            self.state = EngineState.FAILED
            self.error = exc
            raise
        self._set_config(config)
        self._logger.debug("Configured %d chart override(s)", len(config.charts or []))

    def run(self, resources: ResMap) -> RunResult:
        """Apply every configured override to *resources*, in order.

        Returns the per-chart outcomes. On failure the partial result stays on
        :attr:`result`, the error on :attr:`error`, and the error is raised.

        Raises:
            EngineStateError: :meth:`configure` has not succeeded.
            EngineError: The first hard failure of the run.
        """
        if self._config is None:
            raise EngineStateError("Engine must be configured before run()")

        self.state = EngineState.RUNNING
        self.result = RunResult()
        self.error = None
        try:
            for chart in self._config.charts or []:
                outcome = self._apply_chart(chart, resources)
                self.result.charts.append(ChartResult(chart=chart.name, outcome=outcome))
        except Exception as exc:
            self.state = EngineState.FAILED
            self.error = exc
            raise

        self.state = EngineState.SUCCESS
        s = self.result.summary()
        self._logger.info(
            "Chart overrides done: %d applied, %d skipped", s["applied"], s["skipped"]
        )
        return self.result

    def _find_target(self, chart: ChartOverride, resources: ResMap) -> Resource | None:
        res_id = ResId(gvk=HELM_RELEASE_GVK, name=chart.name)
        try:
            return resources.get_by_id(res_id)
        except ResourceError as exc:
            raise LookupFailedError(chart.name, str(exc)) from exc

    def build_patch(self, chart: ChartOverride) -> NestedPatch:
        """Resolve every override value and nest it under its dotted path."""
        return build_patch((p, self._resolver.resolve(v)) for p, v in chart.overrides.items())

    def _apply_chart(self, chart: ChartOverride, resources: ResMap) -> Outcome:
        origin = self._find_target(chart, resources)
        if origin is None:
            self._logger.warning("HelmRelease %s not found, skipping", chart.name)
            return Outcome.SKIPPED

        # Everything that can fail on bad input is resolved before the target is touched.
        new_ref = self._resolver.resolve(chart.reference) if chart.reference else None
        patch = self.build_patch(chart)

        if new_ref is not None:
            _chart_spec(origin.as_map(), chart.name)["ref"] = new_ref
            self._logger.debug("Set chart ref of %s to %s", chart.name, new_ref)

        override = self._factory.from_map(values_envelope(patch.to_dict()))
        try:
            origin.patch(override.copy())
        except ResourceError as exc:
            self._logger.error("patch error: %s", exc)
            raise PatchFailedError(chart.name, str(exc)) from exc

        self._logger.debug("Applied %d override(s) to %s", len(chart.overrides), chart.name)
        return Outcome.APPLIED
