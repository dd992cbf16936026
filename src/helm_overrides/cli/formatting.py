"""Run output rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import typer

if TYPE_CHECKING:
    from collections.abc import Callable

    from helm_overrides.engine.types import ChartResult, RunResult


class _OutcomeStyle(NamedTuple):
    color: str
    symbol: str
    desc: str


_OUTCOME_STYLES: dict[str, _OutcomeStyle] = {
    "applied": _OutcomeStyle("yellow", "~", "values overridden"),
    "skipped": _OutcomeStyle("bright_black", "?", "not found, skipped"),
}


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def format_chart(chart: ChartResult, *, color: bool = True) -> str:
    """Render ``  ~ HelmRelease db: values overridden``."""
    s = _OUTCOME_STYLES[chart.outcome.value]
    return styler(color)(f"  {s.symbol} HelmRelease {chart.chart}: {s.desc}", fg=s.color)


def format_run(result: RunResult, *, color: bool = True) -> str:
    """Render one line per configured chart override."""
    if not result.charts:
        return "No chart overrides configured."
    return "\n".join(format_chart(c, color=color) for c in result.charts)


def format_run_summary(summary: dict[str, int], *, color: bool = True) -> str:
    """Render ``Transform complete! Charts: 2 applied, 1 skipped.``"""
    style = styler(color)
    header = style("Transform complete!", fg="green", bold=True)
    applied, skipped = summary.get("applied", 0), summary.get("skipped", 0)
    return f"{header} Charts: {applied} applied, {skipped} skipped."
