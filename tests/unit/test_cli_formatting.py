from __future__ import annotations

import re

from helm_overrides.cli.formatting import format_chart, format_run, format_run_summary
from helm_overrides.engine.types import ChartResult, Outcome, RunResult


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class TestFormatChart:
    def test_applied(self) -> None:
        line = format_chart(ChartResult(chart="db", outcome=Outcome.APPLIED), color=False)
        assert line == "  ~ HelmRelease db: values overridden"

    def test_skipped(self) -> None:
        line = format_chart(ChartResult(chart="db", outcome=Outcome.SKIPPED), color=False)
        assert line == "  ? HelmRelease db: not found, skipped"

    def test_color_mode_contains_ansi(self) -> None:
        line = format_chart(ChartResult(chart="db", outcome=Outcome.APPLIED), color=True)
        assert "\x1b[" in line
        assert _strip_ansi(line) == "  ~ HelmRelease db: values overridden"


class TestFormatRun:
    def test_empty(self) -> None:
        assert format_run(RunResult(), color=False) == "No chart overrides configured."

    def test_one_line_per_chart(self) -> None:
        result = RunResult(
            charts=[
                ChartResult(chart="db", outcome=Outcome.APPLIED),
                ChartResult(chart="cache", outcome=Outcome.SKIPPED),
            ]
        )
        assert format_run(result, color=False).splitlines() == [
            "  ~ HelmRelease db: values overridden",
            "  ? HelmRelease cache: not found, skipped",
        ]


class TestFormatRunSummary:
    def test_counts(self) -> None:
        result = format_run_summary({"applied": 2, "skipped": 1}, color=False)
        assert result == "Transform complete! Charts: 2 applied, 1 skipped."

    def test_color_header(self) -> None:
        result = format_run_summary({"applied": 0, "skipped": 0}, color=True)
        assert _strip_ansi(result) == "Transform complete! Charts: 0 applied, 0 skipped."

    def test_summary_from_result(self) -> None:
        result = RunResult(charts=[ChartResult(chart="db", outcome=Outcome.SKIPPED)])
        assert result.summary() == {"applied": 0, "skipped": 1}
        assert result.skipped == ["db"]
        assert result.applied == []
