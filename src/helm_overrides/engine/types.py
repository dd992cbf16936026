"""Engine types (run state, per-chart outcomes)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EngineState(str, Enum):
    IDLE = "idle"
    CONFIGURING = "configuring"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class Outcome(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"


class ChartResult(BaseModel):
    chart: str
    outcome: Outcome


class RunResult(BaseModel):
    charts: list[ChartResult] = Field(default_factory=list)

    @property
    def applied(self) -> list[str]:
        return [c.chart for c in self.charts if c.outcome == Outcome.APPLIED]

    @property
    def skipped(self) -> list[str]:
        return [c.chart for c in self.charts if c.outcome == Outcome.SKIPPED]

    def summary(self) -> dict[str, int]:
        counts = {o.value: 0 for o in Outcome}
        for c in self.charts:
            counts[c.outcome.value] += 1
        return counts
