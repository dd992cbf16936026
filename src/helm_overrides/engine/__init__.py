"""Chart override engine: variable resolution, patch building, application."""

from helm_overrides.engine.engine import HELM_RELEASE_GVK, OverrideEngine
from helm_overrides.engine.errors import (
    CircularVariableError,
    EngineError,
    EngineStateError,
    LookupFailedError,
    PatchFailedError,
    PathCollisionError,
    ReferenceFieldError,
    UndefinedVariableError,
)
from helm_overrides.engine.paths import Leaf, NestedPatch, build_patch, insert
from helm_overrides.engine.types import ChartResult, EngineState, Outcome, RunResult
from helm_overrides.engine.variables import VariableResolver

__all__ = [
    "HELM_RELEASE_GVK",
    "ChartResult",
    "CircularVariableError",
    "EngineError",
    "EngineState",
    "EngineStateError",
    "Leaf",
    "LookupFailedError",
    "NestedPatch",
    "OverrideEngine",
    "Outcome",
    "PatchFailedError",
    "PathCollisionError",
    "ReferenceFieldError",
    "RunResult",
    "UndefinedVariableError",
    "VariableResolver",
    "build_patch",
    "insert",
]
