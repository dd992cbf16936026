"""Engine error types."""

from __future__ import annotations


class EngineError(Exception):
    """Base exception for engine errors."""


class EngineStateError(EngineError):
    """Raised when the engine is used out of order (e.g. run before configure)."""


class LookupFailedError(EngineError):
    """Raised when the resource collection fails to look up a target."""

    def __init__(self, chart: str, message: str) -> None:
        super().__init__(f"Lookup of HelmRelease {chart} failed: {message}")
        self.chart = chart


class UndefinedVariableError(EngineError):
    """Raised when a ``$(name)`` reference has no entry in the global table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Undefined global variable: $({name})")
        self.name = name


class CircularVariableError(EngineError):
    """Raised when a global variable expands, directly or indirectly, into itself."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Circular reference to global variable: $({name})")
        self.name = name


class PathCollisionError(EngineError):
    """Raised when a dotted path descends through a non-mapping value."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Override path collides with an existing value: {path}")
        self.path = path


class ReferenceFieldError(EngineError):
    """Raised when a target has no ``spec.chart`` mapping to hold the chart ref."""

    def __init__(self, chart: str) -> None:
        super().__init__(f"HelmRelease {chart} has no spec.chart mapping")
        self.chart = chart


class PatchFailedError(EngineError):
    """Raised when applying the values patch onto a target fails.

    The collection's error is chained via ``__cause__``.
    """

    def __init__(self, chart: str, message: str) -> None:
        super().__init__(f"Patch of HelmRelease {chart} failed: {message}")
        self.chart = chart
