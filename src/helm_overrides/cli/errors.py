"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    """Print a styled message to stderr."""
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a clean error message to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from helm_overrides.config.loader import ConfigError
    from helm_overrides.core.resource import ResourceLoadError
    from helm_overrides.engine.errors import (
        CircularVariableError,
        PatchFailedError,
        PathCollisionError,
        UndefinedVariableError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(exc, ResourceLoadError):
        _err(f"Invalid resources: {exc}", fg=fg)
    elif isinstance(exc, (UndefinedVariableError, CircularVariableError)):
        _err(f"Variable error: {exc}", fg=fg)
    elif isinstance(exc, PathCollisionError):
        _err(f"Override error: {exc}", fg=fg)
    elif isinstance(exc, PatchFailedError):
        _err(f"Patch failed: {exc}", fg=fg)
        if exc.__cause__ is not None:
            _err(f"  Caused by: {exc.__cause__}", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1
