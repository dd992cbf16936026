"""CLI application for helm-overrides.

Usable as a kustomize exec transformer: resources come in on stdin and the
transformed stream goes to stdout, so everything else (logs, the run
summary) is written to stderr.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import typer

from helm_overrides import __version__
from helm_overrides.settings import Settings

app = typer.Typer(
    name="helm-overrides",
    no_args_is_help=True,
    add_completion=False,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_VERBOSITY_LEVELS = {1: logging.INFO, 2: logging.DEBUG}

_handler: logging.Handler | None = None


@dataclass(frozen=True)
class CliState:
    """Global options shared with every command through ``ctx.obj``."""

    verbose: int = 0

    @property
    def show_summary(self) -> bool:
        return self.verbose >= 1


def _log_level(verbose: int, settings: Settings) -> int | None:
    """Level for the ``helm_overrides`` logger, or ``None`` to leave logging alone.

    ``HELM_OVERRIDES_LOG`` wins over ``-v`` flags; an unknown name falls back to INFO.
    """
    if settings.log:
        level = logging.getLevelName(settings.log.upper())
        if isinstance(level, int):
            return level
        typer.echo(
            f"WARNING: invalid HELM_OVERRIDES_LOG level '{settings.log}'; defaulting to INFO",
            err=True,
        )
        return logging.INFO
    if verbose <= 0:
        return None
    return _VERBOSITY_LEVELS.get(verbose, logging.DEBUG)


def _configure_logging(level: int) -> None:
    """Route ``helm_overrides`` records to stderr at *level*; stdout stays YAML."""
    global _handler

    logger = logging.getLogger("helm_overrides")
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"helm-overrides {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Print the run summary (-v), add info logs (-v) or debug logs (-vv).",
    ),
) -> None:
    """Override values of Flux HelmReleases in a Kubernetes resource stream."""
    _ = version
    ctx.obj = CliState(verbose=verbose)
    level = _log_level(verbose, Settings())
    if level is not None:
        _configure_logging(level)


# Register commands after app is created to avoid circular imports.
from helm_overrides.cli import commands as _commands  # noqa: E402, F401
