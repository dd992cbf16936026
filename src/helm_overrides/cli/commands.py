"""CLI command implementations."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer

from helm_overrides.cli import CliState, app
from helm_overrides.cli.errors import handle_error
from helm_overrides.settings import Settings

ConfigArg = Annotated[
    Path,
    typer.Argument(help="Path to the chart override configuration file."),
]

NoColor = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output."),
]


def _use_color(no_color: bool) -> bool:
    """Determine whether to use color output."""
    return not (no_color or Settings().no_color or os.environ.get("NO_COLOR"))


@app.command()
def transform(
    ctx: typer.Context,
    config: ConfigArg,
    resources: Annotated[
        Path | None,
        typer.Option("--resources", "-r", help="Resource stream to read (default: stdin)."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here (default: stdout)."),
    ] = None,
    no_color: NoColor = False,
) -> None:
    """Apply chart overrides to a multi-document YAML resource stream.

    With ``-v`` the per-chart outcomes and a summary are printed to stderr.
    """
    from helm_overrides.cli.formatting import format_run, format_run_summary
    from helm_overrides.config import load, transform as transform_fn
    from helm_overrides.core.resmap import ResMap

    color = _use_color(no_color)
    try:
        cfg = load(config)
        resmap = ResMap.from_yaml(resources if resources is not None else sys.stdin.read())
        result = transform_fn(cfg, resmap)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    if output is not None:
        output.write_text(resmap.to_yaml(), encoding="utf-8")
    else:
        typer.echo(resmap.to_yaml(), nl=False)

    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    if state.show_summary:
        typer.echo(format_run(result, color=color), err=True)
        typer.echo(format_run_summary(result.summary(), color=color), err=True)


@app.command()
def validate(config: ConfigArg, no_color: NoColor = False) -> None:
    """Check that a configuration file parses and validates."""
    from helm_overrides.config import load

    color = _use_color(no_color)
    try:
        cfg = load(config)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    charts = cfg.charts or []
    typer.echo(
        f"Configuration valid: {len(charts)} chart override(s), "
        f"{len(cfg.global_vars)} global variable(s)."
    )
