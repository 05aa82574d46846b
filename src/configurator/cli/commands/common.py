"""Helpers shared by the scene editing commands."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from configurator.application.config import (
    ConfigError,
    SceneConfiguration,
    load_config,
    save_config,
    validate_config,
)
from configurator.application.dtos import EditOutput
from configurator.cli.commands.validate import display_load_error, display_validation_result


def load_scene(scene_file: Path) -> SceneConfiguration:
    """Load and validate a scene, exiting with code 1 on any error."""
    try:
        config = load_config(scene_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    if not result.is_valid:
        display_validation_result(result)
        raise typer.Exit(code=1)
    return config


def parse_ids(value: str | None) -> list[str] | None:
    """Split a comma-separated id list.

    Examples:
        >>> parse_ids("c1, c2,,c3")
        ['c1', 'c2', 'c3']
    """
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def fmt(value: float) -> str:
    return f"{value:g}"


def emit_output(output: EditOutput, output_file: Path | None) -> None:
    """Report an edit and write the resulting scene.

    Errors go to stderr with exit code 1. Without ``--output`` the edited
    scene is printed to stdout as JSON.
    """
    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output.report is not None:
        for key, message in output.report.errors.items():
            typer.echo(f"Warning: formula {key} was not applied: {message}", err=True)

    if output_file is None:
        typer.echo(json.dumps(output.config.to_json_dict(), indent=2))
        return

    save_config(output.config, output_file)
    if output.changed_ids:
        typer.echo(f"Changed: {', '.join(output.changed_ids)}")
    if output.drawer_heights is not None:
        typer.echo(f"Drawer heights: {', '.join(fmt(h) for h in output.drawer_heights)}")
    if output.report is not None and output.report.changed:
        typer.echo(
            f"Formulas applied: {len(output.report.applied)} "
            f"in {output.report.passes} pass(es)"
        )
    typer.echo(f"Scene written to {output_file}")
