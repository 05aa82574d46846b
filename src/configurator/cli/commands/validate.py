"""Validate command for checking scene files.

This module provides the `validate` command that checks a JSON scene file
for schema errors and for references, group percentages, formulas and
drawer heights that do not fit together.
"""

from pathlib import Path
from typing import Annotated

import typer

from configurator.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def display_load_error(error: ConfigError) -> None:
    """Display a scene loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation" and error.details:
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, dict):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def display_validation_result(result: ValidationResult) -> None:
    """Display validation errors, warnings and a summary line."""
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Scene is valid.")


def validate_command(
    scene_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON scene file to validate"),
    ],
) -> None:
    """Validate a scene file.

    Checks the scene file for:
    - JSON syntax errors
    - Schema errors (missing fields, invalid types, unknown keys)
    - Unknown cabinet, product and view references
    - Group percentages that do not sum to 100
    - Formulas that do not parse
    - Drawer heights that do not fill their cabinet

    Exit codes:
        0 - Scene is valid with no warnings
        1 - Scene has errors
        2 - Scene is valid but has warnings

    Example:
        configurator validate kitchen.json
    """
    typer.echo(f"Validating {scene_file}...")
    typer.echo()

    try:
        config = load_config(scene_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
