"""Validate command for checking layout request files.

This module provides the `validate` command that checks a JSON layout
request for errors and layout advisories without rendering anything.
"""

from pathlib import Path
from typing import Annotated, Any, Iterable

import typer

from traylayout.application.config import (
    ConfigError,
    TrayLayoutConfiguration,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout request to validate"),
    ],
) -> None:
    """Validate a tray layout request.

    Checks the request file for:
    - JSON syntax and schema errors (unknown fields, negative dimensions,
      unsupported schema version)
    - Duplicate cable ids
    - Layout advisories (missing tray dimensions or cable diameters,
      uncategorised cables, too many cable categories for one tray)

    Exit codes:
        0 - Request is valid with no warnings
        1 - Request has errors (cannot be used)
        2 - Request is valid but has warnings

    Example:
        traylayout validate tray-t1.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo()
        display_load_error(e)
        raise typer.Exit(code=1)

    typer.echo(_describe_request(config))
    typer.echo()

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _describe_request(config: TrayLayoutConfiguration) -> str:
    tray = config.tray
    if tray.width and tray.height:
        size = f"{tray.width:g} x {tray.height:g} mm"
    else:
        size = "no dimensions"
    scope = " (routing filter on)" if config.filter_by_routing else ""
    return f"Tray {tray.name}: {size}, {len(config.cables)} cable(s){scope}"


def _echo_field_issues(issues: Iterable[tuple[str, str, Any]]) -> None:
    for path, message, value in issues:
        typer.echo(f"  {path}: {message}", err=True)
        if value is not None:
            typer.echo(f"    Value: {value!r}", err=True)


def display_load_error(error: ConfigError) -> None:
    """Report a request that could not be loaded, on stderr.

    Args:
        error: The ConfigError raised by the loader.
    """
    typer.echo("Errors:", err=True)
    match error.error_type:
        case "file_not_found":
            typer.echo(f"  File not found: {error.path}", err=True)
        case "permission_denied" | "file_read_error":
            typer.echo(f"  Cannot read {error.path}: {error.message}", err=True)
        case "json_parse":
            typer.echo("  Invalid JSON syntax", err=True)
            for detail in error.details:
                typer.echo(
                    f"    Line {detail.get('line', '?')}, "
                    f"Column {detail.get('column', '?')}: "
                    f"{detail.get('message', 'Unknown error')}",
                    err=True,
                )
        case "validation":
            _echo_field_issues(
                (
                    detail.get("path", "unknown"),
                    detail.get("message", "Unknown error"),
                    detail.get("value"),
                )
                for detail in error.details
            )
        case _:
            typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        _echo_field_issues((e.path, e.message, e.value) for e in result.errors)
        typer.echo(err=True)

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    match result.exit_code:
        case 1:
            typer.echo(
                f"Validation failed: {len(result.errors)} error(s), "
                f"{len(result.warnings)} warning(s)",
                err=True,
            )
        case 2:
            typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
        case _:
            typer.echo("Validation passed. Request is valid.")
