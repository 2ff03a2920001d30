"""Typer CLI for tray layout rendering."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from traylayout.application import RenderTrayLayoutCommand
from traylayout.application.config import ConfigError, load_config
from traylayout.cli.commands import display_load_error, validate_command
from traylayout.domain.services.diameter_classifier import classify_diameter
from traylayout.infrastructure import (
    MISSING_DIMENSIONS_MESSAGE,
    LayoutJsonFormatter,
    LayoutSummaryFormatter,
)

app = typer.Typer(
    name="traylayout",
    help="Lay out cable bundles in a tray cross-section and render the concept drawing.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log layout decisions to stderr"),
    ] = False,
) -> None:
    """Cable tray bundle layout engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def render(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout request"),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the SVG drawing to this file"),
    ] = None,
    scale: Annotated[
        float | None,
        typer.Option("--scale", help="Canvas scale in px per mm (overrides the request)"),
    ] = None,
    spacing: Annotated[
        float | None,
        typer.Option("--spacing", help="Cable spacing in mm (overrides the request)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the layout result as JSON"),
    ] = False,
) -> None:
    """Compute and render the bundle layout of one tray."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    command = RenderTrayLayoutCommand()
    output = command.execute(config, scale=scale, spacing_mm=spacing)

    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_file is not None:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(output.svg, encoding="utf-8")

    if output.result is None or not output.result.has_dimensions:
        typer.echo(MISSING_DIMENSIONS_MESSAGE)
        if output_file is not None:
            typer.echo(f"Placeholder drawing written to {output_file}")
        return

    if as_json:
        typer.echo(
            LayoutJsonFormatter().format(
                output.result,
                free_percent=output.free_space_percent,
                level=output.free_space_level,
            )
        )
    else:
        typer.echo(
            LayoutSummaryFormatter().format(
                output.summary,
                tray_name=config.tray.name,
                free_percent=output.free_space_percent,
                level=output.free_space_level,
            )
        )
        if output_file is not None:
            typer.echo()
            typer.echo(f"Drawing written to {output_file}")


@app.command()
def classify(
    diameters: Annotated[
        list[float],
        typer.Argument(help="Cable diameters in mm"),
    ],
) -> None:
    """Show the bundle diameter bucket for each diameter."""
    for diameter in diameters:
        typer.echo(f"{diameter:g} mm -> {classify_diameter(diameter).value}")


if __name__ == "__main__":
    app()
