"""
Command-line interface for structdraw.

Commands:
- render: Generate a drawing set from a structural YAML file and write one sheet
- sheets: List the sheets a configuration creates
- layers: Show the layer table of a configuration
- init-config: Write the default configuration to a YAML file

Usage:
    structdraw render frame.yaml --sheet 2 --format png -o beams.png
    structdraw layers --config office.yaml
    structdraw init-config office.yaml
"""

import logging
from pathlib import Path

import click

from . import __version__
from .config import DrawingConfig
from .drawing import StructuralDrawing
from .structural import load_structural_elements


def _load_config(config_file: Path | None) -> DrawingConfig:
    if config_file is None:
        return DrawingConfig.default()
    try:
        return DrawingConfig.from_yaml(config_file)
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid configuration {config_file}: {e}") from e


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def cli(verbose: bool):
    """structdraw - structural construction drawings."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file path.",
)
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Drawing configuration YAML (default: built-in layers and sheets).",
)
@click.option("--sheet", "sheet_index", default=0, show_default=True,
              help="Index of the sheet to render.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["svg", "png", "pdf"]),
    default=None,
    help="Output format (default: from the output file extension).",
)
@click.option("--zoom", default=1.0, show_default=True, help="View zoom (svg/png).")
@click.option("--no-grid", is_flag=True, help="Hide the background grid.")
@click.option("--hide-layer", multiple=True, help="Layer to hide (repeatable).")
@click.option("--all-sheets", is_flag=True, help="PDF only: one page per sheet.")
def render(
    input_file: Path,
    output: Path,
    config_file: Path | None,
    sheet_index: int,
    output_format: str | None,
    zoom: float,
    no_grid: bool,
    hide_layer: tuple[str, ...],
    all_sheets: bool,
):
    """
    Render a drawing sheet from a structural members file.

    \b
    INPUT_FILE layout:
      project: {name: ..., engineer: ..., checker: ...}
      elements:
        - type: beam
          id: "1"
          dimensions: {width: 400, height: 300, length: 6000}
          reinforcement: {main: {diameter: 16, count: 4}}

    Example:
        structdraw render frame.yaml --sheet 2 -o beam_details.svg
    """
    config = _load_config(config_file)
    try:
        elements, project = load_structural_elements(input_file)
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid input {input_file}: {e}") from e

    output_format = output_format or output.suffix.lstrip(".").lower()
    if output_format not in ("svg", "png", "pdf"):
        raise click.ClickException(f"Cannot infer output format from {output.name}; use --format")

    drawing = StructuralDrawing(config=config, structural_elements=elements, project_info=project)
    if sheet_index < 0 or sheet_index >= len(drawing.sheets):
        raise click.ClickException(
            f"Sheet index {sheet_index} out of range (drawing has {len(drawing.sheets)} sheets)"
        )
    drawing.set_active_sheet(sheet_index)
    drawing.view.set_zoom(zoom)
    if no_grid:
        drawing.view.show_grid = False
    for name in hide_layer:
        if name not in drawing.layers:
            raise click.ClickException(f"Unknown layer: {name}")
        drawing.layers.set_visibility(name, False)

    if output_format == "svg":
        drawing.export_svg(output)
    elif output_format == "png":
        drawing.export_png(output)
    else:
        drawing.export_pdf(output, all_sheets=all_sheets)

    sheet = drawing.active_sheet
    click.echo(f"Rendered {sheet.name} ({len(sheet.elements)} elements) to {output}")


@cli.command()
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Drawing configuration YAML.",
)
def sheets(config_file: Path | None):
    """List the sheets a configuration creates."""
    config = _load_config(config_file)
    for index, template in enumerate(config.sheets):
        click.echo(
            f"{index}: {template.drawing_number or template.id:<8} {template.name:<24} "
            f"{template.paper_size} {template.scale:<6} {template.view}"
        )


@cli.command()
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Drawing configuration YAML.",
)
def layers(config_file: Path | None):
    """Show the layer table."""
    config = _load_config(config_file)
    for layer in config.build_layers():
        flags = []
        if not layer.visible:
            flags.append("hidden")
        if layer.locked:
            flags.append("locked")
        click.echo(
            f"{layer.name:<16} {layer.color:<8} {layer.line_weight:<5} {' '.join(flags)}".rstrip()
        )


@cli.command("init-config")
@click.argument("output", type=click.Path(path_type=Path))
def init_config(output: Path):
    """Write the default drawing configuration to OUTPUT."""
    DrawingConfig.default().to_yaml(output)
    click.echo(f"Configuration saved to: {output}")


if __name__ == "__main__":
    cli()
