from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import orjson
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from adapters.filesystem.circuit_repository import FileSystemCircuitRepository
from adapters.filesystem.json_utils import dump_layout
from adapters.layout.track_packing import TrackPackingEngine
from app.config import AppSettings, LayoutSettings, load_settings
from domain.errors import CircuitInputError
from domain.models import CircuitLayout
from domain.services.circuit_templates import CircuitTemplates
from domain.services.convert_document_to_layout import CircuitDocumentConverter

app = typer.Typer(no_args_is_help=True)
template_app = typer.Typer(no_args_is_help=True)
app.add_typer(template_app, name="template")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log layout details."),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _settings(config_path: Optional[Path]) -> AppSettings:
    try:
        return load_settings(config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc


def _render(layout: CircuitLayout, settings: LayoutSettings, output_format: Optional[str]) -> None:
    chosen = (output_format or settings.output_format).lower()
    if chosen == "json":
        typer.echo(dump_layout(layout, settings.title).decode("utf-8"))
        return
    if chosen != "table":
        console.print(f"[red]Unknown output format:[/] {chosen}")
        raise typer.Exit(code=1)
    caption = f"{layout.wire_count} wires, {layout.column_count} columns"
    table = Table(title=f"{settings.title} ({caption})")
    for header in ("kind", "label", "row", "column", "offset"):
        table.add_column(header)
    for item in layout.items:
        table.add_row(
            item.kind, item.label or "", str(item.row), str(item.column), str(item.offset)
        )
    console.print(table)


def _parse_edge(raw: str) -> tuple[int, int]:
    left, sep, right = raw.partition("-")
    try:
        if not sep:
            raise ValueError(raw)
        return int(left), int(right)
    except ValueError as exc:
        msg = f"Edge must look like '0-1', got {raw!r}"
        raise typer.BadParameter(msg) from exc


@app.command("layout")
def layout_circuit(
    input_path: Path = typer.Argument(..., help="Circuit JSON document."),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table or json."
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _settings(config_path)
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        document = FileSystemCircuitRepository().load(input_path)
        converter = CircuitDocumentConverter(
            TrackPackingEngine(settings.layout.to_layout_config())
        )
        layout = converter.convert(document)
    except (CircuitInputError, ValidationError, orjson.JSONDecodeError) as exc:
        console.print(f"[red]Layout failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    layout_settings = settings.layout
    if document.title:
        layout_settings = layout_settings.model_copy(update={"title": document.title})
    _render(layout, layout_settings, output_format)


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Circuit JSON document to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        document = FileSystemCircuitRepository().load(input_path)
        CircuitDocumentConverter(TrackPackingEngine()).convert(document)
    except (CircuitInputError, ValidationError, orjson.JSONDecodeError) as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid circuit document:[/] {input_path}")


@template_app.command("graph-state")
def template_graph_state(
    edges: List[str] = typer.Option(..., "--edge", "-e", help="Graph edge such as 0-1."),
    wires: Optional[int] = typer.Option(None, help="Wire count; inferred from edges by default."),
    output_format: Optional[str] = typer.Option(None, "--format", "-f"),
    config_path: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    settings = _settings(config_path)
    templates = CircuitTemplates(TrackPackingEngine(settings.layout.to_layout_config()))
    try:
        layout = templates.graph_state([_parse_edge(edge) for edge in edges], wires)
    except CircuitInputError as exc:
        console.print(f"[red]Layout failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    _render(layout, settings.layout, output_format)


@template_app.command("fourier")
def template_fourier(
    wires: int = typer.Option(..., min=1, help="Number of wires."),
    swaps: bool = typer.Option(True, "--swaps/--no-swaps", help="Append the reversing swaps."),
    output_format: Optional[str] = typer.Option(None, "--format", "-f"),
    config_path: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    settings = _settings(config_path)
    templates = CircuitTemplates(TrackPackingEngine(settings.layout.to_layout_config()))
    layout = templates.fourier_transform(wires, with_swaps=swaps)
    _render(layout, settings.layout, output_format)


if __name__ == "__main__":
    app()
