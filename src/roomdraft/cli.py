"""Command Line Interface for Room Draft.

This module provides a small CLI for creating rooms, applying operation
files through the undo history and inspecting the derived views.
"""

import json
import logging
from collections import Counter
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.model import ELEVATION_VIEWS, VIEW_KINDS, create_default_room
from .core.validators import InvalidRoom, collect_problems, is_simple_loop
from .engine.api import apply_operations
from .engine.history import History
from .geom.elevation import elevation_dimension_chain, room_elevation_returns
from .geom.polygon import polygon_area
from .geom.segments import seg_endpoints, seg_length
from .hatch.zones import get_hatch_zones, resolve_fill
from .io.parser import load_room, save_room
from .projection.bounds import world_bounds
from .projection.scene import derive_scene

app = typer.Typer(
    name="roomdraft",
    help="A CLI tool for orthogonal room drafting: plan, elevations, openings and hatches",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _check_view(view: str, allowed=VIEW_KINDS) -> None:
    if view not in allowed:
        console.print(f"[red]Error: unknown view '{view}' (expected one of {', '.join(allowed)})[/red]")
        raise typer.Exit(1)


def _load(room: Path):
    try:
        return load_room(str(room))
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except InvalidRoom as e:
        console.print(f"[red]Error: Invalid room - {e}[/red]")
        raise typer.Exit(1)


@app.command()
def new(
    output: Path = typer.Option(..., "--out", "-o", help="Path to output room JSON file"),
):
    """Write the default rectangular room."""
    _setup_logging(False)
    save_room(create_default_room(), str(output))
    console.print(f"[green]✓[/green] Default room saved to {output}")


@app.command()
def info(
    room: Path = typer.Option(..., "--room", "-r", help="Path to room JSON file"),
):
    """Show segments, dimension overrides, openings and validity of a room."""
    _setup_logging(False)
    room_obj = _load(room)
    loop = room_obj.inner_loop

    console.print(f"[bold]Room {room_obj.id}[/bold]")
    console.print(
        f"Wall thickness: {room_obj.wall_thickness:g} mm, wall height: {room_obj.wall_height:g} mm, "
        f"floor area: {polygon_area(loop) / 1e6:.2f} m²"
    )

    seg_table = Table(title="Segments")
    seg_table.add_column("Index", justify="right")
    seg_table.add_column("From")
    seg_table.add_column("To")
    seg_table.add_column("Length", justify="right")
    seg_table.add_column("Override", style="cyan")
    for i in range(len(loop)):
        a, b = seg_endpoints(loop, i)
        seg_table.add_row(
            str(i),
            f"({a.x:g}, {a.y:g})",
            f"({b.x:g}, {b.y:g})",
            f"{seg_length(a, b):.0f}",
            room_obj.dim_text.get(i, ""),
        )
    console.print(seg_table)

    if room_obj.entities:
        entity_table = Table(title="Entities")
        entity_table.add_column("ID", style="cyan")
        entity_table.add_column("Kind")
        entity_table.add_column("Segment", justify="right")
        entity_table.add_column("t", justify="right")
        entity_table.add_column("Width", justify="right")
        for entity_id, entity in room_obj.entities.items():
            kind = getattr(entity, "opening_type", None) or getattr(entity, "fixture_type", "")
            entity_table.add_row(
                entity_id, kind, str(entity.attach.wall_seg_index), f"{entity.attach.t:.3f}", f"{entity.width_mm:g}"
            )
        console.print(entity_table)

    problems = collect_problems(room_obj)
    simple = is_simple_loop(room_obj)
    console.print(f"Self-intersection free: {'[green]yes[/green]' if simple else '[yellow]no[/yellow]'}")
    for problem in problems:
        console.print(f"[red]✗[/red] {problem}")
    if not problems:
        console.print("[green]✓[/green] Room is structurally valid")


@app.command()
def apply(
    room: Path = typer.Option(..., "--room", "-r", help="Path to room JSON file"),
    operations: Path = typer.Option(..., "--ops", help="Path to operations JSON file (a list)"),
    output: Path = typer.Option(..., "--out", "-o", help="Path to output room JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Apply a list of operations through the undo history and save the result."""
    _setup_logging(verbose)
    room_obj = _load(room)

    try:
        with open(operations, "r", encoding="utf-8") as f:
            ops_data = json.load(f)
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(ops_data, list):
        console.print("[red]Error: Operations file must contain a list[/red]")
        raise typer.Exit(1)

    try:
        history = apply_operations(History(present=room_obj), ops_data)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    final = history.present
    if not is_simple_loop(final):
        logging.getLogger(__name__).warning("Resulting inner loop is self-intersecting")

    save_room(final, str(output))
    console.print(f"[green]✓[/green] Applied {len(ops_data)} operation(s); {len(history.past)} undo step(s)")
    console.print(f"[green]✓[/green] Modified room saved to {output}")


@app.command()
def scene(
    room: Path = typer.Option(..., "--room", "-r", help="Path to room JSON file"),
    view: str = typer.Option("plan", "--view", help="plan, north, south, east or west"),
):
    """Summarise the primitive list of a view."""
    _setup_logging(False)
    _check_view(view)
    room_obj = _load(room)

    draft = derive_scene(view, room_obj)
    counts = Counter(p.kind for p in draft.primitives)

    table = Table(title=f"Scene: {view}")
    table.add_column("Primitive", style="cyan")
    table.add_column("Count", justify="right")
    for kind, count in counts.items():
        table.add_row(kind, str(count))
    console.print(table)

    b = world_bounds(view, room_obj)
    console.print(f"World bounds: ({b.min_x:g}, {b.min_y:g}) - ({b.max_x:g}, {b.max_y:g})")


@app.command()
def zones(
    room: Path = typer.Option(..., "--room", "-r", help="Path to room JSON file"),
    view: str = typer.Option("plan", "--view", help="plan, north, south, east or west"),
):
    """List the hatch zones of a view and their resolved fills."""
    _setup_logging(False)
    _check_view(view)
    room_obj = _load(room)

    table = Table(title=f"Hatch zones: {view}")
    table.add_column("Zone", style="cyan")
    table.add_column("Label")
    table.add_column("Wall", justify="center")
    table.add_column("Fill")
    for zone in get_hatch_zones(view, room_obj):
        fill = resolve_fill(zone, room_obj)
        table.add_row(zone.id, zone.label, "✓" if zone.is_wall else "", fill.pattern_id if fill else "-")
    console.print(table)


@app.command()
def elevation(
    room: Path = typer.Option(..., "--room", "-r", help="Path to room JSON file"),
    view: str = typer.Option("north", "--view", help="north, south, east or west"),
):
    """Print the dimension chain and return-wall positions of an elevation."""
    _setup_logging(False)
    _check_view(view, ELEVATION_VIEWS)
    room_obj = _load(room)

    table = Table(title=f"Elevation: {view}")
    table.add_column("Segment", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Label", style="cyan")
    for link in elevation_dimension_chain(room_obj, view):
        table.add_row(str(link.seg_index), f"{link.start_h:g}", f"{link.end_h:g}", link.text)
    console.print(table)

    returns = room_elevation_returns(room_obj, view)
    console.print(f"Returns: {', '.join(f'{r:g}' for r in returns) if returns else 'none'}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
