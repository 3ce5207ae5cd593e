# src/freefall/cli/bodies.py
import json

import typer
from rich import print
from rich.table import Table

from freefall.core.constants import BODIES, get_body

bodies_app = typer.Typer(help="View the registered central bodies.")


@bodies_app.command("list")
def list_bodies():
    """List all registered bodies with their Schwarzschild radii."""
    table = Table(title="Central bodies")
    table.add_column("Name", style="cyan")
    table.add_column("Mass (kg)", justify="right")
    table.add_column("Radius (m)", justify="right")
    table.add_column("R_s (m)", justify="right", style="green")
    for body in BODIES:
        table.add_row(body.name, f"{body.mass:.6g}", f"{body.radius:.6g}", f"{body.schwarzschild_radius:.6g}")
    print(table)


@bodies_app.command("show")
def show_body(
    name: str = typer.Argument(..., help="Body name"),
    format: str = typer.Option("plain", help="Output format: plain|json"),
):
    """Show all data for a body, including derived quantities."""
    try:
        body = get_body(name)
    except KeyError:
        print(f"[red]Body not found:[/red] {name}")
        raise typer.Exit(1)
    if format == "json":
        data = body.model_dump()
        data.update(mu=body.mu, schwarzschild_radius=body.schwarzschild_radius, x_0=body.x_0)
        typer.echo(json.dumps(data, indent=2))
    else:
        print(str(body))
