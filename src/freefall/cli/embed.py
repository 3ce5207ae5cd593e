"""
Commands for the Jonsson embedding: single points and geodesic walks.
"""
from pathlib import Path
from typing import List, Optional

import numpy as np
import typer
from rich.table import Table

from freefall.cli.common import console, reported_errors, resolve_simulation_config
from freefall.core.geodesic_walker import GeodesicWalker
from freefall.core.logging import logger

embed_app = typer.Typer(help="Map events onto the embedding funnel and trace geodesics")


@embed_app.command("point")
def embed_point(
    time: float = typer.Argument(..., help="Time (s)"),
    altitude: float = typer.Argument(..., help="Altitude above the surface (m)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config value, e.g. funnel.slope_sine=0.5"),
):
    """Embedded (x, y, z) position and surface normal of one event."""
    with reported_errors():
        cfg = resolve_simulation_config(config, "walk", overrides)
        embedding = cfg.build_embedding()
        event = cfg.to_spacetime((time, altitude))
        point = embedding.embedding_point(event)
        normal = embedding.surface_normal_at_spacetime(event)
    console.print(f"point:  ({point[0]:.9f}, {point[1]:.9f}, {point[2]:.9f})")
    console.print(f"normal: ({normal[0]:.9f}, {normal[1]:.9f}, {normal[2]:.9f})")


@embed_app.command("walk")
def embed_walk(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config value, e.g. walk.max_points=20"),
    max_points: Optional[int] = typer.Option(None, "--max-points", "-n", help="Points to add beyond the two anchors"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the points as CSV"),
):
    """Trace a geodesic across the funnel starting from two nearby events."""
    with reported_errors():
        cfg = resolve_simulation_config(config, "walk", overrides)
        embedding = cfg.build_embedding()
        walker = GeodesicWalker(embedding, tolerance=cfg.walk.tolerance, max_iterations=cfg.walk.max_iterations)
        budget = cfg.walk.max_points if max_points is None else max_points
        logger.info("Walking {} points on {}", budget, cfg.body)
        path = walker.walk(cfg.to_spacetime(cfg.walk.start), cfg.to_spacetime(cfg.walk.end), budget)

    console.print(
        f"[bold green]{len(path)} points[/bold green], state {path.state.value}, "
        f"arc length {path.path_length:.9g}"
    )
    if output is not None:
        np.savetxt(output, path.points, delimiter=",", header="x,y,z", comments="")
        console.print(f"Wrote {len(path)} points to {output}")
        return

    table = Table(title="Geodesic on the Jonsson embedding")
    table.add_column("#", justify="right", style="dim")
    table.add_column("x", justify="right", style="cyan")
    table.add_column("y", justify="right", style="cyan")
    table.add_column("z", justify="right", style="green")
    for i, (x, y, z) in enumerate(path.points):
        table.add_row(str(i), f"{x:.6f}", f"{y:.6f}", f"{z:.6f}")
    console.print(table)
