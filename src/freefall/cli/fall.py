"""
Free-fall kinematics commands.

Heights are metres above the body's surface for both gravity models; the
planet model converts them to radial distances internally.
"""
from pathlib import Path
from typing import List, Optional

import numpy as np
import typer
from rich.table import Table

from freefall.cli.common import console, reported_errors, resolve_simulation_config
from freefall.core.config import SimulationConfig
from freefall.core.enums import GravityKind
from freefall.core.kinematics import (
    find_initial_height,
    free_fall_distance,
    free_fall_points,
    free_fall_time,
)

fall_app = typer.Typer(help="Free-fall times, distances and trajectories")

_MODEL_HELP = "Gravity model: constant|planet (default: from config)"
_G_HELP = "Uniform acceleration (default: from config, else body surface gravity)"


def _model_and_offset(config, overrides, model, g, body):
    """
    Gravity model plus the offset that turns an altitude into a model height.

    Settings come from the fall config (`default_fall.yml` unless --config is
    given, then --set overrides); --model, --g and --body win over both.
    """
    cfg = resolve_simulation_config(config, "fall", overrides)
    data = cfg.model_dump()
    if body is not None:
        data["body"] = body
    if model is not None:
        data["fall"]["model"] = model
    if g is not None:
        data["fall"]["acceleration"] = g
    cfg = SimulationConfig.model_validate(data)
    offset = 0.0 if cfg.fall.model is GravityKind.CONSTANT else cfg.central_body.radius
    return cfg.build_gravity(), offset


@fall_app.command("time")
def fall_time(
    peak: float = typer.Argument(..., help="Release altitude (m)"),
    floor: float = typer.Argument(0.0, help="Landing altitude (m)"),
    model: Optional[GravityKind] = typer.Option(None, "--model", "-m", help=_MODEL_HELP),
    g: Optional[float] = typer.Option(None, "--g", help=_G_HELP),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Central body (default: from config)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config value, e.g. fall.model=planet"),
):
    """Time to fall from rest at PEAK down to FLOOR."""
    with reported_errors():
        gravity, offset = _model_and_offset(config, overrides, model, g, body)
        t = free_fall_time(peak + offset, floor + offset, gravity)
    console.print(f"Fall time: [bold]{t:.9g}[/bold] s")


@fall_app.command("distance")
def fall_distance(
    elapsed: float = typer.Argument(..., help="Elapsed time (s)"),
    peak: float = typer.Argument(..., help="Release altitude (m)"),
    model: Optional[GravityKind] = typer.Option(None, "--model", "-m", help=_MODEL_HELP),
    g: Optional[float] = typer.Option(None, "--g", help=_G_HELP),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Central body (default: from config)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config value, e.g. fall.model=planet"),
):
    """Distance fallen ELAPSED seconds after release from rest at PEAK."""
    with reported_errors():
        gravity, offset = _model_and_offset(config, overrides, model, g, body)
        d = free_fall_distance(elapsed, peak + offset, gravity)
    console.print(f"Distance fallen: [bold]{d:.9g}[/bold] m")


@fall_app.command("initial-height")
def initial_height(
    elapsed: float = typer.Argument(..., help="Elapsed time (s)"),
    final: float = typer.Argument(..., help="Altitude reached (m)"),
    model: Optional[GravityKind] = typer.Option(None, "--model", "-m", help=_MODEL_HELP),
    g: Optional[float] = typer.Option(None, "--g", help=_G_HELP),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Central body (default: from config)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config value, e.g. fall.model=planet"),
):
    """Release altitude that reaches FINAL after falling for ELAPSED seconds."""
    with reported_errors():
        gravity, offset = _model_and_offset(config, overrides, model, g, body)
        h = find_initial_height(elapsed, final + offset, gravity) - offset
    console.print(f"Initial height: [bold]{h:.9g}[/bold] m")


@fall_app.command("points")
def fall_points(
    peak: float = typer.Argument(..., help="Peak altitude (m)"),
    floor: float = typer.Argument(0.0, help="Lowest altitude (m)"),
    peak_time: float = typer.Option(0.0, "--peak-time", help="Time of the peak (s)"),
    n_points: int = typer.Option(10, "--n-points", "-n", help="Samples per half of the arc"),
    model: Optional[GravityKind] = typer.Option(None, "--model", "-m", help=_MODEL_HELP),
    g: Optional[float] = typer.Option(None, "--g", help=_G_HELP),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Central body (default: from config)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path (default: auto-detect)"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Override a config value, e.g. fall.model=planet"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the points as CSV"),
):
    """Sample the rise-and-fall trajectory through a peak."""
    with reported_errors():
        gravity, offset = _model_and_offset(config, overrides, model, g, body)
        pts = free_fall_points(peak_time, peak + offset, floor + offset, gravity, n_points)
    pts[:, 1] -= offset

    if output is not None:
        np.savetxt(output, pts, delimiter=",", header="time_s,altitude_m", comments="")
        console.print(f"Wrote {len(pts)} points to {output}")
        return

    table = Table(title="Free-fall trajectory")
    table.add_column("t (s)", justify="right", style="cyan")
    table.add_column("altitude (m)", justify="right")
    for t, h in pts:
        table.add_row(f"{t:.6f}", f"{h:.6f}")
    console.print(table)
