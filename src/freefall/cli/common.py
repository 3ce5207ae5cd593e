"""
Option handling and error reporting shared by the freefall commands.
"""
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from freefall.core.config import SimulationConfig, load_simulation_config
from freefall.core.exceptions import FreefallError
from freefall.core.utils import apply_overrides, resolve_config_path

console = Console()


@contextmanager
def reported_errors():
    """Turn library errors into a red message and exit code 1."""
    try:
        yield
    except (FreefallError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def resolve_simulation_config(
    config: Optional[Path],
    name: str,
    overrides: Optional[List[str]] = None,
) -> SimulationConfig:
    """
    Explicit --config wins; otherwise a default_<name>.yml in a configs/
    directory; otherwise the built-in defaults (with overrides applied).
    """
    try:
        path = resolve_config_path(config, name)
    except FileNotFoundError:
        if config is not None:
            raise
        return SimulationConfig.model_validate(apply_overrides({}, overrides))
    console.print(f"Config: {path}", style="dim")
    return load_simulation_config(path, overrides)
