# src/freefall/cli/main.py
from pathlib import Path
from typing import Optional

import typer

from freefall.cli.bodies import bodies_app
from freefall.cli.embed import embed_app
from freefall.cli.fall import fall_app
from freefall.core.logging import add_run_log, configure_console, logger

app = typer.Typer(
    help="freefall: geodesics of free fall on the Jonsson embedding",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    invoke_without_command=True,
)

# Add sub-commands
app.add_typer(bodies_app, name="bodies")
app.add_typer(fall_app, name="fall")
app.add_typer(embed_app, name="embed")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(False, "--version", help="Show version and exit", is_eager=True),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write debug logs for this run to a file"),
    log_json: bool = typer.Option(False, "--log-json", help="Write the --log-file as JSON lines"),
):
    """
    freefall: free-fall kinematics and geodesics in curved spacetime.

    Use 'freefall COMMAND --help' to see options for specific commands.
    """
    if version:
        from freefall import __version__
        typer.echo(f"freefall version {__version__}")
        raise typer.Exit()

    if verbose:
        configure_console(verbose=True)

    if log_file is not None:
        sink_id = add_run_log(log_file, json=log_json)
        ctx.call_on_close(lambda: logger.remove(sink_id))


if __name__ == "__main__":
    app()
