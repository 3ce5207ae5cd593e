"""
Unified logging utilities for the freefall package.

Exports:
    - logger: Global Loguru logger (ready for use/import).
    - configure_console: Replace the default stderr sink with a levelled one.
    - add_run_log: Write freefall records for a run to a text or JSON file.
"""

import sys
from contextlib import suppress
from pathlib import Path

from loguru import logger

__all__ = [
    "logger",
    "configure_console",
    "add_run_log",
]

# Library code stays quiet until an application opts in.
logger.disable("freefall")

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_console_sink_id = None


def configure_console(verbose: bool = False, level: str = None) -> int:
    """
    Route freefall log records to stderr.

    Args:
        verbose (bool): Shortcut for DEBUG level.
        level (str, optional): Explicit level name; overrides `verbose`.

    Returns:
        int: The Loguru sink id, usable with `logger.remove`.
    """
    global _console_sink_id
    if _console_sink_id is not None:
        # The caller may already have removed it
        with suppress(ValueError):
            logger.remove(_console_sink_id)
    else:
        # Drop loguru's default handler so records are not printed twice
        logger.remove()
    chosen = (level or ("DEBUG" if verbose else "INFO")).upper()
    _console_sink_id = logger.add(sys.stderr, level=chosen, format=_CONSOLE_FORMAT)
    logger.enable("freefall")
    return _console_sink_id


def add_run_log(log_path, level: str = "DEBUG", json: bool = False, rotation: str = "10 MB") -> int:
    """
    Record freefall's own log messages for one run in a file.

    Args:
        log_path: File to append to; missing parent directories are created.
        level (str): Lowest level written (debug by default, so walk
            terminations and low-confidence searches are kept).
        json (bool): Write one JSON object per record instead of text lines.
        rotation (str): Loguru rotation rule for long sessions.

    Returns:
        int: The Loguru sink id, usable with `logger.remove`.
    """
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    options = dict(serialize=True) if json else dict(format=_FILE_FORMAT)
    sink_id = logger.add(
        path,
        level=level.upper(),
        filter="freefall",
        rotation=rotation,
        **options,
    )
    logger.enable("freefall")
    logger.debug("Run log opened at {} (json={})", path, json)
    return sink_id
