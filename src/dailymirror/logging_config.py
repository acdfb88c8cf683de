"""Logging setup for the command line.

The library only creates module loggers under the ``dailymirror`` namespace;
handlers are installed here, by the CLI, never on import.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.logging import RichHandler


if TYPE_CHECKING:
    from rich.console import Console


LOGGER_NAME = "dailymirror"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route dailymirror logs to a Rich console handler.

    Calling it again replaces the previously installed handler, so repeated
    CLI invocations in one process do not duplicate output.

    Args:
        verbose: Log at DEBUG instead of INFO.
        console: Console to log to; pass the progress display's console so
            log lines render above the bars.

    Returns:
        The package logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console,
        level=level,
        show_path=verbose,
        rich_tracebacks=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
