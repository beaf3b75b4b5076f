"""Logging setup for cookbook-cleaner.

Log records go to stderr through Rich so the cleanup report on stdout
(or the JSON document in --json mode) stays machine readable.
"""

import logging
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

# HTTP stack loggers, silenced below -vv
HTTP_LOGGERS = ("urllib3", "requests")


def level_for(verbosity: int, quiet: bool = False) -> int:
    """Map the global -v/-q flags to a log level; quiet wins."""
    if quiet:
        return logging.WARNING
    if verbosity >= 1:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Install a RichHandler on the root logger.

    Args:
        verbosity: Number of -v flags. One enables debug records, two also
            shows timestamps, source paths and HTTP connection logs.
        quiet: Only log warnings and errors
        no_color: Disable colored output
        stream: Log destination, stderr when omitted

    Returns:
        The console the handler writes to
    """
    trace = verbosity >= 2 and not quiet
    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )
    handler = RichHandler(
        console=console,
        show_time=trace,
        show_path=trace,
        markup=False,
        rich_tracebacks=trace,
    )
    logging.basicConfig(
        level=level_for(verbosity, quiet),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if trace else logging.WARNING)

    return console
