"""Logging configuration for the ``smart-skills`` command.

Library modules only create module-level loggers; the CLI is the one place
that attaches a handler. Records are rendered by ``rich`` on stderr so they
never interleave with tables or JSON written to stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "smartskills"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a ``RichHandler`` to the package logger.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
