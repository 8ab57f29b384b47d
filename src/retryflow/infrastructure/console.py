"""
Console logging for applications embedding retryflow.

The library itself only creates module loggers under ``retryflow``; this
helper attaches a rich handler to that logger tree.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "retryflow"


def configure_logging(
    level: int | str = logging.INFO,
    console: Console | None = None,
) -> logging.Logger:
    """
    Route ``retryflow`` log records to a rich console handler.

    Calling it again replaces the previously installed handler.

    Args:
        level: Log level for the ``retryflow`` logger
        console: Console to write to (stderr by default)

    Returns:
        The configured ``retryflow`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
