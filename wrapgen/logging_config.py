"""Logging setup shared by every wrapgen module.

Modules call :func:`get_logger` at import time; the CLI calls
:func:`configure_logging` once to attach a handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "wrapgen"


def configure_logging(
    level: int | str = logging.INFO,
    rich_output: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``wrapgen`` logger hierarchy.

    Args:
        level: Logging level (name or number).
        rich_output: Use rich's handler instead of a plain stream handler.
        console: Console for the rich handler (defaults to stderr).

    Returns:
        The configured root ``wrapgen`` logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers so repeated calls don't duplicate output
    logger.handlers = []

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger inside the ``wrapgen`` namespace.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
