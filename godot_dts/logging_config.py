"""Logging setup shared by every module of the generator.

Modules obtain loggers with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a rich handler to the package logger.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "godot_dts"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module of this package."""
    return logging.getLogger(name)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a rich console handler to the package logger.

    Args:
        verbose: Log DEBUG messages when True, INFO otherwise.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Calling twice must not duplicate output
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
