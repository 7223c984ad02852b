"""
Logging configuration for the schema generator.

Usage in modules:
    from rdl_schemagen.logging_config import get_logger
    logger = get_logger(__name__)

All loggers live under the "rdl_schemagen" hierarchy. Levels are set by the CLI.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "rdl_schemagen"


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return a logger under the rdl_schemagen hierarchy.

    Args:
        name: Module __name__, or None for the package root logger.

    Returns:
        logging.Logger instance
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the rdl_schemagen logger hierarchy.

    Levels:
        --verbose -> DEBUG
        (default) -> INFO
        --quiet   -> WARNING

    Args:
        verbose: Enable DEBUG-level output.
        quiet: Suppress INFO output (WARNING+ only).
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # Reconfiguring only adjusts levels
    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    root_logger.propagate = False
