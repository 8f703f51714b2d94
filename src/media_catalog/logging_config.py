"""
Logging configuration for the media catalog command line.

Library modules only create loggers; handlers are installed here.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .models.config import LoggingConfig


def setup_logging(config: LoggingConfig, console: Optional[Console] = None, verbose: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        config: Level and message format to use
        console: Rich console to render to; stderr by default
        verbose: Force DEBUG regardless of the configured level
    """
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper())
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format=config.format,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
        force=True,
    )
