"""
Rich logging for markpdf.

Provides colorful console logging using the rich library. Library modules
only create loggers; handlers are installed by the command-line front end
(or by an application) through ``setup_logging``.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

STANDARD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def create_rich_handler(console: Console = None) -> RichHandler:
    """
    Create a RichHandler writing to ``console`` (stderr by default).

    Args:
        console: Optional rich Console

    Returns:
        Configured RichHandler
    """
    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return rich_handler


def setup_logging(level="WARNING", use_rich: bool = True) -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        level: Log level name or number
        use_rich: Whether to use rich logging; otherwise the standard format

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    root_logger.handlers.clear()

    if use_rich:
        root_logger.addHandler(create_rich_handler())
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging initialized at %s level", logging.getLevelName(root_logger.level))
    return root_logger
