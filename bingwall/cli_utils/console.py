"""
bingwall console utilities

This module provides application-wide access to Rich Console objects for writing to
stdout and stderr, plus the 'bingwall' logger. Log records are rendered on stderr by
a RichHandler; set BINGWALL_LOG_LEVEL (e.g. DEBUG) to see what the pipeline is doing.
"""

import os
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

bingwall_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "bold", "describe": ""}
)

console = Console(theme=bingwall_theme)
error_console = Console(theme=bingwall_theme, stderr=True)
log_console = Console(theme=bingwall_theme, stderr=True)

logger = logging.getLogger("bingwall")


def setup_logging(level: str = None) -> logging.Logger:
    """
    Attach a RichHandler to the bingwall logger. Level defaults to BINGWALL_LOG_LEVEL
    or WARNING. Calling this more than once does not add duplicate handlers.
    """

    level = (level or os.environ.get("BINGWALL_LOG_LEVEL") or "WARNING").upper()

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=log_console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    # getLevelName returns a str like "Level FOO" for unknown names
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logger.setLevel(numeric_level)
    logger.propagate = False

    return logger


"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(f":warning-emoji:  [bold]warning:[/] {msg}", style="warning")


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f"{msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stdout, where the rest of a run's output goes.
    """

    console.print(f":x-emoji: {msg}", style="fail")
