"""Logging configuration for protoc-gen-swift.

Standard output carries the serialized plugin response, so every handler
installed here writes to standard error.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "PROTOC_GEN_SWIFT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Install a stderr RichHandler on the package logger.

    Args:
        level: Log level name. Falls back to $PROTOC_GEN_SWIFT_LOG_LEVEL,
            then WARNING.
    """
    global _configured

    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    root = logging.getLogger("protoc_gen_swift")
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
