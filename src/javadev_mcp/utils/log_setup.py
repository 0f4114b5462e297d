"""Logging setup for the server process.

Stdout belongs to the protocol transport, so every log record goes to a
stderr-bound rich console.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"

stderr_console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> None:
    """Install a :class:`RichHandler` on the root logger at *level*."""
    handler = RichHandler(console=stderr_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
