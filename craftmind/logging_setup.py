"""Process-wide logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    *,
    level: int = logging.INFO,
    log_file: Path | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a Rich console handler and an optional file handler to the root.

    Calling this again replaces the handlers installed by a previous call.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_craftmind", False):
            root.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=console, show_path=False, rich_tracebacks=True
    )
    console_handler.setLevel(level)
    console_handler._craftmind = True
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler._craftmind = True
        root.addHandler(file_handler)

    root.setLevel(min(level, logging.DEBUG) if log_file else level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root
