"""
FILE: tasktracker/logging_setup.py
PURPOSE: One-time logging configuration for the CLI and REPL
EXPORTS:
  - setup_logging(log_file, console_level, file_level) -> None
DEPENDENCIES:
  - logging (stdlib)
  - rich.logging (console handler)
NOTES:
  - Console handler writes to stderr so --json/--raw output stays clean
  - File handler keeps everything at DEBUG for troubleshooting
  - Third-party loggers only reach the console at ERROR+
"""

import logging
from pathlib import Path
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


class _ConsoleNoiseFilter(logging.Filter):
    """Keep tasktracker logs, let other libraries through only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("tasktracker"):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    log_file: Union[str, Path],
    console_level: Union[int, str] = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure root logging with a Rich console handler and a file handler.

    Call this once, before the first log call. Calling it again replaces the
    previously installed handlers.
    """
    if isinstance(console_level, str):
        console_level = getattr(logging, console_level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    ch = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    ch.setLevel(console_level)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    log_file = Path(log_file)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError:
        # Read-only home or similar: console logging only
        logging.getLogger(__name__).warning("Cannot open log file %s", log_file)
        return

    fh.setLevel(file_level)
    fh.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(fh)

    logging.captureWarnings(True)
