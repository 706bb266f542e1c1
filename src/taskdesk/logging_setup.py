# src/taskdesk/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

# Layers whose INFO lines repeat what the REPL already shows (replies, toasts).
# On the console they only speak up at WARNING+; the log file keeps everything.
QUIET_CONSOLE_PREFIXES: tuple[str, ...] = (
    "taskdesk.api.",
    "taskdesk.auth.",
    "taskdesk.tasks.",
    "taskdesk.connectors.",
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable:
    - taskdesk.cli / core / config: everything at the handler level
    - request, session, task and connector chatter: WARNING+ only
      (a failed task load is reported only through its warning)
    - captured Python warnings and third-party loggers (httpx, httpcore): ERROR+ only
    """

    def __init__(self, quiet_prefixes: Iterable[str] = QUIET_CONSOLE_PREFIXES) -> None:
        super().__init__()
        self._quiet = tuple(quiet_prefixes)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("taskdesk."):
            return record.levelno >= logging.ERROR
        if name.startswith(self._quiet):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdesk",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    quiet_prefixes: Iterable[str] = QUIET_CONSOLE_PREFIXES,
) -> Path:
    """
    Install a filtered stderr handler and a full-detail file handler on the root logger.

    Call once, before the first log line. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskdesk.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter(quiet_prefixes))
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
