# src/wyd/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEBUG_LOG_NAME = "wyd.debug.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the terminal readable:
    - wyd logs pass at the handler level
    - anything else (third-party, py.warnings) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "wyd" or record.name.startswith("wyd."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    console: bool = True,
) -> None:
    """
    Configure logging with:
    - Console handler on stderr (filtered), skipped for the background notifier
    - File handler with everything, for debugging

    Call this ONCE, before the first log record. This is the diagnostic log;
    the human-readable daily history lives in wyd-YYYY-MM-DD.log.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / DEBUG_LOG_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(process)d %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(console_level)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleNoiseFilter())
        root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
