# src/wyd/history.py

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from .errors import StateIOError

EMPTY_LOG_MESSAGE = "[Today's log is empty]"


class DailyLog:
    """Append-only, human-readable history: one file per local calendar day."""

    def __init__(self, log_dir: str | Path) -> None:
        self._dir = Path(log_dir)

    def path_for(self, day: date | None = None) -> Path:
        day = day or datetime.now().astimezone().date()
        return self._dir / f"wyd-{day.isoformat()}.log"

    def append(self, text: str, *, day: date | None = None) -> None:
        path = self.path_for(day)
        if not text.endswith("\n"):
            text += "\n"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as e:
            raise StateIOError(f"Failed to write to log file at {path}: {e}") from e

    def read(self, *, day: date | None = None) -> str:
        path = self.path_for(day)
        try:
            content = path.read_text("utf-8")
        except FileNotFoundError:
            return EMPTY_LOG_MESSAGE
        except OSError as e:
            raise StateIOError(f"Failed to read log file at {path}: {e}") from e
        return content or EMPTY_LOG_MESSAGE
