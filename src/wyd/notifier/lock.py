# src/wyd/notifier/lock.py

from __future__ import annotations

"""
Notifier hand-off through a lock file.

The lock file holds the token of the notifier instance that currently owns
reminders. Spawning writes a fresh token, so any older instance sees a
mismatch on its next poll and exits. Killing writes a sentinel that no token
ever equals. This is advisory only: two instances may briefly overlap.
"""

import logging
import uuid
from pathlib import Path

from ..errors import StateIOError

logger = logging.getLogger(__name__)

KILL_SENTINEL = "kill"


def new_token() -> str:
    return uuid.uuid4().hex


class NotifierLock:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        """Current lock content, or None when there is no lock file."""
        try:
            return self._path.read_text("utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StateIOError(f"Failed to read notifier lock {self._path}: {e}") from e

    def claim(self, token: str | None = None) -> str:
        """Replace any stale lock with a fresh token and return it."""
        token = token or new_token()
        try:
            self._path.unlink(missing_ok=True)
            self._write(token)
        except OSError as e:
            raise StateIOError(f"Failed to write notifier lock {self._path}: {e}") from e
        logger.debug("Notifier lock claimed token=%s", token)
        return token

    def kill(self) -> None:
        try:
            self._write(KILL_SENTINEL)
        except OSError as e:
            raise StateIOError(f"Failed to write notifier lock {self._path}: {e}") from e
        logger.debug("Notifier lock set to kill sentinel")

    def is_superseded(self, token: str) -> bool:
        """
        True when another spawn (or a kill) replaced our token.

        A missing lock file does not stop a running notifier.
        """
        current = self.read()
        return current is not None and current != token

    def _write(self, content: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(content, "utf-8")
