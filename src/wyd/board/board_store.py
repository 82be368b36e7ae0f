# src/wyd/board/board_store.py

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from ..errors import MalformedState, StateIOError
from .job_board import JobBoard
from .models import Job, SuspendedStack, WorkMode, WorkState

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "jobs.json"
FORMAT_VERSION = 1


class BoardStore:
    """
    JSON file store for the job board.

    - missing or empty file -> empty board
    - unparseable file      -> MalformedState (never silently reset)
    - every save first copies the previous file to a same-day archive, then
      writes a uniquely named temp file and os.replace()s it over the state file

    There is no file lock: a notifier tick and an interactive command may
    race, and the last save wins.
    """

    def __init__(self, state_path: str | Path) -> None:
        self._path = Path(state_path)

    @property
    def path(self) -> Path:
        return self._path

    def backup_path(self, today: date | None = None) -> Path:
        today = today or datetime.now().astimezone().date()
        return self._path.with_name(f"jobs-archive-{today.isoformat()}.json")

    # ---- load ----

    def load(self) -> JobBoard:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("No state file at %s; starting with an empty board", self._path)
            return JobBoard()
        except OSError as e:
            raise StateIOError(f"Failed to read state file {self._path}: {e}") from e

        if not raw.strip():
            return JobBoard()

        try:
            data = json.loads(raw)
            return board_from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError, OverflowError, OSError) as e:
            raise MalformedState(f"State file at {self._path} is malformed: {e}") from e

    # ---- save ----

    def save(self, board: JobBoard, *, today: date | None = None) -> None:
        self._backup(today)

        text = json.dumps(board_to_dict(board), ensure_ascii=False, indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f"{self._path.name}.", suffix=".tmp", dir=str(self._path.parent))
        except OSError as e:
            raise StateIOError(f"Failed to write state file {self._path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text + "\n")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StateIOError(f"Failed to write state file {self._path}: {e}") from e
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)

    def _backup(self, today: date | None) -> None:
        if not self._path.exists():
            return
        target = self.backup_path(today)
        try:
            shutil.copyfile(self._path, target)
        except OSError:
            logger.warning("Failed to back up %s to %s", self._path, target, exc_info=True)


# ---- (de)serialization ----


def _dt_to_str(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat()


def _str_to_dt(raw: Any) -> datetime | None:
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw, tz=timezone.utc)
    value = datetime.fromisoformat(str(raw))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _require_dt(raw: Any, name: str) -> datetime:
    value = _str_to_dt(raw)
    if value is None:
        raise ValueError(f"{name} is required")
    return value


def job_to_dict(job: Job) -> dict[str, Any]:
    return {
        "label": job.label,
        "begin_date": _dt_to_str(job.begin_date),
        "timebox": job.timebox.total_seconds() if job.timebox is not None else None,
        "last_notification": _dt_to_str(job.last_notification),
    }


def job_from_dict(raw: dict[str, Any]) -> Job:
    timebox = raw.get("timebox")
    return Job(
        label=str(raw["label"]),
        begin_date=_require_dt(raw["begin_date"], "begin_date"),
        timebox=timedelta(seconds=float(timebox)) if timebox is not None else None,
        last_notification=_str_to_dt(raw.get("last_notification")),
    )


def stack_to_dict(stack: SuspendedStack) -> dict[str, Any]:
    return {
        "data": [job_to_dict(j) for j in stack.data],
        "reason": stack.reason,
        "date_suspended": _dt_to_str(stack.date_suspended),
        "timer": _dt_to_str(stack.timer),
        "last_notification": _dt_to_str(stack.last_notification),
    }


def stack_from_dict(raw: dict[str, Any]) -> SuspendedStack:
    jobs = [job_from_dict(j) for j in raw["data"]]
    if not jobs:
        raise ValueError("suspended stack without jobs")
    return SuspendedStack(
        data=jobs,
        reason=str(raw.get("reason", "")),
        date_suspended=_require_dt(raw["date_suspended"], "date_suspended"),
        timer=_str_to_dt(raw.get("timer")),
        last_notification=_str_to_dt(raw.get("last_notification")),
    )


def work_state_to_dict(state: WorkState) -> dict[str, Any]:
    return {"mode": state.mode.value, "since": _dt_to_str(state.since)}


def work_state_from_dict(raw: dict[str, Any] | None) -> WorkState:
    if not raw:
        return WorkState.off()
    mode = WorkMode(raw["mode"])
    if mode == WorkMode.SLACKING:
        return WorkState.slacking_since(_require_dt(raw.get("since"), "since"))
    return WorkState(mode)


def board_to_dict(board: JobBoard) -> dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "active_stack": [job_to_dict(j) for j in board.active_stack],
        "suspended_stacks": [stack_to_dict(s) for s in board.suspended_stacks],
        "work_state": work_state_to_dict(board.work_state),
    }


def board_from_dict(raw: Any) -> JobBoard:
    if not isinstance(raw, dict):
        raise TypeError("state document must be a JSON object")
    return JobBoard(
        active_stack=[job_from_dict(j) for j in raw.get("active_stack", [])],
        suspended_stacks=[stack_from_dict(s) for s in raw.get("suspended_stacks", [])],
        work_state=work_state_from_dict(raw.get("work_state")),
    )
