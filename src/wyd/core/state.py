# src/wyd/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..board.board_store import BoardStore
from ..config import Settings
from ..history import DailyLog
from ..notifier.lock import NotifierLock
from .ports import AlarmPlayer, NotificationSink


@dataclass(slots=True)
class AppContext:
    """
    Everything one invocation needs, built once by the CLI bootstrap.

    The context is passed explicitly; nothing in the core reads global state.
    """

    settings: Settings
    store: BoardStore
    daily_log: DailyLog
    lock: NotifierLock
    notifier: NotificationSink
    alarm: AlarmPlayer
