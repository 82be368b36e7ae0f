# src/wyd/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures the local data directory exists,
- wires concrete stores and delivery sinks into an AppContext.
"""

from __future__ import annotations

import logging

from ..board.board_store import BoardStore
from ..config import Settings, get_settings
from ..core.ports import AlarmPlayer, NotificationSink
from ..core.state import AppContext
from ..history import DailyLog
from ..notifier.lock import NotifierLock
from ..notifier.sinks import build_alarm_player, build_notification_sink

logger = logging.getLogger(__name__)


def ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_context(
    *,
    settings: Settings | None = None,
    notifier: NotificationSink | None = None,
    alarm: AlarmPlayer | None = None,
) -> AppContext:
    """
    Build the AppContext for one invocation.

    Keeping settings and sinks injectable makes the app easy to test.
    The alarm player is only built when asked for (the background notifier),
    since initializing audio is slow and interactive commands never ring.
    """
    if settings is None:
        settings = get_settings()

    ensure_local_dirs(settings)

    return AppContext(
        settings=settings,
        store=BoardStore(settings.state_file),
        daily_log=DailyLog(settings.data_dir),
        lock=NotifierLock(settings.lock_file),
        notifier=notifier if notifier is not None else build_notification_sink(settings),
        alarm=alarm if alarm is not None else _LazyAlarm(settings),
    )


class _LazyAlarm:
    """Defers building the real alarm player until the first alarm."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._player: AlarmPlayer | None = None

    def play_alarm(self) -> None:
        if self._player is None:
            logger.debug("Initializing alarm player")
            self._player = build_alarm_player(self._settings)
        self._player.play_alarm()
