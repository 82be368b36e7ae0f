# src/wyd/notifier/loop.py

from __future__ import annotations

"""
Background notifier.

A separate OS process that repeats {load, evaluate timers, save, notify} once
per interval until its token is superseded in the lock file:
- `spawn_notifier` claims a fresh token and launches `python -m wyd notifier --become <token>`,
- `become_notifier` is that process's loop,
- `kill_notifier` writes the kill sentinel so every running instance exits.

A single failed tick (notification or save error) is logged and the loop
continues. A state file that cannot be loaded ends the loop: a future spawn
brings the notifier back.
"""

import logging
import subprocess
import sys
import time
from collections.abc import Callable
from typing import Any

from ..core.application import WydApplication
from ..core.state import AppContext
from ..errors import MalformedState, NotificationError, StateIOError

logger = logging.getLogger(__name__)

Popen = Callable[..., Any]
Sleep = Callable[[float], None]


def notifier_command(token: str) -> list[str]:
    return [sys.executable, "-m", "wyd", "notifier", "--become", token]


def spawn_notifier(context: AppContext, *, popen: Popen = subprocess.Popen) -> str:
    """Supersede any running notifier and start a fresh one. Returns its token."""
    token = context.lock.claim()
    cmd = notifier_command(token)
    try:
        popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            close_fds=True,
            start_new_session=True,
        )
    except OSError as e:
        raise StateIOError(f"Unable to spawn notifier process: {e}") from e
    logger.info("Spawned notifier token=%s", token)
    return token


def kill_notifier(context: AppContext) -> None:
    context.lock.kill()
    logger.info("Notifier kill requested")


def become_notifier(
    context: AppContext,
    token: str,
    *,
    sleep: Sleep = time.sleep,
    max_ticks: int | None = None,
) -> int:
    """
    Run the notifier loop for `token`. Returns the number of ticks evaluated.

    max_ticks bounds the loop (tests); None means run until superseded.
    """
    interval = max(0.1, float(context.settings.notifier_interval_seconds))
    ticks = 0
    logger.info("Notifier started token=%s interval=%.1fs", token, interval)

    while True:
        try:
            superseded = context.lock.is_superseded(token)
        except StateIOError:
            logger.exception("Notifier lock read failed; retrying")
            superseded = False
        if superseded:
            logger.info("Notifier token=%s superseded; exiting", token)
            break

        try:
            app = WydApplication.load(context)
        except (MalformedState, StateIOError):
            logger.exception("Notifier failed to load application state; exiting")
            raise

        try:
            app.run_tick(alarm=True)
        except NotificationError:
            logger.exception("Notifier failed to deliver a reminder")
        except StateIOError:
            logger.exception("Notifier failed to save after a tick")

        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            break
        sleep(interval)

    return ticks
