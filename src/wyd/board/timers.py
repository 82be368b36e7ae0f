# src/wyd/board/timers.py

from __future__ import annotations

"""
Reminder evaluation.

One tick looks at the board in strict priority order and stops at the first
condition that fires:
- an active job whose timebox expired,
- a suspended stack whose timer passed,
- work mode with no time-boxed job for longer than the slack threshold.

The board is mutated in place (notification stamps, work state); the caller
persists it when TimerState.needs_save is set.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from .job_board import JobBoard
from .models import WorkMode, WorkState, utc_now

logger = logging.getLogger(__name__)

DEFAULT_NOTIFY_COOLDOWN = timedelta(seconds=30)
DEFAULT_SLACK_THRESHOLD = timedelta(minutes=5)


@dataclass(slots=True, frozen=True)
class TimerState:
    send_alarm: bool = False
    needs_save: bool = False
    message: str = ""


def should_notify(
    last_notified: datetime | None,
    *,
    now: datetime | None = None,
    cooldown: timedelta = DEFAULT_NOTIFY_COOLDOWN,
) -> bool:
    """A reminder is due if none was sent yet, or the last one is older than the cooldown."""
    if last_notified is None:
        return True
    return (now or utc_now()) - last_notified > cooldown


def update_timers(
    board: JobBoard,
    *,
    now: datetime | None = None,
    force: bool = False,
    cooldown: timedelta = DEFAULT_NOTIFY_COOLDOWN,
    slack_threshold: timedelta = DEFAULT_SLACK_THRESHOLD,
) -> TimerState:
    """
    Run one tick. At most one alarm is signalled per call.

    force=True ignores the notification cooldown (manual `remind --force`),
    it never invents an alarm when nothing has expired.
    """
    now = now or utc_now()

    def due(last: datetime | None) -> bool:
        return force or should_notify(last, now=now, cooldown=cooldown)

    for job in board.active_stack:
        if not job.timebox_expired(now) or not due(job.last_notification):
            continue
        job.last_notification = now
        logger.debug("Timebox expired for job %r", job.label)
        return TimerState(send_alarm=True, needs_save=True, message=f'Timebox expired: "{job.label}"')

    for stack in board.suspended_stacks:
        if not stack.timer_expired(now) or not due(stack.last_notification):
            continue
        stack.last_notification = now
        logger.debug("Suspended timer expired for %r", stack.head.label)
        return TimerState(
            send_alarm=True,
            needs_save=True,
            message=f'Suspended job is ready to resume: "{stack.head.label}"',
        )

    return _update_work_state(board, now=now, slack_threshold=slack_threshold)


def _update_work_state(board: JobBoard, *, now: datetime, slack_threshold: timedelta) -> TimerState:
    current = board.work_state
    if current.mode == WorkMode.OFF:
        return TimerState()

    slack_date = current.since if current.mode == WorkMode.SLACKING and current.since else now
    is_slacking = all(job.timebox is None for job in board.active_stack)

    send_alarm = False
    message = ""
    if is_slacking:
        if now - slack_date > slack_threshold:
            send_alarm = True
            message = "No time-boxed job is active. What are you doing?"
            new_state = WorkState.slacking_since(now)
        else:
            new_state = WorkState.slacking_since(slack_date)
    else:
        new_state = WorkState.working()

    needs_save = new_state != current
    if needs_save:
        board.work_state = new_state
    return TimerState(send_alarm=send_alarm, needs_save=needs_save, message=message)
