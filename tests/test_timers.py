# tests/test_timers.py

from __future__ import annotations

from datetime import timedelta

from wyd.board.job_board import JobBoard
from wyd.board.models import Job, SuspendedStack, WorkMode, WorkState
from wyd.board.timers import should_notify, update_timers

from .fakes import T0

FIVE_MIN = timedelta(minutes=5)


def _board_with_report_and_email() -> JobBoard:
    board = JobBoard()
    board.push(Job(label="Write report", begin_date=T0))
    board.push(Job(label="Reply to email", begin_date=T0, timebox=FIVE_MIN))
    return board


def test_should_notify_cooldown() -> None:
    cooldown = timedelta(seconds=30)
    assert should_notify(None, now=T0, cooldown=cooldown)
    assert not should_notify(T0, now=T0 + timedelta(seconds=30), cooldown=cooldown)
    assert should_notify(T0, now=T0 + timedelta(seconds=31), cooldown=cooldown)


def test_expired_timebox_alarms_once_then_stays_quiet() -> None:
    board = _board_with_report_and_email()
    assert board.current is not None and board.current.label == "Reply to email"

    before = update_timers(board, now=T0 + timedelta(minutes=4))
    assert before.send_alarm is False
    assert before.needs_save is False

    later = T0 + FIVE_MIN + timedelta(seconds=1)
    assert board.current.timebox_expired(later)

    first = update_timers(board, now=later)
    assert first.send_alarm is True
    assert first.needs_save is True
    assert "Reply to email" in first.message
    assert board.current.last_notification == later

    again = update_timers(board, now=later)
    assert again.send_alarm is False


def test_force_bypasses_cooldown() -> None:
    board = _board_with_report_and_email()
    later = T0 + FIVE_MIN + timedelta(seconds=1)
    assert update_timers(board, now=later).send_alarm

    forced = update_timers(board, now=later, force=True)
    assert forced.send_alarm is True
    assert forced.needs_save is True


def test_force_does_not_invent_alarms() -> None:
    board = _board_with_report_and_email()
    assert update_timers(board, now=T0, force=True).send_alarm is False


def test_alarm_repeats_after_cooldown() -> None:
    board = _board_with_report_and_email()
    later = T0 + FIVE_MIN
    assert update_timers(board, now=later).send_alarm
    assert not update_timers(board, now=later + timedelta(seconds=10)).send_alarm
    assert update_timers(board, now=later + timedelta(seconds=31)).send_alarm


def test_only_first_expired_job_fires_per_tick() -> None:
    board = JobBoard(
        active_stack=[
            Job(label="outer", begin_date=T0, timebox=timedelta(minutes=1)),
            Job(label="inner", begin_date=T0, timebox=timedelta(minutes=1)),
        ]
    )
    now = T0 + timedelta(minutes=2)
    state = update_timers(board, now=now)
    assert "outer" in state.message
    assert board.active_stack[1].last_notification is None

    # Outer is in cooldown, so the next tick surfaces the inner job.
    state = update_timers(board, now=now)
    assert "inner" in state.message


def test_suspended_timer_fires_when_no_active_job_does() -> None:
    stack = SuspendedStack(
        data=[Job(label="call plumber", begin_date=T0)],
        reason="office closed",
        date_suspended=T0,
        timer=T0 + timedelta(hours=1),
    )
    board = JobBoard(suspended_stacks=[stack])

    assert update_timers(board, now=T0 + timedelta(minutes=59)).send_alarm is False

    at = T0 + timedelta(hours=1)
    state = update_timers(board, now=at)
    assert state.send_alarm and state.needs_save
    assert "call plumber" in state.message
    assert stack.last_notification == at
    assert update_timers(board, now=at).send_alarm is False


def test_untimed_suspended_stack_never_alarms() -> None:
    stack = SuspendedStack(data=[Job(label="x", begin_date=T0)], reason="", date_suspended=T0)
    board = JobBoard(suspended_stacks=[stack])
    assert update_timers(board, now=T0 + timedelta(days=3)).send_alarm is False


def test_active_expiry_wins_over_suspended_timer() -> None:
    stack = SuspendedStack(
        data=[Job(label="parked", begin_date=T0)],
        reason="",
        date_suspended=T0,
        timer=T0,
    )
    board = JobBoard(
        active_stack=[Job(label="boxed", begin_date=T0, timebox=timedelta(minutes=1))],
        suspended_stacks=[stack],
    )
    state = update_timers(board, now=T0 + timedelta(minutes=2))
    assert "boxed" in state.message
    assert stack.last_notification is None


def test_work_off_never_escalates() -> None:
    board = JobBoard(active_stack=[Job(label="idle", begin_date=T0)])
    state = update_timers(board, now=T0 + timedelta(hours=5))
    assert state.send_alarm is False
    assert state.needs_save is False
    assert board.work_state == WorkState.off()


def test_slacking_escalates_every_threshold() -> None:
    board = JobBoard(active_stack=[Job(label="browsing", begin_date=T0)], work_state=WorkState.working())

    start = update_timers(board, now=T0)
    assert start.send_alarm is False
    assert start.needs_save is True
    assert board.work_state == WorkState.slacking_since(T0)

    quiet = update_timers(board, now=T0 + timedelta(minutes=4))
    assert quiet.send_alarm is False
    assert quiet.needs_save is False
    assert board.work_state == WorkState.slacking_since(T0)

    nag_at = T0 + FIVE_MIN + timedelta(seconds=1)
    nag = update_timers(board, now=nag_at)
    assert nag.send_alarm is True
    assert nag.needs_save is True
    assert board.work_state == WorkState.slacking_since(nag_at)

    assert update_timers(board, now=nag_at + timedelta(minutes=1)).send_alarm is False


def test_timeboxed_job_ends_slacking() -> None:
    board = JobBoard(work_state=WorkState.slacking_since(T0))
    board.push(Job(label="focus", begin_date=T0 + timedelta(minutes=1), timebox=timedelta(minutes=25)))

    state = update_timers(board, now=T0 + timedelta(minutes=2))
    assert state.send_alarm is False
    assert state.needs_save is True
    assert board.work_state.mode == WorkMode.WORKING

    steady = update_timers(board, now=T0 + timedelta(minutes=3))
    assert steady.needs_save is False


def test_timebox_past_the_calendar_never_fires() -> None:
    board = JobBoard()
    board.push(Job(label="forever", begin_date=T0, timebox=timedelta(days=9_000_000)))

    state = update_timers(board, now=T0 + timedelta(days=365))

    assert state.send_alarm is False
    assert state.needs_save is False
