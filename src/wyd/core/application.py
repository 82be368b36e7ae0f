# src/wyd/core/application.py

from __future__ import annotations

"""
Application commands.

Each command is one transaction: the board is loaded from disk when the
application is built, a single operation mutates it, and the board is saved
back. Human-readable history lines go to the daily log. Methods return the
text the CLI should show; failures are raised as WydError subclasses.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..board.job_board import JobBoard, describe_job
from ..board.models import Job, SuspendedStack, WorkState, utc_now
from ..board.timers import TimerState, update_timers
from ..errors import EmptyStack, IndexOutOfRange, NotFound, TimeboxedParent
from ..timefmt import format_clock, format_date, format_duration
from .state import AppContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WydApplication:
    context: AppContext
    board: JobBoard

    @classmethod
    def load(cls, context: AppContext) -> WydApplication:
        """Load the board; MalformedState / StateIOError abort the invocation."""
        return cls(context=context, board=context.store.load())

    def save(self) -> None:
        self.context.store.save(self.board)

    # ---- helpers ----

    def _indent(self) -> str:
        return " " * self.board.num_active_jobs()

    def _log(self, line: str) -> None:
        self.context.daily_log.append(line)

    # ---- jobs ----

    def create_job(
        self,
        label: str,
        timebox: timedelta | None = None,
        retro: timedelta | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        label = (label or "").strip()
        if not label:
            raise ValueError("Can't create a job without a label.")

        current = self.board.current
        if current is not None and current.timebox is not None:
            raise TimeboxedParent(
                "Current job has a timebox. Finish the task or remove the timebox "
                "before creating a sub task."
            )

        now = now or utc_now()
        begin_date = now - retro if retro else now
        job = Job(label=label, begin_date=begin_date, timebox=timebox)

        line = f"{self._indent()}{describe_job(job, now)}"
        self.board.push(job)
        self.save()
        self._log(line)
        logger.info("Created job %r timebox=%s", label, timebox)
        return line

    def create_suspended_job(
        self,
        label: str,
        reason: str,
        timer: datetime | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        label = (label or "").strip()
        if not label:
            raise ValueError("Can't create a job without a label.")

        now = now or utc_now()
        stack = SuspendedStack(
            data=[Job(label=label, begin_date=now)],
            reason=reason,
            date_suspended=now,
            timer=timer,
        )
        self.board.add_suspended_stack(stack, now=now)
        self.save()
        return "Job suspended."

    def suspend_job_named(
        self,
        pattern: str,
        reason: str,
        timer: datetime | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        self.board.suspend_matching(pattern, reason, timer, now=now)
        self.save()
        return "Job suspended."

    def suspend_current_job(self, reason: str, timer: datetime | None = None, *, now: datetime | None = None) -> str:
        self.board.suspend_current(reason, timer, now=now)
        self.save()
        return "Job suspended."

    def resume_job_named(self, pattern: str, *, now: datetime | None = None) -> str:
        """Resume by label; an empty pattern resumes the topmost suspended stack."""
        if pattern:
            resumed = self.board.resume_matching(pattern, now=now)
        else:
            try:
                resumed = self.board.resume_at_index(0, now=now)
            except IndexOutOfRange:
                raise NotFound("No suspended job to resume.") from None

        self.save()
        return f"Job resumed: {describe_job(resumed[-1], now)}"

    def complete_current_job(self, cancelled: bool = False, *, now: datetime | None = None) -> str:
        job = self.board.pop()
        if job is None:
            return self.board.empty_stack_message(now)

        now = now or utc_now()
        elapsed = format_duration(now - job.begin_date)
        verb = "Cancelled" if cancelled else "Finished"
        line = f'{self._indent()}{verb} job "{job.label}" (time elapsed: {elapsed})'
        self.save()
        self._log(line)

        new_top = self.board.current
        if new_top is not None:
            return f"{line}\n{describe_job(new_top, now)}"
        return f"{line}\n{self.board.get_summary(now)}"

    # ---- timeboxes ----

    def apply_timebox(self, timebox: timedelta | None, *, now: datetime | None = None) -> str:
        job = self.board.current
        if job is None:
            raise EmptyStack("No active job to apply timebox to.")

        job.timebox = timebox
        # The timebox just applied is measured from now.
        job.begin_date = now or utc_now()
        job.last_notification = None
        self.save()

        if timebox is None:
            return f'Removed timebox from job "{job.label}"'
        return f'Applied timebox "{format_duration(timebox)}" to job "{job.label}"'

    def current_timebox_expiry(self) -> datetime | None:
        job = self.board.current
        if job is None:
            return None
        return job.timebox_expiry()

    def describe_current_timebox(self) -> str:
        expiry = self.current_timebox_expiry()
        if expiry is None:
            return "The current job has no timebox."
        return f"Current timebox: {format_date(expiry)}"

    # ---- reminders ----

    def run_tick(self, *, force: bool = False, alarm: bool = False, now: datetime | None = None) -> TimerState:
        """
        Evaluate timers once, persist, then deliver.

        The board is saved before delivery so a failing notification does not
        lose the notification stamp (and cannot spam on the next tick).
        """
        settings = self.context.settings
        state = update_timers(
            self.board,
            now=now,
            force=force,
            cooldown=settings.notify_cooldown,
            slack_threshold=settings.slack_threshold,
        )
        if state.needs_save:
            self.save()
        if state.send_alarm:
            # A broken notification sink must not silence the alarm.
            try:
                self.context.notifier.notify(settings.app_name, state.message)
            finally:
                if alarm:
                    self.context.alarm.play_alarm()
        return state

    def send_reminders(self, force: bool = False, *, now: datetime | None = None) -> str:
        state = self.run_tick(force=force, now=now)
        if state.send_alarm:
            return state.message
        return "No reminders due."

    # ---- work mode ----

    def set_work_state(self, work_state: WorkState) -> str:
        self.board.work_state = work_state
        self.save()
        return f"Work mode: {work_state.mode.value}"

    # ---- views ----

    def get_summary(self, *, now: datetime | None = None) -> str:
        return self.board.get_summary(now)

    def ls(self, *, now: datetime | None = None) -> str:
        self.board.sort_suspended_stacks(now)
        suspended = self.board.suspended_stack_summary()
        main = self.board.get_summary(now)
        return f"Suspended jobs:\n\n{suspended}\n\nMain jobs:\n\n{main}\n"

    # ---- daily log ----

    def add_log_note(self, content: str, *, now: datetime | None = None) -> str:
        line = f"{self._indent()}{format_clock(now or utc_now())}: {content}"
        self._log(line)
        return line

    def read_log(self) -> str:
        return self.context.daily_log.read()
