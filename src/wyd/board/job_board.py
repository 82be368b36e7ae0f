# src/wyd/board/job_board.py

from __future__ import annotations

"""
Job board.

One active stack of jobs (LIFO, last element is the current job) plus an
ordered collection of suspended stacks. Suspended stacks are always kept
sorted by their effective timer: untimed stacks sort as if their timer were
"now", so they group with stacks whose timer already passed.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime

from ..errors import EmptyStack, IndexOutOfRange, NotFound
from ..timefmt import format_clock, format_date, format_duration
from .matchers import LabelMatcher, as_matcher
from .models import Job, SuspendedStack, WorkState, utc_now

logger = logging.getLogger(__name__)

EXPIRED_MARKER = "! "
SUSPENDED_INDENT = "    "

NOTHING_TO_DO_MESSAGE = (
    "No jobs in progress, and no suspended tasks! "
    "Use `wyd push [some arbitrary label]` to start a new task."
)
RESUME_HINT_MESSAGE = (
    "You finished your jobs in progress. Yay! "
    "Use `wyd resume` to resume the topmost suspended task:\n"
)


def describe_job(job: Job, now: datetime | None = None) -> str:
    """One summary line: label, start time, and the timebox state if any."""
    now = now or utc_now()
    line = f"{job.label} | started at {format_clock(job.begin_date)}"
    remaining = job.timebox_remaining(now)
    if remaining is None:
        return line
    if job.timebox_expired(now):
        return f"{EXPIRED_MARKER}{line} (timebox expired)"
    return f"{line} ({format_duration(remaining)} remaining)"


@dataclass(slots=True)
class JobBoard:
    active_stack: list[Job] = field(default_factory=list)
    suspended_stacks: list[SuspendedStack] = field(default_factory=list)
    work_state: WorkState = field(default_factory=WorkState.off)

    # ---- active stack ----

    def push(self, job: Job) -> None:
        self.active_stack.append(job)

    def pop(self) -> Job | None:
        if not self.active_stack:
            return None
        return self.active_stack.pop()

    @property
    def current(self) -> Job | None:
        return self.active_stack[-1] if self.active_stack else None

    def num_active_jobs(self) -> int:
        return len(self.active_stack)

    def find_job(self, pattern: str | LabelMatcher) -> tuple[int, Job] | None:
        """First job (scanning bottom to top) whose label matches."""
        matcher = as_matcher(pattern)
        for index, job in enumerate(self.active_stack):
            if matcher.matches(job.label):
                return index, job
        return None

    # ---- suspend ----

    def suspend_at(
        self,
        index: int,
        reason: str,
        timer: datetime | None = None,
        *,
        now: datetime | None = None,
    ) -> SuspendedStack:
        """
        Move active_stack[index:] into a new suspended stack.

        Suspending a job below the top takes every job nested above it along.
        """
        if index < 0 or index >= len(self.active_stack):
            raise IndexOutOfRange(index, len(self.active_stack))

        jobs = self.active_stack[index:]
        del self.active_stack[index:]

        stack = SuspendedStack(
            data=jobs,
            reason=reason,
            date_suspended=now or utc_now(),
            timer=timer,
        )
        self.add_suspended_stack(stack, now=now)
        logger.debug("Suspended %d job(s) from index %d reason=%r", len(jobs), index, reason)
        return stack

    def suspend_matching(
        self,
        pattern: str | LabelMatcher,
        reason: str,
        timer: datetime | None = None,
        *,
        now: datetime | None = None,
    ) -> SuspendedStack:
        found = self.find_job(pattern)
        if found is None:
            raise NotFound(f"No active job matches {pattern!r}.")
        index, _job = found
        return self.suspend_at(index, reason, timer, now=now)

    def suspend_current(
        self,
        reason: str,
        timer: datetime | None = None,
        *,
        now: datetime | None = None,
    ) -> SuspendedStack:
        if not self.active_stack:
            raise EmptyStack("No job to suspend.")
        return self.suspend_at(len(self.active_stack) - 1, reason, timer, now=now)

    # ---- suspended stacks ----

    def sort_suspended_stacks(self, now: datetime | None = None) -> None:
        # list.sort is stable: untimed stacks keep their relative order.
        now = now or utc_now()
        self.suspended_stacks.sort(key=lambda stack: stack.timer or now)

    def add_suspended_stack(self, stack: SuspendedStack, *, now: datetime | None = None) -> None:
        if not stack.data:
            raise ValueError("a suspended stack needs at least one job")
        self.suspended_stacks.append(stack)
        self.sort_suspended_stacks(now)

    def resume_matching(self, pattern: str | LabelMatcher, *, now: datetime | None = None) -> list[Job]:
        """Resume the first suspended stack whose first job label matches."""
        matcher = as_matcher(pattern)
        for index, stack in enumerate(self.suspended_stacks):
            if matcher.matches(stack.head.label):
                return self.resume_at_index(index, now=now)
        raise NotFound(f"No suspended job matches {pattern!r}.")

    def resume_at_index(self, index: int, *, now: datetime | None = None) -> list[Job]:
        """
        Return a suspended stack's jobs to the top of the active stack.

        The jobs keep their relative order and restart their clocks at `now`.
        """
        if index < 0 or index >= len(self.suspended_stacks):
            raise IndexOutOfRange(index, len(self.suspended_stacks))

        stack = self.suspended_stacks.pop(index)
        resumed_at = now or utc_now()
        resumed = [replace(job, begin_date=resumed_at) for job in stack.data]
        self.active_stack.extend(resumed)
        logger.debug("Resumed %d job(s) from suspended index %d", len(resumed), index)
        return resumed

    def suspended_tasks_ready(self, now: datetime | None = None) -> bool:
        if not self.suspended_stacks:
            return False
        return self.suspended_stacks[0].is_ready(now)

    # ---- rendering ----

    def get_summary(self, now: datetime | None = None) -> str:
        if not self.active_stack:
            return self.empty_stack_message(now)
        return "".join(f"{describe_job(job, now)}\n" for job in self.active_stack)

    def suspended_stack_summary(self) -> str:
        lines: list[str] = []
        for stack in self.suspended_stacks:
            head = stack.head
            if stack.timer is not None:
                lines.append(f"{format_date(stack.timer)}:  {head.label}")
            else:
                lines.append(f"{head.label} (suspended at {format_date(stack.date_suspended)})")
            for job in stack.data[1:]:
                lines.append(f"{SUSPENDED_INDENT}{job.label}")
        return "".join(f"{line}\n" for line in lines)

    def empty_stack_message(self, now: datetime | None = None) -> str:
        if self.suspended_tasks_ready(now):
            return RESUME_HINT_MESSAGE + self.suspended_stack_summary()
        return NOTHING_TO_DO_MESSAGE
