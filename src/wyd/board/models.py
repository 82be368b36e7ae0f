# src/wyd/board/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import StrEnum

ZERO = timedelta(0)

# Latest instant that still renders in any local timezone.
FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=1)
FAR_PAST = datetime.min.replace(tzinfo=timezone.utc) + timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Job:
    """
    A single trackable unit of work.

    begin_date is the instant the job became active (or was last resumed).
    When timebox is set the job expires at begin_date + timebox.
    """

    label: str
    begin_date: datetime
    timebox: timedelta | None = None
    last_notification: datetime | None = None

    def timebox_remaining(self, now: datetime | None = None) -> timedelta | None:
        if self.timebox is None:
            return None
        expiry = self.timebox_expiry()
        return max(ZERO, expiry - (now or utc_now()))

    def timebox_expired(self, now: datetime | None = None) -> bool:
        return self.timebox_remaining(now) == ZERO

    def timebox_expiry(self) -> datetime | None:
        if self.timebox is None:
            return None
        try:
            return self.begin_date + self.timebox
        except OverflowError:
            return FAR_FUTURE if self.timebox > ZERO else FAR_PAST


@dataclass(slots=True)
class SuspendedStack:
    """A parked run of jobs, suspended together and resumed together."""

    data: list[Job]
    reason: str
    date_suspended: datetime
    timer: datetime | None = None
    last_notification: datetime | None = None

    @property
    def head(self) -> Job:
        return self.data[0]

    def is_ready(self, now: datetime | None = None) -> bool:
        """Untimed stacks are ready immediately; timed ones once the timer passes."""
        if self.timer is None:
            return True
        return self.timer <= (now or utc_now())

    def timer_expired(self, now: datetime | None = None) -> bool:
        return self.timer is not None and self.timer <= (now or utc_now())


class WorkMode(StrEnum):
    OFF = "off"
    WORKING = "working"
    SLACKING = "slacking"


@dataclass(slots=True, frozen=True)
class WorkState:
    """
    Whether the user is in work mode.

    SLACKING carries the instant from which no time-boxed job has been active.
    """

    mode: WorkMode = WorkMode.OFF
    since: datetime | None = field(default=None)

    @classmethod
    def off(cls) -> WorkState:
        return cls(WorkMode.OFF)

    @classmethod
    def working(cls) -> WorkState:
        return cls(WorkMode.WORKING)

    @classmethod
    def slacking_since(cls, since: datetime) -> WorkState:
        return cls(WorkMode.SLACKING, since)
