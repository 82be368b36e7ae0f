# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from wyd.errors import NotificationError

# Fixed reference instant for time-dependent tests.
T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@dataclass(slots=True)
class SentNotification:
    summary: str
    body: str


@dataclass(slots=True)
class FakeNotifier:
    """
    Fake NotificationSink used by application and notifier tests.
    """

    sent: list[SentNotification] = field(default_factory=list)

    def notify(self, summary: str, body: str) -> None:
        self.sent.append(SentNotification(summary=summary, body=body))


@dataclass(slots=True)
class FailingNotifier:
    calls: int = 0

    def notify(self, summary: str, body: str) -> None:
        self.calls += 1
        raise NotificationError("desktop is asleep")


@dataclass(slots=True)
class FakeAlarm:
    rings: int = 0

    def play_alarm(self) -> None:
        self.rings += 1


@dataclass(slots=True)
class FakePopen:
    """Records spawn calls instead of starting processes."""

    calls: list[list[str]] = field(default_factory=list)

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        return None
