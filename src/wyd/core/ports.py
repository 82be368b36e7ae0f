# src/wyd/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The application depends on Protocols instead of concrete delivery mechanisms,
so desktop notifications and audio stay swappable and tests can use fakes.
Both capabilities may fail; implementations raise NotificationError.
"""

from typing import Protocol


class NotificationSink(Protocol):
    """Shows a reminder to the user (desktop popup, log line, ...)."""

    def notify(self, summary: str, body: str) -> None: ...


class AlarmPlayer(Protocol):
    """Plays the audible alarm that accompanies a reminder."""

    def play_alarm(self) -> None: ...
