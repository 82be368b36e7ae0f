# src/wyd/notifier/sinks.py

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any

from ..errors import NotificationError

logger = logging.getLogger(__name__)
reminder_logger = logging.getLogger("wyd.reminders")


class LogNotifier:
    """Fallback sink: reminders go to the log (and the console, if attached)."""

    def notify(self, summary: str, body: str) -> None:
        reminder_logger.warning("%s: %s", summary, body)


class DesktopNotifier:
    """Desktop popups through `notify-send`."""

    def __init__(self, *, icon_path: str | Path | None = None, app_name: str = "wyd", timeout_seconds: float = 5.0) -> None:
        self._icon_path = Path(icon_path) if icon_path else None
        self._app_name = app_name
        self._timeout_seconds = timeout_seconds

    @staticmethod
    def available() -> bool:
        return shutil.which("notify-send") is not None

    def notify(self, summary: str, body: str) -> None:
        cmd = ["notify-send", "--app-name", self._app_name]
        if self._icon_path is not None and self._icon_path.exists():
            cmd.extend(["--icon", str(self._icon_path)])
        cmd.extend([summary, body])
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout_seconds, check=False)  # noqa: S603
        except (OSError, subprocess.TimeoutExpired) as e:
            raise NotificationError(f"notify-send failed: {e}") from e
        if proc.returncode != 0:
            raise NotificationError(f"notify-send exited with {proc.returncode}: {proc.stderr.strip()}")


class SilentAlarm:
    def play_alarm(self) -> None:
        return


class SoundAlarm:
    """
    Audible bell.

    Notes:
    - sounddevice + numpy are optional (extra "audio"); when they are missing
      the alarm disables itself instead of failing every tick.
    - playback blocks until the tone has finished.
    """

    def __init__(
        self,
        enabled: bool = True,
        *,
        frequency_hz: float = 880.0,
        duration_seconds: float = 1.5,
        sample_rate: int = 44100,
    ) -> None:
        self.enabled = bool(enabled)
        self._frequency_hz = frequency_hz
        self._duration_seconds = duration_seconds
        self._sample_rate = sample_rate
        self._sd: Any = None
        self._tone: Any = None

        if not self.enabled:
            return

        try:
            import numpy as np  # type: ignore
            import sounddevice as sd  # type: ignore
        except Exception as e:
            self.enabled = False
            logger.warning(
                "Alarm sound is enabled, but dependencies are missing or failed to import. "
                "Install the 'audio' extra (sounddevice + numpy) to enable it. Error: %s",
                repr(e),
            )
            return

        self._sd = sd
        t = np.arange(int(self._sample_rate * self._duration_seconds)) / self._sample_rate
        # Decaying sine with a quieter octave overtone.
        tone = np.sin(2 * np.pi * self._frequency_hz * t) + 0.3 * np.sin(4 * np.pi * self._frequency_hz * t)
        self._tone = (0.4 * tone * np.exp(-3.0 * t)).astype(np.float32)

    def play_alarm(self) -> None:
        if not self.enabled or self._sd is None:
            return
        try:
            self._sd.play(self._tone, self._sample_rate)
            self._sd.wait()
        except Exception as e:
            raise NotificationError(f"Unable to play alarm sound: {e!r}") from e


def build_notification_sink(settings) -> DesktopNotifier | LogNotifier:
    if settings.desktop_notifications and DesktopNotifier.available():
        return DesktopNotifier(icon_path=settings.icon_path, app_name=settings.app_name)
    if settings.desktop_notifications:
        logger.info("notify-send not found; reminders will only be logged.")
    return LogNotifier()


def build_alarm_player(settings) -> SoundAlarm | SilentAlarm:
    if not settings.alarm_enabled:
        return SilentAlarm()
    return SoundAlarm(enabled=True)
