# src/wyd/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object per invocation, passed around explicitly.
- Every value has a sane default; nothing is required.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "WYD"

DEFAULT_DATA_DIR = Path("~/.local/share/wyd")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default.expanduser()
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data ----
    data_dir: Path

    # ---- Reminders ----
    notify_cooldown_seconds: float
    slack_threshold_seconds: float
    notifier_interval_seconds: float

    # ---- Delivery ----
    desktop_notifications: bool
    alarm_enabled: bool

    @property
    def state_file(self) -> Path:
        return self.data_dir / "jobs.json"

    @property
    def lock_file(self) -> Path:
        return self.data_dir / ".notifier"

    @property
    def icon_path(self) -> Path:
        return self.data_dir / "wyd-icon.png"

    @property
    def notify_cooldown(self) -> timedelta:
        return timedelta(seconds=self.notify_cooldown_seconds)

    @property
    def slack_threshold(self) -> timedelta:
        return timedelta(seconds=self.slack_threshold_seconds)

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "wyd"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            data_dir=_env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR),
            notify_cooldown_seconds=max(0.0, _env_float(_k("NOTIFY_COOLDOWN_SECONDS"), 30.0)),
            slack_threshold_seconds=max(0.0, _env_float(_k("SLACK_THRESHOLD_SECONDS"), 300.0)),
            notifier_interval_seconds=max(0.1, _env_float(_k("NOTIFIER_INTERVAL_SECONDS"), 1.0)),
            desktop_notifications=_env_bool(_k("DESKTOP_NOTIFICATIONS"), True),
            alarm_enabled=_env_bool(_k("ALARM_ENABLED"), True),
        )


def get_settings(*, dotenv: bool = True) -> Settings:
    """Read settings fresh from the environment (and .env when present)."""
    if dotenv:
        load_dotenv(override=False)
    return Settings.from_env()
