# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from wyd.cli.bootstrap import create_context
from wyd.config import Settings
from wyd.core.state import AppContext

from .fakes import FakeAlarm, FakeNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test data directory.

    Built directly rather than from the environment, to keep unit tests
    isolated and deterministic.
    """
    return Settings(
        app_name="wyd",
        log_level="DEBUG",
        data_dir=tmp_path / "wyd",
        notify_cooldown_seconds=30.0,
        slack_threshold_seconds=300.0,
        notifier_interval_seconds=1.0,
        desktop_notifications=False,
        alarm_enabled=False,
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def alarm() -> FakeAlarm:
    return FakeAlarm()


@pytest.fixture()
def context(settings: Settings, notifier: FakeNotifier, alarm: FakeAlarm) -> AppContext:
    """
    AppContext wired with deterministic fakes.

    NOTE: the real JSON store and daily log are kept, since their behavior on
    disk is part of what we want to test.
    """
    return create_context(settings=settings, notifier=notifier, alarm=alarm)


@pytest.fixture()
def restore_logging():
    """setup_logging() replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
