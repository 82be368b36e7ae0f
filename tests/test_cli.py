# tests/test_cli.py

from __future__ import annotations

from pathlib import Path

import pytest

from wyd.cli.main import EXIT_BOARD, EXIT_OK, EXIT_STATE, main
from wyd.config import Settings


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_logging) -> Path:
    path = tmp_path / "data"
    monkeypatch.setenv("WYD_DATA_DIR", str(path))
    monkeypatch.setenv("WYD_DESKTOP_NOTIFICATIONS", "false")
    monkeypatch.setenv("WYD_ALARM_ENABLED", "false")
    monkeypatch.setenv("WYD_LOG_LEVEL", "CRITICAL")
    return path


def test_settings_from_env(data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WYD_NOTIFY_COOLDOWN_SECONDS", "120")
    monkeypatch.setenv("WYD_NOTIFIER_INTERVAL_SECONDS", "not a number")
    settings = Settings.from_env()
    assert settings.data_dir == data_dir
    assert settings.state_file == data_dir / "jobs.json"
    assert settings.notify_cooldown_seconds == 120.0
    assert settings.notifier_interval_seconds == 1.0
    assert settings.desktop_notifications is False


def test_push_info_done(data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["push", "Write", "report"]) == EXIT_OK
    assert main(["push", "-t", "5m", "Reply", "to", "email"]) == EXIT_OK
    capsys.readouterr()

    assert main([]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Write report | started at" in out
    assert "Reply to email | started at" in out

    assert main(["done"]) == EXIT_OK
    assert 'Finished job "Reply to email"' in capsys.readouterr().out
    assert (data_dir / "jobs.json").exists()


def test_board_errors_exit_gracefully(data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["suspend"]) == EXIT_BOARD
    assert main(["resume", "nothing"]) == EXIT_BOARD
    assert main(["push"]) == EXIT_BOARD
    err = capsys.readouterr().err
    assert "No job to suspend." in err
    assert "Can't create a job without a label." in err


def test_suspend_resume_through_cli(data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["push", "Write", "report"]) == EXIT_OK
    assert main(["suspend", "-r", "blocked", "-t", "1h", "report"]) == EXIT_OK
    capsys.readouterr()

    assert main(["ls"]) == EXIT_OK
    out = capsys.readouterr().out
    assert ":  Write report" in out

    assert main(["resume", "Write"]) == EXIT_OK
    assert "Job resumed: Write report" in capsys.readouterr().out


def test_malformed_state_is_fatal(data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data_dir.mkdir(parents=True)
    (data_dir / "jobs.json").write_text("{broken", encoding="utf-8")

    assert main(["push", "anything"]) == EXIT_STATE
    assert "malformed" in capsys.readouterr().err
    assert (data_dir / "jobs.json").read_text(encoding="utf-8") == "{broken"


def test_bad_duration_is_a_usage_error(data_dir: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["push", "-t", "soon", "x"])
    assert exc.value.code == 2


def test_notifier_kill_writes_sentinel(data_dir: Path) -> None:
    assert main(["notifier", "--kill"]) == EXIT_OK
    assert (data_dir / ".notifier").read_text(encoding="utf-8") == "kill"


def test_work_mode_and_log(data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["work", "on"]) == EXIT_OK
    assert "Work mode: working" in capsys.readouterr().out

    assert main(["log", "lunch", "break"]) == EXIT_OK
    capsys.readouterr()
    assert main(["log"]) == EXIT_OK
    assert "lunch break" in capsys.readouterr().out


def test_timebox_past_the_calendar_is_rejected(data_dir: Path) -> None:
    assert main(["push", "x"]) == EXIT_OK
    with pytest.raises(SystemExit) as exc:
        main(["timebox", "9000000d"])
    assert exc.value.code == 2
    assert main(["info"]) == EXIT_OK
