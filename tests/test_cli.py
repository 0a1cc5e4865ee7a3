import argparse

import pytest

from habitcheck.config import HabitCheckConfig, reload_config
from habitcheck.main import build_reminder_service, main, parse_weekdays
from habitcheck.models.habit import Frequency
from habitcheck.services import HabitService


@pytest.fixture
def run(tmp_path, capsys):
    reload_config({'HABITCHECK_DATA_DIR': str(tmp_path), 'HABITCHECK_LOG_LEVEL': 'WARNING'})

    def _run(*argv):
        code = main(list(argv))
        out, err = capsys.readouterr()
        return code, out, err

    return _run


def test_parse_weekdays():
    assert parse_weekdays("mon,wed") == [1, 3]
    assert parse_weekdays("0, 6") == [0, 6]
    with pytest.raises(argparse.ArgumentTypeError):
        parse_weekdays("funday")


def test_create_done_and_list(run):
    code, out, _ = run("create", "Read", "--category", "learning", "--goal", "3")
    assert code == 0
    habit_id = out.strip()

    code, out, _ = run("done", habit_id)
    assert code == 0
    assert "streak: 1" in out

    code, out, _ = run("list")
    assert habit_id in out
    assert "Read" in out


def test_future_toggle_rejected(run):
    _, out, _ = run("create", "Read")
    code, _, err = run("toggle", out.strip(), "2999-01-01")
    assert code == 2
    assert "2999-01-01" in err


def test_calendar_and_stats(run):
    _, out, _ = run("create", "Read", "--frequency", "custom", "--days", "mon,wed")
    habit_id = out.strip()

    code, out, _ = run("calendar", habit_id, "--month", "2024-02")
    assert code == 0
    assert "February 2024" in out
    assert "Sun" in out

    code, out, _ = run("stats", habit_id)
    assert code == 0
    assert "longest_streak" in out


def test_unknown_habit(run):
    code, _, err = run("done", "missing")
    assert code == 1
    assert "missing" in err

    code, _, _ = run("delete", "missing")
    assert code == 1


def test_remind_disabled(tmp_path, capsys):
    reload_config({'HABITCHECK_DATA_DIR': str(tmp_path), 'HABITCHECK_REMINDERS_ENABLED': 'false'})
    assert main(["remind"]) == 1


def test_reminders_read_from_store_without_touching_cache(memory_repository, clock, capsys):
    service = HabitService(memory_repository, clock)
    service.create_habit("Read", frequency=Frequency.daily("12:00"))
    service.habits.clear()

    reminders = build_reminder_service(service, HabitCheckConfig({}))

    assert [h.name for h in reminders.check()] == ["Read"]
    assert service.habits == {}
    assert "🔔 Read" in capsys.readouterr().out
