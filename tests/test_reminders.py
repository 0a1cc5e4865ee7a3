from datetime import date, datetime

import pytest
import pytz

from habitcheck.core.clock import FixedClock
from habitcheck.models.habit import Frequency
from habitcheck.services.reminders import HabitReminderService, due_reminders, is_reminder_due


def at(hour, minute, day=date(2024, 1, 8)):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=pytz.utc)


@pytest.mark.parametrize("now, expected", [
    (at(7, 30), True),
    (at(7, 34), True),
    (at(7, 26), True),
    (at(7, 35), False),
    (at(8, 30), False),
])
def test_reminder_window(make_habit, now, expected):
    habit = make_habit(frequency=Frequency.daily("07:30"))
    assert is_reminder_due(habit, now) is expected


def test_no_reminder_without_time(make_habit):
    assert not is_reminder_due(make_habit(), at(7, 30))


def test_no_reminder_when_done_or_unscheduled(make_habit):
    done = make_habit(frequency=Frequency.daily("07:30"), history={date(2024, 1, 8): True})
    tuesdays = make_habit(frequency=Frequency.custom({2}, time="07:30"))

    assert due_reminders([done, tuesdays], at(7, 30)) == []
    assert due_reminders([tuesdays], at(7, 30, day=date(2024, 1, 9))) == [tuesdays]


def test_service_notifies_once_per_day(make_habit):
    habit = make_habit(frequency=Frequency.daily("07:30"))
    clock = FixedClock(datetime(2024, 1, 8, 7, 30))
    sent = []
    service = HabitReminderService(lambda: [habit], clock, sent.append)

    assert service.check() == [habit]
    clock.advance(minutes=1)
    assert service.check() == []

    clock.advance(days=1)
    assert service.check() == [habit]
    assert sent == [habit, habit]


def test_service_keeps_going_after_notify_error(make_habit):
    first = make_habit(name="First", frequency=Frequency.daily("07:30"))
    second = make_habit(name="Second", frequency=Frequency.daily("07:30"))
    clock = FixedClock(datetime(2024, 1, 8, 7, 30))

    def notify(habit):
        if habit is first:
            raise RuntimeError("канал недоступен")

    service = HabitReminderService(lambda: [first, second], clock, notify)

    assert service.check() == [second]
    # неудачное напоминание будет повторено
    assert service.check() == []


def test_service_survives_habit_source_error():
    def broken():
        raise OSError("нет доступа")

    service = HabitReminderService(broken, FixedClock(datetime(2024, 1, 8, 7, 30)), lambda habit: None)
    assert service.check() == []


def test_start_and_stop():
    service = HabitReminderService(lambda: [], FixedClock(datetime(2024, 1, 8, 7, 30)),
                                   lambda habit: None, interval_seconds=3600)
    service.start()
    try:
        assert service.running
        assert service.scheduler.get_job(HabitReminderService.JOB_ID) is not None
    finally:
        service.stop()
    assert not service.running
