from datetime import date, timedelta

from habitcheck.core.streak import compute_streak, longest_streak, refresh_streak
from habitcheck.models.habit import Frequency


def days(start, count):
    return [start + timedelta(days=i) for i in range(count)]


def test_daily_consecutive_completions(make_habit):
    habit = make_habit(created=date(2024, 1, 1),
                       history={d: True for d in days(date(2024, 1, 1), 5)})
    assert compute_streak(habit, date(2024, 1, 5)) == 5


def test_custom_schedule_stops_at_incomplete_scheduled_day(make_habit):
    habit = make_habit(
        frequency=Frequency.custom({1, 3}),
        history={date(2024, 1, 1): True, date(2024, 1, 3): False},
    )
    assert compute_streak(habit, date(2024, 1, 8)) == 0


def test_unscheduled_days_do_not_break_streak(make_habit):
    habit = make_habit(
        frequency=Frequency.custom({1, 3}),
        history={date(2024, 1, 1): True, date(2024, 1, 3): True, date(2024, 1, 8): True},
    )
    assert compute_streak(habit, date(2024, 1, 8)) == 3


def test_unscheduled_today_starts_from_previous_scheduled_day(make_habit):
    habit = make_habit(
        frequency=Frequency.custom({1, 3}),
        history={date(2024, 1, 1): True, date(2024, 1, 3): True},
    )
    # воскресенье 2024-01-07 не запланировано
    assert compute_streak(habit, date(2024, 1, 7)) == 2


def test_scheduled_today_not_done_breaks_streak(make_habit):
    habit = make_habit(history={date(2024, 1, 6): True, date(2024, 1, 7): True})
    assert compute_streak(habit, date(2024, 1, 8)) == 0


def test_completion_on_unscheduled_day_is_ignored(make_habit):
    habit = make_habit(
        frequency=Frequency.custom({1}),
        history={date(2024, 1, 7): True},
    )
    assert compute_streak(habit, date(2024, 1, 7)) == 0


def test_empty_schedule_has_zero_streak(make_habit):
    habit = make_habit(frequency=Frequency.custom(set()),
                       history={d: True for d in days(date(2024, 1, 1), 7)})
    assert compute_streak(habit, date(2024, 1, 7)) == 0


def test_walk_never_extends_before_creation(make_habit):
    habit = make_habit(created=date(2024, 1, 3),
                       history={d: True for d in days(date(2023, 12, 25), 15)})
    assert compute_streak(habit, date(2024, 1, 8)) == 6


def test_lookback_cap(make_habit):
    habit = make_habit(created=date(2020, 1, 1),
                       history={d: True for d in days(date(2023, 12, 1), 39)})
    assert compute_streak(habit, date(2024, 1, 8), lookback_days=10) == 10
    assert compute_streak(habit, date(2024, 1, 8)) == 39


def test_longest_streak(make_habit):
    history = {d: True for d in days(date(2024, 1, 1), 4)}
    history[date(2024, 1, 5)] = False
    history.update({d: True for d in days(date(2024, 1, 6), 2)})
    habit = make_habit(history=history)

    assert longest_streak(habit, date(2024, 1, 8)) == 4
    assert compute_streak(habit, date(2024, 1, 8)) == 0


def test_refresh_streak_updates_habit(make_habit):
    habit = make_habit(history={date(2024, 1, 8): True})
    assert refresh_streak(habit, date(2024, 1, 8)) == 1
    assert habit.streak == 1
