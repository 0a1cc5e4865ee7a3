# core/stats.py

"""
Статистика по привычкам: процент выполнения, серии, идеальные дни.

Процент выполнения считается только по запланированным дням.
"""

from datetime import date, timedelta
from typing import Any, Dict, List

from habitcheck.core.schedule import is_scheduled, scheduled_dates
from habitcheck.core.streak import longest_streak, DEFAULT_LOOKBACK_DAYS
from habitcheck.models.habit import Habit


def _period_start(habit: Habit, today: date, period_days: int) -> date:
    return max(habit.created_on, today - timedelta(days=period_days - 1))


def completion_counts(habit: Habit, today: date, period_days: int):
    """(выполнено, запланировано) за последние period_days дней включая today"""
    scheduled = 0
    completed = 0
    for day in scheduled_dates(habit.frequency, _period_start(habit, today, period_days), today):
        scheduled += 1
        if habit.is_completed_on(day):
            completed += 1
    return completed, scheduled


def completion_rate(habits: List[Habit], today: date, period_days: int = 7) -> int:
    """Процент выполнения (округлённый) по всем привычкам за период"""
    total_completed = 0
    total_scheduled = 0

    for habit in habits:
        completed, scheduled = completion_counts(habit, today, period_days)
        total_completed += completed
        total_scheduled += scheduled

    if total_scheduled == 0:
        return 0
    return round(total_completed / total_scheduled * 100)


def longest_current_streak(habits: List[Habit]) -> int:
    if not habits:
        return 0
    return max(habit.streak for habit in habits)


def average_streak(habits: List[Habit]) -> int:
    if not habits:
        return 0
    return round(sum(habit.streak for habit in habits) / len(habits))


def is_perfect_day(habits: List[Habit], day: date) -> bool:
    """Все привычки, запланированные на day, выполнены (и хотя бы одна запланирована)"""
    due = [habit for habit in habits if is_scheduled(habit.frequency, day)]
    return bool(due) and all(habit.is_completed_on(day) for habit in due)


def perfect_days(habits: List[Habit], today: date, days: int = 7) -> int:
    """Количество идеальных дней за последние days дней"""
    return sum(
        1 for offset in range(days)
        if is_perfect_day(habits, today - timedelta(days=offset))
    )


def habit_summary(habit: Habit, today: date, lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> Dict[str, Any]:
    """Сводка по одной привычке для отображения"""
    return {
        'id': habit.id,
        'name': habit.name,
        'category': habit.category,
        'streak': habit.streak,
        'longest_streak': longest_streak(habit, today, lookback_days),
        'completion_rate_week': completion_rate([habit], today, 7),
        'completion_rate_month': completion_rate([habit], today, 30),
        'goal_duration': habit.goal_duration,
        'goal_progress': round(habit.goal_progress, 1),
        'goal_completed': habit.goal_completed,
        'goal_completed_at': habit.goal_completed_at.isoformat() if habit.goal_completed_at else None,
    }


def overall_summary(habits: List[Habit], today: date) -> Dict[str, Any]:
    return {
        'habits_count': len(habits),
        'completion_rate_week': completion_rate(habits, today, 7),
        'completion_rate_month': completion_rate(habits, today, 30),
        'longest_streak': longest_current_streak(habits),
        'average_streak': average_streak(habits),
        'perfect_days_week': perfect_days(habits, today, 7),
        'goals_completed': sum(1 for habit in habits if habit.goal_completed),
    }
