#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - Streak Calculator
Подсчёт текущей и самой длинной серии выполнения привычки

Версия: 1.0.0
"""

from datetime import date, timedelta
import logging

from habitcheck.core.schedule import is_scheduled, has_schedule, scheduled_dates, ONE_DAY
from habitcheck.models.habit import Habit
from habitcheck.utils.datetime_utils import format_date

logger = logging.getLogger(__name__)

# Ограничение обхода назад: не больше стольких дней, включая today
DEFAULT_LOOKBACK_DAYS = 3650


def _walk_floor(habit: Habit, today: date, lookback_days: int) -> date:
    """Самая ранняя дата, которую может учитывать серия"""
    return max(habit.created_on, today - timedelta(days=lookback_days - 1))


def compute_streak(habit: Habit, today: date, lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> int:
    """
    Текущая серия: обход назад от today по запланированным дням.

    Незапланированные дни пропускаются и серию не прерывают, поэтому
    обход фактически начинается с ближайшего запланированного дня <= today.
    Первый запланированный день без отметки True останавливает обход.
    """
    if not has_schedule(habit.frequency):
        return 0

    history = habit.completion_history
    floor = _walk_floor(habit, today, lookback_days)

    streak = 0
    current = today
    while current >= floor:
        if is_scheduled(habit.frequency, current):
            if history.get(format_date(current)) is not True:
                break
            streak += 1
        current -= ONE_DAY

    return streak


def longest_streak(habit: Habit, today: date, lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> int:
    """Самая длинная серия подряд выполненных запланированных дней"""
    if not has_schedule(habit.frequency):
        return 0

    history = habit.completion_history
    max_streak = 0
    current_streak = 0

    for day in scheduled_dates(habit.frequency, _walk_floor(habit, today, lookback_days), today):
        if history.get(format_date(day)) is True:
            current_streak += 1
            max_streak = max(max_streak, current_streak)
        else:
            current_streak = 0

    return max_streak


def refresh_streak(habit: Habit, today: date, lookback_days: int = DEFAULT_LOOKBACK_DAYS) -> int:
    """Пересчитать habit.streak по журналу"""
    old_streak = habit.streak
    habit.streak = compute_streak(habit, today, lookback_days)

    if habit.streak != old_streak:
        logger.debug(f"🔥 Серия привычки {habit.id}: {old_streak} -> {habit.streak}")

    return habit.streak
