#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - Completion Ledger
Журнал выполнения привычки: переключение, чтение и обход дат

Версия: 1.0.0
"""

from datetime import date
from typing import Iterator, Optional, Tuple
import logging

from habitcheck.core.clock import Clock
from habitcheck.core.exceptions import InvalidDateError
from habitcheck.core.goals import evaluate_goal
from habitcheck.core.schedule import ONE_DAY
from habitcheck.core.streak import refresh_streak, DEFAULT_LOOKBACK_DAYS
from habitcheck.models.habit import Habit
from habitcheck.utils.datetime_utils import format_date, same_month

logger = logging.getLogger(__name__)


class LedgerRange:
    """Диапазон дат журнала; каждая итерация начинается заново"""

    def __init__(self, habit: Habit, start: date, end: date):
        self.habit = habit
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[Tuple[date, Optional[bool]]]:
        history = self.habit.completion_history
        current = self.start
        while current <= self.end:
            yield current, history.get(format_date(current))
            current += ONE_DAY


class CompletionLedger:
    """
    Операции над completion_history привычки.

    Каждая успешная мутация синхронно пересчитывает серию и проверяет цель,
    так что streak и goal_completed всегда соответствуют журналу.
    """

    def __init__(self, clock: Clock, lookback_days: int = DEFAULT_LOOKBACK_DAYS):
        self.clock = clock
        self.lookback_days = lookback_days

    # ===== ЧТЕНИЕ =====

    def get(self, habit: Habit, day: date) -> Optional[bool]:
        """Отметка на дату; None - дата не записана"""
        return habit.completion_history.get(format_date(day))

    def range(self, habit: Habit, start: date, end: date) -> "LedgerRange":
        """Даты [start, end] по возрастанию с отметками (лениво, повторно итерируемо)"""
        return LedgerRange(habit, start, end)

    # ===== ИЗМЕНЕНИЕ =====

    def toggle(self, habit: Habit, day: date, displayed_month: Optional[date] = None) -> Habit:
        """
        Переключить отметку: нет записи -> True, True -> False, False -> True.

        displayed_month - месяц, показанный в календаре; None снимает
        ограничение для вызовов вне календаря.
        """
        self._check_date(day, displayed_month)

        key = format_date(day)
        new_value = not habit.completion_history.get(key, False)
        return self._apply(habit, key, new_value)

    def set(self, habit: Habit, day: date, completed: bool, displayed_month: Optional[date] = None) -> Habit:
        """Явно установить отметку на дату (идемпотентно)"""
        self._check_date(day, displayed_month)
        return self._apply(habit, format_date(day), bool(completed))

    def _check_date(self, day: date, displayed_month: Optional[date]) -> None:
        today = self.clock.today()
        if day > today:
            raise InvalidDateError(day, f"дата в будущем (сегодня {today})")

        if displayed_month is not None and not same_month(day, displayed_month):
            raise InvalidDateError(day, f"дата вне отображаемого месяца {displayed_month:%Y-%m}")

    def _apply(self, habit: Habit, key: str, value: bool) -> Habit:
        habit.completion_history[key] = value

        refresh_streak(habit, self.clock.today(), self.lookback_days)
        evaluate_goal(habit, self.clock.now())

        logger.debug(f"📅 Привычка {habit.id}: {key} = {value}, streak: {habit.streak}")
        return habit
