#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - Models Package
Модели данных и перечисления
"""

from .enums import (
    FrequencyType,
    HabitCategory,
    Weekday
)

from .habit import (
    Frequency,
    Habit,
    DEFAULT_GOAL_DURATION
)

from .calendar import DayCell

__all__ = [
    # Enums
    'FrequencyType',
    'HabitCategory',
    'Weekday',

    # Habit models
    'Frequency',
    'Habit',
    'DEFAULT_GOAL_DURATION',

    # Calendar models
    'DayCell'
]
