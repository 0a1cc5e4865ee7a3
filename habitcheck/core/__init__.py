# core/__init__.py

"""
Ядро движка: расписание, журнал выполнения, серии, цели и календарная сетка.

Подмодули импортируются напрямую (habitcheck.core.streak и т.д.),
здесь экспортируется только иерархия исключений.
"""

from .exceptions import (
    HabitError,
    ValidationError,
    FrequencyError,
    InvalidDateError,
    PersistenceError,
    HabitNotFoundError
)

__all__ = [
    'HabitError',
    'ValidationError',
    'FrequencyError',
    'InvalidDateError',
    'PersistenceError',
    'HabitNotFoundError'
]
