#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - Habit Models
Модели привычки и расписания с валидацией

Версия: 1.0.0
"""

import uuid
from datetime import datetime, date
from typing import Dict, FrozenSet, Iterable, Optional, Any
from dataclasses import dataclass, field
import logging
import re

from habitcheck.core.exceptions import ValidationError, FrequencyError
from habitcheck.models.enums import FrequencyType, HabitCategory
from habitcheck.utils.datetime_utils import format_date

logger = logging.getLogger(__name__)

DEFAULT_GOAL_DURATION = 7
REMINDER_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# ===== VALIDATION HELPERS =====

def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} должен содержать минимум {min_length} символов")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} должен содержать максимум {max_length} символов")

    return text


def validate_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} должен быть положительным целым числом")
    return value

# ===== FREQUENCY =====

@dataclass(frozen=True)
class Frequency:
    """Расписание привычки: ежедневно или по дням недели (воскресенье = 0)"""
    type: FrequencyType = FrequencyType.DAILY
    days: FrozenSet[int] = frozenset()
    time: Optional[str] = None  # HH:MM для напоминаний

    def __post_init__(self):
        if not isinstance(self.type, FrequencyType):
            raise FrequencyError(f"Неизвестный тип расписания: {self.type!r}")

        for day in self.days:
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                raise FrequencyError(f"День недели должен быть от 0 до 6, получено: {day!r}")

        if self.time is not None and not REMINDER_TIME_RE.match(self.time):
            raise ValidationError(f"Время напоминания должно быть в формате HH:MM: {self.time!r}")

    @classmethod
    def daily(cls, time: Optional[str] = None) -> "Frequency":
        return cls(FrequencyType.DAILY, frozenset(), time)

    @classmethod
    def weekly(cls, days: Iterable[int], time: Optional[str] = None) -> "Frequency":
        return cls(FrequencyType.WEEKLY, frozenset(days), time)

    @classmethod
    def custom(cls, days: Iterable[int], time: Optional[str] = None) -> "Frequency":
        return cls(FrequencyType.CUSTOM, frozenset(days), time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'days': sorted(self.days),
            'time': self.time,
        }

# ===== HABIT =====

@dataclass
class Habit:
    """Привычка с журналом выполнения и производными полями серии и цели"""
    id: str
    name: str
    created_at: datetime
    category: str = HabitCategory.OTHER.value
    description: Optional[str] = None
    frequency: Frequency = field(default_factory=Frequency.daily)
    completion_history: Dict[str, bool] = field(default_factory=dict)
    streak: int = 0
    goal_duration: int = DEFAULT_GOAL_DURATION
    goal_completed: bool = False
    goal_completed_at: Optional[datetime] = None

    def __post_init__(self):
        """Валидация после создания объекта"""
        self.name = validate_text(self.name, min_length=1, max_length=100, field_name="name")
        self.category = validate_text(self.category or HabitCategory.OTHER.value,
                                      min_length=1, max_length=50, field_name="category")

        if self.description is not None:
            self.description = validate_text(self.description, min_length=0, max_length=500,
                                             field_name="description")

        if not isinstance(self.frequency, Frequency):
            raise FrequencyError(f"frequency должен быть Frequency, получено: {type(self.frequency).__name__}")

        self.goal_duration = validate_positive_int(self.goal_duration, "goal_duration")

        if not isinstance(self.streak, int) or self.streak < 0:
            raise ValidationError("streak должен быть неотрицательным числом")

        if self.created_at.tzinfo is None:
            raise ValidationError("created_at должен содержать часовой пояс")

    # ===== PROPERTIES =====

    @property
    def created_on(self) -> date:
        """Календарная дата создания (в поясе, в котором она записана)"""
        return self.created_at.date()

    @property
    def goal_progress(self) -> float:
        """Прогресс к цели в процентах"""
        if self.goal_completed:
            return 100.0
        return min(100.0, self.streak / self.goal_duration * 100)

    def is_completed_on(self, day: date) -> bool:
        return self.completion_history.get(format_date(day)) is True

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'description': self.description,
            'frequency': self.frequency.to_dict(),
            'completion_history': dict(sorted(self.completion_history.items())),
            'streak': self.streak,
            'goal_duration': self.goal_duration,
            'goal_completed': self.goal_completed,
            'goal_completed_at': self.goal_completed_at.isoformat() if self.goal_completed_at else None,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def create(cls, name: str, created_at: datetime, frequency: Optional[Frequency] = None,
               category: Optional[str] = None, description: Optional[str] = None,
               goal_duration: int = DEFAULT_GOAL_DURATION) -> "Habit":
        """Создание новой привычки с пустым журналом"""
        return cls(
            id=uuid.uuid4().hex,
            name=name,
            created_at=created_at,
            category=category or HabitCategory.OTHER.value,
            description=description,
            frequency=frequency or Frequency.daily(),
            goal_duration=goal_duration,
        )
