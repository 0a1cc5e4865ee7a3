from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict
from datetime import date, datetime

from habitcheck.models.enums import FrequencyType
from habitcheck.models.habit import Frequency, Habit, DEFAULT_GOAL_DURATION


# Схема сохранённой записи привычки
class FrequencyRecord(BaseModel):
    type: FrequencyType = FrequencyType.DAILY
    days: List[int] = []
    time: Optional[str] = None

    @field_validator('days')
    @classmethod
    def validate_days(cls, v):
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f'День недели должен быть от 0 до 6: {day}')
        return sorted(set(v))

    @field_validator('time')
    @classmethod
    def validate_time(cls, v):
        # В старых записях "без напоминания" хранилось как пустая строка
        return v or None


class HabitRecord(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    category: str = "other"
    description: Optional[str] = Field(None, max_length=500)
    frequency: FrequencyRecord = FrequencyRecord()
    completion_history: Dict[date, bool] = {}
    streak: int = Field(0, ge=0)
    goal_duration: int = Field(DEFAULT_GOAL_DURATION, ge=1)
    goal_completed: bool = False
    goal_completed_at: Optional[datetime] = None
    created_at: datetime

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Название привычки не может быть пустым')
        return v.strip()

    @field_validator('created_at')
    @classmethod
    def validate_created_at(cls, v):
        if v.tzinfo is None:
            raise ValueError('created_at должен содержать часовой пояс')
        return v

    def to_habit(self) -> Habit:
        return Habit(
            id=self.id,
            name=self.name,
            category=self.category or "other",
            description=self.description,
            frequency=Frequency(self.frequency.type, frozenset(self.frequency.days), self.frequency.time),
            completion_history={day.isoformat(): value for day, value in self.completion_history.items()},
            streak=self.streak,
            goal_duration=self.goal_duration,
            goal_completed=self.goal_completed,
            goal_completed_at=self.goal_completed_at,
            created_at=self.created_at,
        )
