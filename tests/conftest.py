from datetime import date, datetime
from typing import Dict, List

import pytest
import pytz

from habitcheck.core.clock import FixedClock
from habitcheck.core.exceptions import HabitNotFoundError, PersistenceError
from habitcheck.database.manager import HabitRepository
from habitcheck.models.habit import Frequency, Habit
from habitcheck.shared.schemas import HabitRecord


# 2024-01-01 - понедельник
MONDAY = date(2024, 1, 8)


@pytest.fixture
def clock():
    return FixedClock.on(MONDAY)


@pytest.fixture
def make_habit():
    def _make(name="Read", frequency=None, created=date(2023, 12, 1), history=None, goal_duration=7, **kwargs):
        habit = Habit.create(
            name=name,
            created_at=datetime(created.year, created.month, created.day, 8, 0, tzinfo=pytz.utc),
            frequency=frequency or Frequency.daily(),
            goal_duration=goal_duration,
            **kwargs
        )
        for day, value in (history or {}).items():
            habit.completion_history[day.isoformat()] = value
        return habit

    return _make


class MemoryRepository(HabitRepository):
    """Хранилище в памяти с управляемыми сбоями записи"""

    def __init__(self):
        self.records: Dict[str, dict] = {}
        self.achievements: dict = {}
        self.fail_saves = False
        self.save_calls = 0

    def load_habit(self, habit_id: str) -> Habit:
        if habit_id not in self.records:
            raise HabitNotFoundError(habit_id)
        return HabitRecord.model_validate(self.records[habit_id]).to_habit()

    def save_habit(self, habit: Habit) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise PersistenceError("диск недоступен")
        self.records[habit.id] = habit.to_dict()

    def delete_habit(self, habit_id: str) -> bool:
        return self.records.pop(habit_id, None) is not None

    def list_habits(self) -> List[Habit]:
        habits = [HabitRecord.model_validate(data).to_habit() for data in self.records.values()]
        return sorted(habits, key=lambda h: h.created_at)

    def load_achievements(self):
        return dict(self.achievements)

    def save_achievements(self, data) -> None:
        self.achievements = data


@pytest.fixture
def memory_repository():
    return MemoryRepository()
