# core/clock.py

"""
Источник "сегодня" и "сейчас" для движка.

Движок никогда не читает системное время напрямую: часы передаются
явно, чтобы расчёт серий был детерминированным.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Union

from habitcheck.utils.datetime_utils import DEFAULT_TZ, get_timezone, localize, now_in


class Clock(ABC):
    """Базовый класс часов"""

    @abstractmethod
    def now(self) -> datetime:
        """Текущий момент (aware datetime)"""
        pass

    def today(self) -> date:
        """Текущая календарная дата в поясе часов"""
        return self.now().date()


class SystemClock(Clock):
    """Системные часы в заданном часовом поясе (pytz)"""

    def __init__(self, timezone: Union[str, object] = DEFAULT_TZ):
        self.tz = get_timezone(timezone) if isinstance(timezone, str) else timezone

    def now(self) -> datetime:
        return now_in(self.tz)

    def __repr__(self) -> str:
        return f"SystemClock({self.tz.zone})"


class FixedClock(Clock):
    """Часы с фиксированным временем для тестов и воспроизводимых расчётов"""

    def __init__(self, moment: datetime, timezone: Union[str, object] = DEFAULT_TZ):
        self.tz = get_timezone(timezone) if isinstance(timezone, str) else timezone
        self.moment = localize(moment, self.tz)

    @classmethod
    def on(cls, day: date, hour: int = 12, minute: int = 0, timezone: Union[str, object] = DEFAULT_TZ) -> "FixedClock":
        return cls(datetime(day.year, day.month, day.day, hour, minute), timezone)

    def now(self) -> datetime:
        return self.moment

    def advance(self, days: int = 0, minutes: int = 0) -> datetime:
        self.moment = self.tz.normalize(self.moment + timedelta(days=days, minutes=minutes))
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = localize(moment, self.tz)

    def __repr__(self) -> str:
        return f"FixedClock({self.moment.isoformat()})"
