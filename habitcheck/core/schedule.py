# core/schedule.py

"""
Сопоставление расписания привычки с календарными датами.

Все функции чистые и тотальные: некорректное расписание отсекается
ещё при создании Frequency.
"""

from datetime import date, timedelta
from typing import Iterator, Optional

from habitcheck.models.enums import FrequencyType
from habitcheck.models.habit import Frequency
from habitcheck.utils.datetime_utils import sunday_weekday

ONE_DAY = timedelta(days=1)


def is_scheduled(frequency: Frequency, day: date) -> bool:
    """Является ли дата днём, когда привычку нужно выполнить"""
    if frequency.type is FrequencyType.DAILY:
        return True
    return sunday_weekday(day) in frequency.days


def has_schedule(frequency: Frequency) -> bool:
    """Есть ли у расписания хотя бы один день"""
    return frequency.type is FrequencyType.DAILY or bool(frequency.days)


def previous_scheduled_date(frequency: Frequency, day: date, floor: Optional[date] = None) -> Optional[date]:
    """Ближайшая запланированная дата <= day, но не раньше floor"""
    if not has_schedule(frequency):
        return None

    # Любой непустой набор дней недели встречается за 7 дней
    for offset in range(7):
        candidate = day - timedelta(days=offset)
        if floor is not None and candidate < floor:
            return None
        if is_scheduled(frequency, candidate):
            return candidate
    return None


def scheduled_dates(frequency: Frequency, start: date, end: date) -> Iterator[date]:
    """Запланированные даты в интервале [start, end] по возрастанию"""
    current = start
    while current <= end:
        if is_scheduled(frequency, current):
            yield current
        current += ONE_DAY
