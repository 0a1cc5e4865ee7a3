from datetime import date, datetime
from typing import Union
import calendar

import pytz

DEFAULT_TZ = pytz.timezone("UTC")
ISO_DATE_FMT = "%Y-%m-%d"


def get_timezone(name: str):
    return pytz.timezone(name)


def now_in(tz) -> datetime:
    return datetime.now(tz)


def localize(dt: datetime, tz) -> datetime:
    """Naive datetime -> aware datetime в указанной зоне"""
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def format_date(day: date, fmt: str = ISO_DATE_FMT) -> str:
    return day.strftime(fmt)


def parse_date(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, ISO_DATE_FMT).date()


def sunday_weekday(day: date) -> int:
    """Номер дня недели с воскресеньем = 0"""
    return day.isoweekday() % 7


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> date:
    """Первое число месяца, смещённого на months"""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month
