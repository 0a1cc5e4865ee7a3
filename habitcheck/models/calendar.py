# models/calendar.py

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DayCell:
    """Ячейка календарной сетки (не сохраняется)"""
    date: date
    is_current_month: bool
    is_today: bool = False
    is_selectable: bool = False  # в текущем месяце и не в будущем
