# core/calendar_grid.py

"""
Генерация календарной сетки месяца 6x7 (воскресенье - первый столбец).
"""

from datetime import date, timedelta
from typing import List, Optional

from habitcheck.models.calendar import DayCell
from habitcheck.utils.datetime_utils import add_months, days_in_month, first_of_month, sunday_weekday

GRID_ROWS = 6
GRID_COLUMNS = 7
GRID_SIZE = GRID_ROWS * GRID_COLUMNS

WEEKDAY_HEADERS = ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat')


def _cell(day: date, in_month: bool, today: Optional[date]) -> DayCell:
    return DayCell(
        date=day,
        is_current_month=in_month,
        is_today=day == today,
        is_selectable=in_month and today is not None and day <= today,
    )


def build_month_grid(reference: date, today: Optional[date] = None) -> List[DayCell]:
    """
    42 ячейки месяца, в котором лежит reference.

    Ведущие ячейки - хвост предыдущего месяца до столбца, соответствующего
    дню недели 1-го числа; затем все дни месяца; затем начало следующего.
    today влияет только на is_today/is_selectable.
    """
    first = first_of_month(reference)
    offset = sunday_weekday(first)
    month_length = days_in_month(first.year, first.month)
    trailing = GRID_SIZE - offset - month_length

    cells = []

    for i in range(offset, 0, -1):
        cells.append(_cell(first - timedelta(days=i), False, today))

    for i in range(month_length):
        cells.append(_cell(first + timedelta(days=i), True, today))

    next_first = add_months(first, 1)
    for i in range(trailing):
        cells.append(_cell(next_first + timedelta(days=i), False, today))

    return cells


def grid_weeks(cells: List[DayCell]) -> List[List[DayCell]]:
    """Разбить сетку на недели (строки по 7 ячеек)"""
    return [cells[i:i + GRID_COLUMNS] for i in range(0, len(cells), GRID_COLUMNS)]


def shift_month(reference: date, delta: int) -> date:
    """Первое число месяца для навигации назад/вперёд"""
    return add_months(reference, delta)
