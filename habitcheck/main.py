#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - CLI
Тонкий клиент командной строки: события (отметка даты, навигация по месяцам)
передаются в сервис, результат выводится как есть

Версия: 1.0.0
"""

import argparse
import logging
import sys
import time
from datetime import date, datetime
from typing import List, Optional

from habitcheck.config import get_config
from habitcheck.core.calendar_grid import WEEKDAY_HEADERS, shift_month
from habitcheck.core.exceptions import HabitError, InvalidDateError, PersistenceError, ValidationError
from habitcheck.models.enums import FrequencyType, Weekday
from habitcheck.models.habit import Frequency
from habitcheck.services import HabitReminderService, HabitService, create_services
from habitcheck.utils.datetime_utils import parse_date
from habitcheck.utils.logger import setup_logging

logger = logging.getLogger(__name__)

MARKS = {True: '✓', False: '✗', None: '·'}


# ===== РАЗБОР АРГУМЕНТОВ =====

def parse_weekdays(value: str) -> List[int]:
    """'mon,wed' или '1,3' -> [1, 3]"""
    days = []
    for part in value.split(','):
        part = part.strip().lower()
        if not part:
            continue
        if part.isdigit():
            days.append(int(part))
            continue
        matches = [d.value for d in Weekday if d.name.lower().startswith(part[:3])]
        if not matches:
            raise argparse.ArgumentTypeError(f"Неизвестный день недели: {part}")
        days.append(matches[0])
    return days


def parse_month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Месяц должен быть в формате YYYY-MM: {value}")


def parse_day(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Дата должна быть в формате YYYY-MM-DD: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='habitcheck', description='Трекер привычек и серий')
    parser.add_argument('--dev', action='store_true', help='Режим отладки (DEBUG логи)')
    sub = parser.add_subparsers(dest='command', required=True)

    create = sub.add_parser('create', help='Создать привычку')
    create.add_argument('name')
    create.add_argument('--category')
    create.add_argument('--description')
    create.add_argument('--frequency', choices=[f.value for f in FrequencyType], default=FrequencyType.DAILY.value)
    create.add_argument('--days', type=parse_weekdays, default=[], help='Дни недели: mon,wed или 1,3 (вс = 0)')
    create.add_argument('--time', help='Время напоминания HH:MM')
    create.add_argument('--goal', type=int, help='Цель в днях')

    list_cmd = sub.add_parser('list', help='Список привычек')
    list_cmd.add_argument('--category')

    toggle = sub.add_parser('toggle', help='Переключить отметку на дату')
    toggle.add_argument('habit_id')
    toggle.add_argument('date', type=parse_day)
    toggle.add_argument('--month', type=parse_month, help='Отображаемый месяц YYYY-MM (ограничивает дату)')

    done = sub.add_parser('done', help='Отметить выполнение сегодня')
    done.add_argument('habit_id')
    done.add_argument('--undo', action='store_true')

    cal = sub.add_parser('calendar', help='Календарь месяца')
    cal.add_argument('habit_id')
    cal.add_argument('--month', type=parse_month)
    cal.add_argument('--offset', type=int, default=0, help='Смещение в месяцах (-1 - предыдущий)')

    stats = sub.add_parser('stats', help='Статистика')
    stats.add_argument('habit_id', nargs='?')
    stats.add_argument('--category')

    sub.add_parser('achievements', help='Достижения')

    delete = sub.add_parser('delete', help='Удалить привычку')
    delete.add_argument('habit_id')

    sub.add_parser('remind', help='Запустить напоминания (Ctrl+C для выхода)')

    return parser


# ===== КОМАНДЫ =====

def make_frequency(args) -> Frequency:
    freq_type = FrequencyType(args.frequency)
    if freq_type is FrequencyType.DAILY:
        return Frequency.daily(args.time)
    return Frequency(freq_type, frozenset(args.days), args.time)


def print_calendar(service: HabitService, habit_id: str, reference: date) -> None:
    habit = service.get_habit(habit_id)
    view = service.month_view(habit_id, reference)

    print(f"{habit.name} - {view['month']:%B %Y}  (streak: {habit.streak})")
    print(' '.join(f"{h:>4}" for h in WEEKDAY_HEADERS))
    for week in view['weeks']:
        row = []
        for cell, completed in week:
            if not cell.is_current_month:
                row.append('    ')
                continue
            text = f"{cell.date.day}{MARKS[completed]}"
            row.append(f"[{text:>2}]" if cell.is_today else f"{text:>4}")
        print(' '.join(row))


def build_reminder_service(service: HabitService, config) -> HabitReminderService:
    """Напоминания читают привычки напрямую из хранилища, не трогая кэш сервиса"""
    return HabitReminderService(
        service.repository.list_habits,
        service.clock,
        notify=lambda habit: print(f"🔔 {habit.name}: {habit.description or 'Time to complete your habit!'}"),
        window_minutes=config.reminders.window_minutes,
        interval_seconds=config.reminders.check_interval_seconds,
    )


def run_command(service: HabitService, args) -> int:
    if args.command == 'create':
        habit = service.create_habit(
            args.name,
            frequency=make_frequency(args),
            category=args.category,
            description=args.description,
            goal_duration=args.goal,
        )
        print(habit.id)

    elif args.command == 'list':
        for habit in service.list_habits(args.category):
            goal = '🏆' if habit.goal_completed else f"{habit.streak}/{habit.goal_duration}"
            print(f"{habit.id}  {habit.name:<30} {habit.category:<12} 🔥 {habit.streak:<4} {goal}")

    elif args.command == 'toggle':
        habit = service.toggle_date(args.habit_id, args.date, args.month)
        print(f"{args.date}: {MARKS[service.ledger.get(habit, args.date)]}  streak: {habit.streak}")

    elif args.command == 'done':
        habit = service.mark_today(args.habit_id, completed=not args.undo)
        print(f"streak: {habit.streak}")

    elif args.command == 'calendar':
        reference = args.month or service.clock.today()
        print_calendar(service, args.habit_id, shift_month(reference, args.offset))

    elif args.command == 'stats':
        summary = service.habit_stats(args.habit_id) if args.habit_id else service.overall_stats(args.category)
        for key, value in summary.items():
            print(f"{key}: {value}")

    elif args.command == 'achievements':
        service.check_achievements()
        for definition, progress in service.achievements.summary():
            unlocked = progress is not None and progress.unlocked
            current = progress.progress if progress else 0
            print(f"{definition.icon} {definition.title:<22} {'✓' if unlocked else ' '} "
                  f"{min(current, definition.threshold)}/{definition.threshold}")

    elif args.command == 'delete':
        if not service.delete_habit(args.habit_id):
            print(f"Привычка {args.habit_id} не найдена", file=sys.stderr)
            return 1

    elif args.command == 'remind':
        config = get_config()
        if not config.reminders.enabled:
            print("Напоминания отключены (HABITCHECK_REMINDERS_ENABLED=false)", file=sys.stderr)
            return 1
        reminders = build_reminder_service(service, config)
        reminders.start()
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            reminders.stop()

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    setup_logging(config)
    if args.dev:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        service = create_services(config)
        return run_command(service, args)
    except InvalidDateError as e:
        print(f"⚠️ Дата отклонена: {e}", file=sys.stderr)
        return 2
    except PersistenceError as e:
        print(f"❌ Ошибка хранилища: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"❌ Некорректные данные: {e}", file=sys.stderr)
        return 1
    except HabitError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
