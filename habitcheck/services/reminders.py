"""
Сервис напоминаний о привычках
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Set, Tuple

from apscheduler.schedulers.background import BackgroundScheduler

from habitcheck.core.clock import Clock
from habitcheck.core.schedule import is_scheduled
from habitcheck.models.habit import Habit

logger = logging.getLogger(__name__)


def is_reminder_due(habit: Habit, now: datetime, window_minutes: int = 5) -> bool:
    """Пора ли напомнить о привычке в момент now"""
    if not habit.frequency.time:
        return False

    today = now.date()
    if habit.is_completed_on(today):
        return False

    hours, minutes = (int(part) for part in habit.frequency.time.split(':'))
    if now.hour != hours or abs(now.minute - minutes) >= window_minutes:
        return False

    return is_scheduled(habit.frequency, today)


def due_reminders(habits: List[Habit], now: datetime, window_minutes: int = 5) -> List[Habit]:
    return [habit for habit in habits if is_reminder_due(habit, now, window_minutes)]


class HabitReminderService:
    """Периодическая проверка напоминаний на фоновом планировщике"""

    JOB_ID = 'habit_reminders'

    def __init__(self, get_habits: Callable[[], List[Habit]], clock: Clock,
                 notify: Callable[[Habit], None], window_minutes: int = 5,
                 interval_seconds: int = 60):
        self.get_habits = get_habits
        self.clock = clock
        self.notify = notify
        self.window_minutes = window_minutes
        self.interval_seconds = interval_seconds
        self.scheduler: Optional[BackgroundScheduler] = None

        # (habit_id, дата) - не напоминать дважды за день
        self._notified: Set[Tuple[str, str]] = set()

    def check(self) -> List[Habit]:
        """Найти привычки, о которых пора напомнить, и отправить уведомления"""
        now = self.clock.now()
        today_key = now.date().isoformat()
        sent = []

        try:
            habits = self.get_habits()
        except Exception as e:
            logger.error(f"❌ Ошибка получения привычек для напоминаний: {e}")
            return sent

        for habit in due_reminders(habits, now, self.window_minutes):
            tag = (habit.id, today_key)
            if tag in self._notified:
                continue

            try:
                self.notify(habit)
            except Exception as e:
                logger.error(f"❌ Ошибка отправки напоминания для {habit.id}: {e}")
                continue

            self._notified.add(tag)
            sent.append(habit)
            logger.info(f"🔔 Напоминание: {habit.name}")

        # Старые метки больше не нужны
        self._notified = {tag for tag in self._notified if tag[1] == today_key}
        return sent

    def start(self) -> None:
        """Запустить проверку сразу и затем каждые interval_seconds"""
        if self.scheduler is not None:
            return

        self.check()

        self.scheduler = BackgroundScheduler()
        self.scheduler.add_job(
            self.check,
            'interval',
            seconds=self.interval_seconds,
            id=self.JOB_ID,
            replace_existing=True
        )
        self.scheduler.start()
        logger.info("📅 Сервис напоминаний запущен")

    def stop(self) -> None:
        if self.scheduler is None:
            return
        self.scheduler.shutdown(wait=False)
        self.scheduler = None
        logger.info("📅 Сервис напоминаний остановлен")

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running
