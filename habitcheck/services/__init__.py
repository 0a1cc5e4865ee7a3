# services/__init__.py

"""
Сервисы HabitCheck: работа с привычками и напоминания.
"""

import logging
from typing import Optional

from habitcheck.config import HabitCheckConfig
from habitcheck.core.clock import Clock, SystemClock
from habitcheck.database.manager import JsonHabitStore

from .habit_service import HabitService, get_habit_service, initialize_habit_service
from .reminders import HabitReminderService, due_reminders, is_reminder_due

logger = logging.getLogger(__name__)


def create_services(config: HabitCheckConfig, clock: Optional[Clock] = None) -> HabitService:
    """Собрать HabitService по конфигурации: JSON-хранилище и часы в настроенном поясе"""
    config.ensure_directories()
    store = JsonHabitStore(config.storage.habits_dir)
    clock = clock or SystemClock(config.engine.timezone)

    logger.info(f"🔧 Хранилище: {store.data_dir}, часовой пояс: {config.engine.timezone}")

    return initialize_habit_service(
        store,
        clock,
        lookback_days=config.engine.lookback_days,
        default_goal_days=config.engine.default_goal_days,
    )


__all__ = [
    'HabitService',
    'HabitReminderService',
    'create_services',
    'due_reminders',
    'get_habit_service',
    'initialize_habit_service',
    'is_reminder_due'
]
