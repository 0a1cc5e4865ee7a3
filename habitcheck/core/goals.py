# core/goals.py

from datetime import datetime
import logging

from habitcheck.models.habit import Habit

logger = logging.getLogger(__name__)


def evaluate_goal(habit: Habit, now: datetime) -> bool:
    """
    Отметить цель достигнутой, когда серия впервые дошла до goal_duration.

    Переход однонаправленный: последующее падение серии goal_completed
    не сбрасывает. Возвращает True только в момент перехода.
    """
    if habit.goal_completed:
        return False

    if habit.streak < habit.goal_duration:
        return False

    habit.goal_completed = True
    habit.goal_completed_at = now
    logger.info(f"🏆 Цель привычки {habit.id} достигнута: {habit.streak}/{habit.goal_duration} дней")
    return True
