# services/habit_service.py

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from habitcheck.core.achievements import AchievementManager
from habitcheck.core.calendar_grid import build_month_grid, grid_weeks
from habitcheck.core.clock import Clock
from habitcheck.core.exceptions import InvalidDateError, PersistenceError
from habitcheck.core.goals import evaluate_goal
from habitcheck.core.ledger import CompletionLedger
from habitcheck.core.stats import habit_summary, overall_summary
from habitcheck.core.streak import refresh_streak, DEFAULT_LOOKBACK_DAYS
from habitcheck.database.manager import HabitRepository
from habitcheck.models.calendar import DayCell
from habitcheck.models.habit import Frequency, Habit, DEFAULT_GOAL_DURATION

logger = logging.getLogger(__name__)


class HabitService:
    """
    Сервис привычек поверх журнала выполнения и внешнего хранилища

    Возможности:
    - Создание, загрузка и удаление привычек
    - Переключение отметок с пересчётом серии и цели
    - Сохранение после каждой мутации без отката при ошибке записи
    - Календарь месяца, статистика и достижения
    """

    def __init__(self, repository: HabitRepository, clock: Clock,
                 lookback_days: int = DEFAULT_LOOKBACK_DAYS,
                 default_goal_days: int = DEFAULT_GOAL_DURATION,
                 achievements: Optional[AchievementManager] = None):
        self.repository = repository
        self.clock = clock
        self.lookback_days = lookback_days
        self.default_goal_days = default_goal_days
        self.ledger = CompletionLedger(clock, lookback_days)

        # Кэш привычек и несохранённые изменения
        self.habits: Dict[str, Habit] = {}
        self.pending_saves: Set[str] = set()

        self.achievements = achievements or AchievementManager.from_dict(repository.load_achievements())

        logger.info("✅ HabitService инициализирован")

    # ===== ЗАГРУЗКА =====

    def _refresh(self, habit: Habit) -> Habit:
        """Привести streak и цель в соответствие с журналом на сегодня"""
        refresh_streak(habit, self.clock.today(), self.lookback_days)
        evaluate_goal(habit, self.clock.now())
        return habit

    def get_habit(self, habit_id: str) -> Habit:
        """Получить привычку по ID (из кэша или хранилища)"""
        habit = self.habits.get(habit_id)
        if habit is None:
            habit = self.repository.load_habit(habit_id)
            self.habits[habit_id] = habit
        return self._refresh(habit)

    def list_habits(self, category: Optional[str] = None) -> List[Habit]:
        """Все привычки, при необходимости отфильтрованные по категории"""
        for habit in self.repository.list_habits():
            # Кэш (в т.ч. несохранённые изменения) важнее версии из хранилища
            self.habits.setdefault(habit.id, habit)

        habits = sorted(self.habits.values(), key=lambda h: h.created_at)
        if category is not None:
            habits = [h for h in habits if h.category.lower() == category.lower()]
        return [self._refresh(h) for h in habits]

    # ===== СОЗДАНИЕ / УДАЛЕНИЕ =====

    def create_habit(self, name: str, frequency: Optional[Frequency] = None,
                     category: Optional[str] = None, description: Optional[str] = None,
                     goal_duration: Optional[int] = None) -> Habit:
        """Создать новую привычку"""
        habit = Habit.create(
            name=name,
            created_at=self.clock.now(),
            frequency=frequency,
            category=category,
            description=description,
            goal_duration=goal_duration or self.default_goal_days,
        )
        self.habits[habit.id] = habit

        logger.info(f"✅ Создана привычка {habit.id}: {habit.name}")

        self._persist(habit)
        self._check_achievements_after_save()
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        """Удалить привычку"""
        in_cache = self.habits.pop(habit_id, None) is not None
        self.pending_saves.discard(habit_id)

        try:
            deleted = self.repository.delete_habit(habit_id)
        except PersistenceError as e:
            logger.error(f"❌ Ошибка удаления привычки {habit_id}: {e}")
            raise

        return deleted or in_cache

    # ===== ОТМЕТКИ =====

    def toggle_date(self, habit_id: str, day: date, displayed_month: Optional[date] = None) -> Habit:
        """Переключить отметку на дату и сохранить"""
        habit = self.get_habit(habit_id)

        try:
            self.ledger.toggle(habit, day, displayed_month)
        except InvalidDateError as e:
            logger.warning(f"⚠️ Отметка отклонена для {habit_id}: {e}")
            raise

        logger.info(f"📅 {habit.name}: {day} -> {habit.completion_history[day.isoformat()]} (streak: {habit.streak})")

        self._persist(habit)
        self._check_achievements_after_save()
        return habit

    def mark_today(self, habit_id: str, completed: bool = True) -> Habit:
        """Отметить (или снять отметку) на сегодня"""
        habit = self.get_habit(habit_id)
        self.ledger.set(habit, self.clock.today(), completed)

        self._persist(habit)
        self._check_achievements_after_save()
        return habit

    def completion_range(self, habit_id: str, start: date, end: date) -> Iterable[Tuple[date, Optional[bool]]]:
        return self.ledger.range(self.get_habit(habit_id), start, end)

    # ===== СОХРАНЕНИЕ =====

    def _persist(self, habit: Habit) -> None:
        """Сохранить привычку; при ошибке состояние в памяти остаётся"""
        try:
            self.repository.save_habit(habit)
            self.pending_saves.discard(habit.id)
        except PersistenceError as e:
            self.pending_saves.add(habit.id)
            logger.error(f"❌ Ошибка сохранения привычки {habit.id}: {e}")
            raise

    def sync_pending(self) -> List[str]:
        """Повторить сохранение несинхронизированных привычек; вернуть сохранённые ID"""
        saved = []
        for habit_id in sorted(self.pending_saves):
            habit = self.habits.get(habit_id)
            if habit is None:
                self.pending_saves.discard(habit_id)
                continue
            try:
                self._persist(habit)
                saved.append(habit_id)
            except PersistenceError:
                continue

        if saved:
            logger.info(f"💾 Синхронизировано привычек: {len(saved)}")
        return saved

    # ===== КАЛЕНДАРЬ И СТАТИСТИКА =====

    def month_view(self, habit_id: str, reference: date) -> Dict[str, Any]:
        """Сетка месяца с отметками для отрисовки"""
        habit = self.get_habit(habit_id)
        cells: List[DayCell] = build_month_grid(reference, self.clock.today())

        return {
            'habit_id': habit.id,
            'month': reference.replace(day=1),
            'weeks': [
                [(cell, self.ledger.get(habit, cell.date)) for cell in week]
                for week in grid_weeks(cells)
            ],
        }

    def habit_stats(self, habit_id: str) -> Dict[str, Any]:
        return habit_summary(self.get_habit(habit_id), self.clock.today(), self.lookback_days)

    def overall_stats(self, category: Optional[str] = None) -> Dict[str, Any]:
        return overall_summary(self.list_habits(category), self.clock.today())

    def check_achievements(self) -> List[str]:
        """Пересчитать достижения; сохраняются только при новых разблокировках"""
        habits = self.list_habits()
        new_achievements = self.achievements.check(habits, self.clock.today(), self.clock.now())

        if new_achievements:
            try:
                self.repository.save_achievements(self.achievements.to_dict())
            except PersistenceError as e:
                logger.error(f"❌ Ошибка сохранения достижений: {e}")

        return new_achievements

    def _check_achievements_after_save(self) -> None:
        """Достижения после успешной записи: сбой чтения других привычек не отменяет мутацию"""
        try:
            self.check_achievements()
        except PersistenceError as e:
            logger.error(f"❌ Ошибка проверки достижений: {e}")


# ===== ГЛОБАЛЬНЫЙ ЭКЗЕМПЛЯР =====

_global_habit_service: Optional[HabitService] = None


def get_habit_service() -> HabitService:
    """Получить глобальный экземпляр HabitService"""
    if _global_habit_service is None:
        raise RuntimeError("HabitService не инициализирован, вызовите initialize_habit_service()")
    return _global_habit_service


def initialize_habit_service(repository: HabitRepository, clock: Clock, **kwargs) -> HabitService:
    """Инициализация глобального HabitService"""
    global _global_habit_service
    _global_habit_service = HabitService(repository, clock, **kwargs)
    return _global_habit_service
