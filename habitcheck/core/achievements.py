#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - Achievement System
Достижения за привычки с прогрессом и однократной разблокировкой

Версия: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from habitcheck.core.stats import longest_current_streak, perfect_days
from habitcheck.models.habit import Habit

logger = logging.getLogger(__name__)

# ===== DATA CLASSES =====

@dataclass
class AchievementDefinition:
    """Определение достижения"""
    achievement_id: str
    title: str
    description: str
    icon: str
    threshold: int = 1


@dataclass
class AchievementProgress:
    """Прогресс выполнения достижения"""
    achievement_id: str
    progress: int = 0
    threshold: int = 1
    unlocked: bool = False
    unlocked_at: Optional[datetime] = None

    @property
    def progress_percentage(self) -> float:
        if self.threshold == 0:
            return 100.0
        return min(100.0, self.progress / self.threshold * 100)

    def update(self, value: int, now: datetime) -> bool:
        """Обновить прогресс; True если достижение разблокировано сейчас"""
        self.progress = max(0, value)

        if not self.unlocked and self.progress >= self.threshold:
            self.unlocked = True
            self.unlocked_at = now
            return True

        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'achievement_id': self.achievement_id,
            'progress': self.progress,
            'threshold': self.threshold,
            'unlocked': self.unlocked,
            'unlocked_at': self.unlocked_at.isoformat() if self.unlocked_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AchievementProgress":
        unlocked_at = data.get('unlocked_at')
        return cls(
            achievement_id=data['achievement_id'],
            progress=data.get('progress', 0),
            threshold=data.get('threshold', 1),
            unlocked=bool(data.get('unlocked', False)),
            unlocked_at=datetime.fromisoformat(unlocked_at) if unlocked_at else None,
        )

# ===== ACHIEVEMENT CHECKERS =====

class AchievementChecker(ABC):
    """Базовый класс для подсчёта прогресса достижения"""

    @abstractmethod
    def get_progress(self, habits: List[Habit], today: date) -> int:
        pass


class HabitCountChecker(AchievementChecker):
    """Количество отслеживаемых привычек"""

    def get_progress(self, habits: List[Habit], today: date) -> int:
        return len(habits)


class StreakChecker(AchievementChecker):
    """Лучшая текущая серия среди привычек"""

    def get_progress(self, habits: List[Habit], today: date) -> int:
        return longest_current_streak(habits)


class PerfectDaysChecker(AchievementChecker):
    """Идеальные дни за последние window дней"""

    def __init__(self, window: int = 7):
        self.window = window

    def get_progress(self, habits: List[Habit], today: date) -> int:
        return perfect_days(habits, today, self.window)

# ===== ACHIEVEMENT REGISTRY =====

class AchievementRegistry:
    """Реестр достижений"""

    def __init__(self):
        self.achievements: Dict[str, AchievementDefinition] = {}
        self.checkers: Dict[str, AchievementChecker] = {}
        self._load_default_achievements()

    def register_achievement(self, definition: AchievementDefinition, checker: AchievementChecker) -> None:
        self.achievements[definition.achievement_id] = definition
        self.checkers[definition.achievement_id] = checker
        logger.debug(f"Registered achievement: {definition.achievement_id}")

    def get_achievement(self, achievement_id: str) -> Optional[AchievementDefinition]:
        return self.achievements.get(achievement_id)

    def get_checker(self, achievement_id: str) -> Optional[AchievementChecker]:
        return self.checkers.get(achievement_id)

    def get_all_achievements(self) -> List[AchievementDefinition]:
        return list(self.achievements.values())

    def _load_default_achievements(self):
        """Загрузка стандартных достижений"""
        self.register_achievement(
            AchievementDefinition("first-habit", "Getting Started",
                                  "Create your first habit", "🌱", threshold=1),
            HabitCountChecker()
        )
        self.register_achievement(
            AchievementDefinition("three-day-streak", "Building Momentum",
                                  "Maintain a 3-day streak on any habit", "🔥", threshold=3),
            StreakChecker()
        )
        self.register_achievement(
            AchievementDefinition("seven-day-streak", "Consistency Champion",
                                  "Maintain a 7-day streak on any habit", "🏆", threshold=7),
            StreakChecker()
        )
        self.register_achievement(
            AchievementDefinition("five-habits", "Habit Collector",
                                  "Track 5 different habits", "🌟", threshold=5),
            HabitCountChecker()
        )
        self.register_achievement(
            AchievementDefinition("perfect-week", "Perfect Week",
                                  "Complete all habits for 7 days straight", "🎯", threshold=7),
            PerfectDaysChecker(window=7)
        )

# ===== ACHIEVEMENT MANAGER =====

class AchievementManager:
    """Менеджер достижений: хранит прогресс и сообщает о новых разблокировках"""

    def __init__(self, registry: Optional[AchievementRegistry] = None,
                 progress: Optional[Dict[str, AchievementProgress]] = None):
        self.registry = registry or AchievementRegistry()
        self.progress: Dict[str, AchievementProgress] = progress or {}
        self.notification_callbacks: List[Callable[[AchievementDefinition], None]] = []

    def add_notification_callback(self, callback: Callable[[AchievementDefinition], None]) -> None:
        self.notification_callbacks.append(callback)

    def check(self, habits: List[Habit], today: date, now: datetime) -> List[str]:
        """Пересчитать прогресс, вернуть ID впервые разблокированных достижений"""
        new_achievements = []

        for achievement_id, definition in self.registry.achievements.items():
            checker = self.registry.get_checker(achievement_id)
            if checker is None:
                continue

            progress = self.progress.setdefault(
                achievement_id,
                AchievementProgress(achievement_id=achievement_id, threshold=definition.threshold)
            )

            if progress.update(checker.get_progress(habits, today), now):
                new_achievements.append(achievement_id)
                logger.info(f"🏆 Получено достижение: {achievement_id}")
                self._notify(definition)

        return new_achievements

    def _notify(self, definition: AchievementDefinition) -> None:
        for callback in self.notification_callbacks:
            try:
                callback(definition)
            except Exception as e:
                logger.error(f"❌ Ошибка уведомления о достижении {definition.achievement_id}: {e}")

    def get_progress(self, achievement_id: str) -> Optional[AchievementProgress]:
        return self.progress.get(achievement_id)

    def unlocked(self) -> List[str]:
        return [a_id for a_id, p in self.progress.items() if p.unlocked]

    def summary(self) -> List[Tuple[AchievementDefinition, Optional[AchievementProgress]]]:
        return [(d, self.progress.get(d.achievement_id)) for d in self.registry.get_all_achievements()]

    def to_dict(self) -> Dict[str, Any]:
        return {a_id: p.to_dict() for a_id, p in self.progress.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AchievementManager":
        return cls(progress={a_id: AchievementProgress.from_dict(p) for a_id, p in (data or {}).items()})
