#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

from habitcheck.core.streak import DEFAULT_LOOKBACK_DAYS
from habitcheck.models.habit import DEFAULT_GOAL_DURATION


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Конфигурация хранилища привычек"""
    data_dir: Path
    habits_dir: Path


@dataclass
class EngineConfig:
    """Параметры движка серий"""
    timezone: str = "UTC"
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    default_goal_days: int = DEFAULT_GOAL_DURATION


@dataclass
class ReminderConfig:
    """Конфигурация напоминаний"""
    enabled: bool = True
    window_minutes: int = 5
    check_interval_seconds: int = 60


class HabitCheckConfig:
    """Главный класс конфигурации"""

    def __init__(self, env: Optional[Dict[str, str]] = None):
        self._env = os.environ if env is None else env
        self.environment = Environment(self._get_env('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _get_env(self, key: str, default: Any = None) -> Any:
        return self._env.get(f'HABITCHECK_{key}', default)

    def _get_bool(self, key: str, default: str) -> bool:
        return str(self._get_env(key, default)).lower() == 'true'

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        data_dir = Path(self._get_env('DATA_DIR', 'data'))
        self.storage = StorageConfig(
            data_dir=data_dir,
            habits_dir=data_dir / "habits"
        )
        self.log_dir = Path(self._get_env('LOG_DIR', 'logs'))

        # Движок
        self.engine = EngineConfig(
            timezone=self._get_env('TIMEZONE', 'UTC'),
            lookback_days=int(self._get_env('LOOKBACK_DAYS', DEFAULT_LOOKBACK_DAYS)),
            default_goal_days=int(self._get_env('DEFAULT_GOAL_DAYS', DEFAULT_GOAL_DURATION))
        )

        # Напоминания
        self.reminders = ReminderConfig(
            enabled=self._get_bool('REMINDERS_ENABLED', 'true'),
            window_minutes=int(self._get_env('REMINDER_WINDOW', 5)),
            check_interval_seconds=int(self._get_env('REMINDER_INTERVAL', 60))
        )

        # Логирование
        self.log_level = LogLevel(str(self._get_env('LOG_LEVEL', 'INFO')).upper())
        self.log_to_file = self._get_bool('LOG_TO_FILE', 'false')
        self.log_format = self._get_env(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.engine.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестный часовой пояс: {self.engine.timezone}")

        if self.engine.lookback_days <= 0:
            errors.append("LOOKBACK_DAYS должен быть положительным числом")

        if self.engine.default_goal_days <= 0:
            errors.append("DEFAULT_GOAL_DAYS должен быть положительным числом")

        if not 1 <= self.reminders.window_minutes <= 60:
            errors.append(f"REMINDER_WINDOW {self.reminders.window_minutes} вне диапазона (1-60)")

        if self.reminders.check_interval_seconds <= 0:
            errors.append("REMINDER_INTERVAL должен быть положительным числом")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.storage.data_dir, self.storage.habits_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования для logging.config.dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stderr
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"habitcheck_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config


# ===== ГЛОБАЛЬНЫЙ ЭКЗЕМПЛЯР =====

_global_config: Optional[HabitCheckConfig] = None


def get_config() -> HabitCheckConfig:
    """Получить глобальный экземпляр конфигурации"""
    global _global_config
    if _global_config is None:
        _global_config = HabitCheckConfig()
    return _global_config


def reload_config(env: Optional[Dict[str, str]] = None) -> HabitCheckConfig:
    """Перечитать конфигурацию (например, после изменения окружения)"""
    global _global_config
    _global_config = HabitCheckConfig(env)
    return _global_config


__all__ = [
    'HabitCheckConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'EngineConfig',
    'ReminderConfig',
    'get_config',
    'reload_config'
]
