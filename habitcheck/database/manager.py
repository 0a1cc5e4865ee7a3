# database/manager.py

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError as SchemaError

from habitcheck.core.exceptions import PersistenceError, HabitNotFoundError, ValidationError
from habitcheck.models.habit import Habit
from habitcheck.shared.schemas import HabitRecord

logger = logging.getLogger(__name__)


class HabitRepository(ABC):
    """Внешнее хранилище привычек"""

    @abstractmethod
    def load_habit(self, habit_id: str) -> Habit:
        pass

    @abstractmethod
    def save_habit(self, habit: Habit) -> None:
        pass

    @abstractmethod
    def delete_habit(self, habit_id: str) -> bool:
        pass

    @abstractmethod
    def list_habits(self) -> List[Habit]:
        pass

    def load_achievements(self) -> Dict[str, Any]:
        return {}

    def save_achievements(self, data: Dict[str, Any]) -> None:
        pass


class JsonHabitStore(HabitRepository):
    """Хранилище: один JSON-файл на привычку в data_dir"""

    ACHIEVEMENTS_FILE = "achievements.json"

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._lock = threading.RLock()

    def _habit_file(self, habit_id: str) -> Path:
        return self.data_dir / f"habit_{habit_id}.json"

    def _read_json(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Не удалось прочитать {path}: {e}") from e

    def _write_json(self, path: Path, data: Any) -> None:
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(exist_ok=True, parents=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp_path.replace(path)
        except OSError as e:
            raise PersistenceError(f"Не удалось записать {path}: {e}") from e

    def _parse(self, path: Path, data: Any) -> Habit:
        try:
            return HabitRecord.model_validate(data).to_habit()
        except (SchemaError, ValidationError) as e:
            raise PersistenceError(f"Повреждённая запись привычки {path.name}: {e}") from e

    # ===== HABITS =====

    def load_habit(self, habit_id: str) -> Habit:
        path = self._habit_file(habit_id)
        with self._lock:
            if not path.exists():
                raise HabitNotFoundError(habit_id)
            habit = self._parse(path, self._read_json(path))

        logger.debug(f"📂 Загружена привычка {habit_id}")
        return habit

    def save_habit(self, habit: Habit) -> None:
        with self._lock:
            self._write_json(self._habit_file(habit.id), habit.to_dict())
        logger.debug(f"💾 Привычка {habit.id} сохранена")

    def delete_habit(self, habit_id: str) -> bool:
        path = self._habit_file(habit_id)
        with self._lock:
            if not path.exists():
                return False
            try:
                path.unlink()
            except OSError as e:
                raise PersistenceError(f"Не удалось удалить {path}: {e}") from e

        logger.info(f"🗑️ Привычка {habit_id} удалена")
        return True

    def list_habits(self) -> List[Habit]:
        """Все читаемые привычки, упорядоченные по дате создания; повреждённые файлы пропускаются"""
        habits = []
        with self._lock:
            if not self.data_dir.exists():
                return []
            for path in sorted(self.data_dir.glob("habit_*.json")):
                try:
                    habits.append(self._parse(path, self._read_json(path)))
                except PersistenceError as e:
                    logger.error(f"❌ Пропущена запись {path.name}: {e}")

        habits.sort(key=lambda h: h.created_at)
        return habits

    # ===== ACHIEVEMENTS =====

    def load_achievements(self) -> Dict[str, Any]:
        path = self.data_dir / self.ACHIEVEMENTS_FILE
        with self._lock:
            if not path.exists():
                return {}
            return self._read_json(path)

    def save_achievements(self, data: Dict[str, Any]) -> None:
        with self._lock:
            self._write_json(self.data_dir / self.ACHIEVEMENTS_FILE, data)
