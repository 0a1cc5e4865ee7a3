# core/exceptions.py

"""
Иерархия исключений движка привычек
"""


class HabitError(Exception):
    """Базовое исключение движка привычек"""
    pass


class ValidationError(HabitError):
    """Ошибка валидации данных при создании объекта"""
    pass


class FrequencyError(ValidationError):
    """Неизвестный или некорректный тип расписания"""
    pass


class InvalidDateError(HabitError):
    """Дата не может быть отмечена: в будущем или вне отображаемого месяца"""

    def __init__(self, day, reason: str):
        self.day = day
        self.reason = reason
        super().__init__(f"{day}: {reason}")


class PersistenceError(HabitError):
    """Ошибка загрузки/сохранения во внешнем хранилище"""
    pass


class HabitNotFoundError(PersistenceError):
    """Привычка с указанным ID не найдена"""

    def __init__(self, habit_id: str):
        self.habit_id = habit_id
        super().__init__(f"Привычка {habit_id} не найдена")
