from .manager import HabitRepository, JsonHabitStore

__all__ = ['HabitRepository', 'JsonHabitStore']
