from .gateway import HabitStorage, SqlAlchemyHabitStorage, habit_name_key

__all__ = [
    "HabitStorage",
    "SqlAlchemyHabitStorage",
    "habit_name_key",
]
