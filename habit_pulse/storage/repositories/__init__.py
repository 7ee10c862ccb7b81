"""Инициализация модуля репозиториев."""

from .base_repository import BaseRepository
from .completion_repository import CompletionRepository
from .habit_repository import HabitRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "HabitRepository",
    "CompletionRepository",
]
