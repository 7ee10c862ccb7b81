from .base import Base, metadata_obj
from .completion_record import CompletionRecord
from .habit import Habit
from .user import User

__all__ = [
    "metadata_obj",
    "Base",
    "User",
    "Habit",
    "CompletionRecord",
]
