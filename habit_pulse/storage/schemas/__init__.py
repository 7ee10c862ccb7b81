from .base_schema import StorageSchema
from .completion_schema import CompletionSchemaCreate, CompletionSchemaRead
from .habit_schema import HabitSchemaCreate, HabitSchemaRead, HabitSchemaUpdate
from .user_schema import UserSchemaCreate, UserSchemaRead

__all__ = [
    "StorageSchema",
    "UserSchemaCreate",
    "UserSchemaRead",
    "HabitSchemaCreate",
    "HabitSchemaUpdate",
    "HabitSchemaRead",
    "CompletionSchemaCreate",
    "CompletionSchemaRead",
]
