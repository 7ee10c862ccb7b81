"""Схемы Pydantic для модели CompletionRecord."""

from datetime import date, datetime

from pydantic import Field

from .base_schema import StorageSchema


class CompletionSchemaCreate(StorageSchema):
    """Схема для создания отметки выполнения."""

    habit_id: int = Field(..., description="ID привычки")
    user_id: int = Field(..., description="ID пользователя")
    timestamp: datetime = Field(..., description="Момент выполнения (UTC)")
    completed_on: date = Field(..., description="День выполнения (UTC)")


class CompletionSchemaRead(CompletionSchemaCreate):
    """Схема для чтения отметки выполнения."""

    id: int
    created_at: datetime
