"""Схемы Pydantic для модели Habit."""

from datetime import datetime

from pydantic import Field

from .base_schema import StorageSchema


class HabitSchemaCreate(StorageSchema):
    """Схема для создания привычки. Название уже нормализовано вызывающей стороной."""

    user_id: int = Field(..., description="ID владельца")
    name: str = Field(..., min_length=1, max_length=255, description="Название привычки")
    name_key: str = Field(..., min_length=1, max_length=255, description="Ключ уникальности (casefold)")
    enabled: bool = Field(True, description="Включена ли привычка")
    target_per_month: int | None = Field(None, gt=0, description="Цель на месяц")
    target_per_year: int | None = Field(None, gt=0, description="Цель на год")


class HabitSchemaUpdate(StorageSchema):
    """
    Схема для частичного обновления привычки.
    Учитываются только явно переданные поля (exclude_unset).
    """

    enabled: bool | None = Field(None, description="Новый статус")
    target_per_month: int | None = Field(None, gt=0, description="Новая цель на месяц (None - убрать)")
    target_per_year: int | None = Field(None, gt=0, description="Новая цель на год (None - убрать)")


class HabitSchemaRead(StorageSchema):
    """Схема для чтения данных привычки."""

    id: int
    user_id: int
    name: str
    enabled: bool
    target_per_month: int | None = None
    target_per_year: int | None = None
    created_at: datetime
    updated_at: datetime
