"""Схемы Pydantic для модели User."""

from datetime import datetime

from pydantic import Field

from .base_schema import StorageSchema


class UserSchemaBase(StorageSchema):
    """Базовая схема пользователя."""

    telegram_id: int = Field(..., description="Уникальный ID пользователя в Telegram")
    username: str | None = Field(None, max_length=100, description="Username в Telegram")
    first_name: str | None = Field(None, max_length=100, description="Имя")
    last_name: str | None = Field(None, max_length=100, description="Фамилия")
    locale: str = Field("en", max_length=8, description="Язык интерфейса")


class UserSchemaCreate(UserSchemaBase):
    """Схема для регистрации пользователя."""


class UserSchemaRead(UserSchemaBase):
    """Схема для чтения данных пользователя."""

    id: int = Field(..., description="Внутренний ID пользователя")
    created_at: datetime = Field(..., description="Время регистрации")
