"""Модель SQLAlchemy для User (Пользователь)."""

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .completion_record import CompletionRecord
    from .habit import Habit


class User(Base):
    """
    Пользователь Telegram, зарегистрированный через /start.

    Attributes:
        telegram_id: Уникальный идентификатор пользователя в Telegram.
        username: Username в Telegram (может отсутствовать).
        first_name: Имя (может отсутствовать).
        last_name: Фамилия (может отсутствовать).
        locale: Язык интерфейса ("en" или "uk"), определенный по language_code.
        habits: Привычки пользователя.
        completions: Отметки выполнения всех привычек пользователя.
    """

    __tablename__ = "users"

    telegram_id: Mapped[int] = mapped_column(BigInteger, unique=True, index=True, nullable=False)
    username: Mapped[str | None] = mapped_column(String(100), index=True)
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    locale: Mapped[str] = mapped_column(String(8), default="en", server_default="en", nullable=False)

    # Связи
    habits: Mapped[list["Habit"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    completions: Mapped[list["CompletionRecord"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
