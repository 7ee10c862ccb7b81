"""Модель SQLAlchemy для Habit (Привычка)."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .completion_record import CompletionRecord
    from .user import User


class Habit(Base):
    """
    Привычка пользователя.

    Attributes:
        user_id: Внешний ключ на пользователя.
        name: Отображаемое название (уже нормализованное: "Run", "Read books").
        name_key: Название в casefold, по нему проверяется уникальность без учета регистра.
        enabled: Включена ли привычка (выключенные не предлагаются для отметки).
        target_per_month: Цель на месяц (None - цель не задана).
        target_per_year: Цель на год (None - цель не задана).
        user: Владелец привычки.
        completions: Отметки выполнения привычки.
    """

    __tablename__ = "habits"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(String(255), nullable=False)
    enabled: Mapped[bool] = mapped_column(default=True, nullable=False, index=True)
    target_per_month: Mapped[int | None] = mapped_column(Integer)
    target_per_year: Mapped[int | None] = mapped_column(Integer)

    # Связи
    user: Mapped["User"] = relationship(back_populates="habits")
    completions: Mapped[list["CompletionRecord"]] = relationship(
        back_populates="habit", cascade="all, delete-orphan", passive_deletes=True
    )

    # Одно название на пользователя без учета регистра
    __table_args__ = (UniqueConstraint("user_id", "name_key", name="uq_habit_user_name_key"),)
