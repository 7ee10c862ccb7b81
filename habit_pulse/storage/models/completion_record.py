"""Модель SQLAlchemy для CompletionRecord (Отметка выполнения привычки)."""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit
    from .user import User


class CompletionRecord(Base):
    """
    Факт выполнения привычки в конкретный календарный день.

    Attributes:
        habit_id: Внешний ключ на привычку.
        user_id: Внешний ключ на пользователя (дублирует habit.user_id для быстрых выборок).
        timestamp: Момент выполнения (UTC).
        completed_on: Календарный день UTC, к которому относится timestamp.
        habit: Привычка.
        user: Пользователь.
    """

    __tablename__ = "completion_records"

    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    completed_on: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # Связи
    habit: Mapped["Habit"] = relationship(back_populates="completions")
    user: Mapped["User"] = relationship(back_populates="completions")

    # Не более одной отметки на привычку за день
    __table_args__ = (UniqueConstraint("habit_id", "completed_on", name="uq_completion_per_day"),)
