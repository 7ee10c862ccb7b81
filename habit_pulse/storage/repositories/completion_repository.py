"""Репозиторий для работы с моделью CompletionRecord."""

from datetime import date
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from habit_pulse.storage.logging import storage_log as log
from habit_pulse.storage.models import CompletionRecord
from habit_pulse.storage.schemas import CompletionSchemaCreate

from .base_repository import BaseRepository


class CompletionRepository(BaseRepository[CompletionRecord, CompletionSchemaCreate, CompletionSchemaCreate]):
    """
    Репозиторий отметок выполнения.

    Отметки не изменяются после создания, поэтому update не используется.
    """

    async def exists_on(self, db_session: AsyncSession, *, habit_id: int, day: date) -> bool:
        """
        Проверяет, есть ли отметка привычки за указанный день (UTC).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            day (date): Календарный день.

        Returns:
            bool: True, если отметка уже есть.
        """
        statement = select(self.model.id).where(
            self.model.habit_id == habit_id,
            self.model.completed_on == day,
        )
        result = await db_session.execute(statement.limit(1))
        exists = result.scalar_one_or_none() is not None

        log.debug(f"Отметка привычки ID: {habit_id} за {day}: {'есть' if exists else 'нет'}.")
        return exists

    async def get_for_habits(self, db_session: AsyncSession, *, habit_ids: list[int]) -> Sequence[CompletionRecord]:
        """
        Получает отметки указанных привычек, от новых к старым.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_ids (list[int]): ID привычек.

        Returns:
            Sequence[CompletionRecord]: Отметки, отсортированные по timestamp по убыванию.
        """
        if not habit_ids:
            return []

        return await self.find_all(
            db_session,
            self.model.habit_id.in_(habit_ids),
            order_by=[self.model.timestamp.desc(), self.model.id.desc()],
        )

    async def count_for_habit(self, db_session: AsyncSession, *, habit_id: int) -> int:
        """Количество отметок привычки."""
        statement = select(func.count()).select_from(self.model).where(self.model.habit_id == habit_id)
        result = await db_session.execute(statement)
        return result.scalar_one()

    async def delete_for_habit(self, db_session: AsyncSession, *, habit_id: int) -> int:
        """
        Удаляет все отметки привычки одним запросом.

        Returns:
            int: Количество удаленных отметок.
        """
        statement = delete(self.model).where(self.model.habit_id == habit_id)
        result = await db_session.execute(statement)
        removed = result.rowcount or 0

        log.debug(f"Удалено {removed} отметок привычки ID: {habit_id}.")
        return removed
