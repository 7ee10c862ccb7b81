"""Репозиторий для работы с моделью Habit."""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from habit_pulse.storage.logging import storage_log as log
from habit_pulse.storage.models import Habit
from habit_pulse.storage.schemas import HabitSchemaCreate, HabitSchemaUpdate

from .base_repository import BaseRepository


class HabitRepository(BaseRepository[Habit, HabitSchemaCreate, HabitSchemaUpdate]):
    """Репозиторий привычек."""

    async def get_user_habit(self, db_session: AsyncSession, *, user_id: int, habit_id: int) -> Habit | None:
        """
        Получает привычку по ID с проверкой владельца.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID владельца.
            habit_id (int): ID привычки.

        Returns:
            Habit | None: Привычка или None, если ее нет или она чужая.
        """
        return await self.find_one(
            db_session,
            self.model.id == habit_id,
            self.model.user_id == user_id,
        )

    async def get_by_name_key(self, db_session: AsyncSession, *, user_id: int, name_key: str) -> Habit | None:
        """
        Ищет привычку пользователя по ключу названия (casefold).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID владельца.
            name_key (str): Название в casefold.

        Returns:
            Habit | None: Привычка или None.
        """
        log.debug(f"Поиск привычки '{name_key}' пользователя ID: {user_id}")
        return await self.find_one(
            db_session,
            self.model.user_id == user_id,
            self.model.name_key == name_key,
        )

    async def get_user_habits(
        self, db_session: AsyncSession, *, user_id: int, enabled_only: bool = False
    ) -> Sequence[Habit]:
        """
        Получает привычки пользователя в порядке создания.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID владельца.
            enabled_only (bool): Вернуть только включенные привычки.

        Returns:
            Sequence[Habit]: Список привычек.
        """
        filters = [self.model.user_id == user_id]

        if enabled_only:
            filters.append(self.model.enabled.is_(True))

        habits = await self.find_all(db_session, *filters, order_by=[self.model.created_at, self.model.id])
        log.debug(f"Найдено {len(habits)} привычек пользователя ID: {user_id} (enabled_only={enabled_only}).")
        return habits
