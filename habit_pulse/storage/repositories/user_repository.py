"""Репозиторий для работы с моделью User."""

from sqlalchemy.ext.asyncio import AsyncSession

from habit_pulse.storage.logging import storage_log as log
from habit_pulse.storage.models import User
from habit_pulse.storage.schemas import UserSchemaCreate

from .base_repository import BaseRepository


class UserRepository(BaseRepository[User, UserSchemaCreate, UserSchemaCreate]):
    """Репозиторий пользователей. Пользователь после создания не изменяется."""

    async def get_by_telegram_id(self, db_session: AsyncSession, *, telegram_id: int) -> User | None:
        """
        Получает пользователя по его Telegram ID.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            telegram_id (int): ID пользователя в Telegram.

        Returns:
            User | None: Экземпляр пользователя или None.
        """
        log.debug(f"Поиск пользователя по Telegram ID: {telegram_id}")
        return await self.find_one(db_session, self.model.telegram_id == telegram_id)
