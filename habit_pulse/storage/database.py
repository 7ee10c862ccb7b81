"""Асинхронный движок SQLAlchemy и выдача сессий хранилищу."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings
from .logging import storage_log as log


class Database:
    """
    Владелец движка и фабрики сессий.

    До вызова `connect` движка нет: модуль можно импортировать без доступной БД
    (тесты подставляют свой URL).
    """

    def __init__(self, database_url: str | None = None, echo: bool | None = None) -> None:
        self.database_url = database_url or settings.DATABASE_URL
        self.echo = settings.DB_ECHO if echo is None else echo
        self.engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_connected(self) -> bool:
        return self._sessionmaker is not None

    async def connect(self, **engine_kwargs: Any) -> None:
        """
        Создает движок и проверяет соединение запросом SELECT 1.

        Raises:
            RuntimeError: Если база данных недоступна.
        """
        if self.is_connected:
            log.debug("Повторный connect проигнорирован: движок уже создан.")
            return

        options = {**settings.engine_options(), **engine_kwargs}
        self.engine = create_async_engine(self.database_url, echo=self.echo, pool_pre_ping=True, **options)
        self._sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False, autoflush=False)

        try:
            async with self.engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except Exception as exc:
            log.critical(f"База данных недоступна: {exc}")
            await self.disconnect()
            raise RuntimeError("Не удалось подключиться к базе данных.") from exc

        log.success("Подключение к базе данных установлено.")

    async def disconnect(self) -> None:
        if self.engine is None:
            return

        await self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        log.info("Пул соединений с базой данных закрыт.")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Сессия без автоматического commit. При исключении выполняется откат.

        Raises:
            RuntimeError: Если `connect` еще не вызывался.
        """
        if self._sessionmaker is None:
            raise RuntimeError("База данных не подключена: вызовите `await db.connect()`.")

        async with self._sessionmaker() as session:
            try:
                yield session
            except Exception as exc:
                log.error(f"Откат транзакции после ошибки: {exc}")
                await session.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Сессия, изменения которой фиксируются при выходе без исключения."""
        async with self.session() as session:
            yield session
            await session.commit()


db = Database()
