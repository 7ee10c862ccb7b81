"""Общая часть репозиториев: выборки по условиям, вставка, изменение, удаление."""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from habit_pulse.storage.logging import storage_log as log
from habit_pulse.storage.models import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Репозиторий одной модели.

    Методы только выполняют flush: границы транзакции задает SqlAlchemyHabitStorage.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def find_one(self, db_session: AsyncSession, *conditions: ColumnElement[bool]) -> ModelType | None:
        """Первая запись, удовлетворяющая всем условиям, или None."""
        statement = select(self.model).where(*conditions).limit(1)
        return (await db_session.execute(statement)).scalar_one_or_none()

    async def find_all(
        self,
        db_session: AsyncSession,
        *conditions: ColumnElement[bool],
        order_by: Sequence[ColumnElement[Any]] = (),
    ) -> Sequence[ModelType]:
        statement = select(self.model).where(*conditions).order_by(*order_by)
        return (await db_session.execute(statement)).scalars().all()

    async def create(self, db_session: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        """
        Вставляет запись из схемы создания.

        Returns:
            ModelType: Объект с заполненными базой полями (id, created_at).

        Raises:
            IntegrityError: При нарушении ограничений, обрабатывается вызывающим кодом.
        """
        db_obj = self.model(**obj_in.model_dump())
        db_session.add(db_obj)

        await db_session.flush()
        await db_session.refresh(db_obj)

        log.debug(f"{self.model.__name__} ID: {db_obj.id} вставлен.")
        return db_obj

    async def update(self, db_session: AsyncSession, *, db_obj: ModelType, obj_in: UpdateSchemaType) -> ModelType:
        """Применяет к объекту только явно переданные поля схемы."""
        changes = obj_in.model_dump(exclude_unset=True)

        for field, value in changes.items():
            setattr(db_obj, field, value)

        await db_session.flush()
        await db_session.refresh(db_obj)

        log.debug(f"{self.model.__name__} ID: {db_obj.id} изменен: {changes}")
        return db_obj

    async def remove(self, db_session: AsyncSession, *, db_obj: ModelType) -> None:
        await db_session.delete(db_obj)
        await db_session.flush()
        log.debug(f"{self.model.__name__} ID: {db_obj.id} удален.")
