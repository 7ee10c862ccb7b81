"""Декларативная база моделей хранилища привычек."""

from datetime import datetime
from typing import Annotated

from sqlalchemy import DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Имена ограничений должны совпадать с миграциями Alembic
metadata_obj = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

created_timestamp = Annotated[
    datetime,
    mapped_column(server_default=func.now(), nullable=False, comment="Время создания записи"),
]
updated_timestamp = Annotated[
    datetime,
    mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="Время последнего обновления записи",
    ),
]


class Base(DeclarativeBase):
    """
    Общий предок моделей: суррогатный ключ `id` и время создания/изменения.

    Все datetime-колонки хранятся с часовым поясом (моменты отметок в UTC).
    """

    metadata = metadata_obj
    type_annotation_map = {datetime: DateTime(timezone=True)}

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    created_at: Mapped[created_timestamp]
    updated_at: Mapped[updated_timestamp]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
