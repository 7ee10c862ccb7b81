"""Общий предок Pydantic-схем хранилища."""

from pydantic import BaseModel, ConfigDict


class StorageSchema(BaseModel):
    """
    Схема, которой хранилище обменивается с ботом.

    Read-схемы строятся прямо из ORM-объектов (`model_validate(orm_obj)`),
    поэтому ORM-модели не покидают слой хранения.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")
