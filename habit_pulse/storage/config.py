"""Конфигурация слоя хранения данных."""

from pydantic import Field, computed_field
from sqlalchemy import URL

from habit_pulse.core_shared.config import AppSettings


class StorageSettings(AppSettings):
    """Параметры PostgreSQL и пула соединений."""

    DB_NAME: str = Field(default="habit_pulse_db", description="Название базы данных")
    DB_USER: str = Field(default="habit_pulse_user", description="Имя пользователя базы данных")
    DB_PASSWORD: str = Field(default="", description="Пароль пользователя базы данных")
    DB_HOST: str = Field(default="db", description="Хост базы данных (имя сервиса в Docker)")
    DB_PORT: int = Field(default=5432, description="Порт базы данных")

    DB_POOL_SIZE: int = Field(default=5, gt=0, description="Постоянных соединений в пуле")
    DB_MAX_OVERFLOW: int = Field(default=5, ge=0, description="Дополнительных соединений сверх пула")
    DB_ECHO: bool = Field(default=False, description="Выводить SQL запросы в лог")

    @computed_field(repr=False)
    def DATABASE_URL(self) -> str:
        """URL для SQLAlchemy (драйвер psycopg подходит и для async, и для Alembic)."""
        url = URL.create(
            drivername="postgresql+psycopg",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)

    def engine_options(self) -> dict[str, int]:
        return {"pool_size": self.DB_POOL_SIZE, "max_overflow": self.DB_MAX_OVERFLOW}


settings = StorageSettings()
