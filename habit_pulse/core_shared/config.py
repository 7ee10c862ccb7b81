"""Настройки, общие для бота, хранилища и миграций."""

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_setup import LogConfig


class AppSettings(BaseSettings):
    """
    Общие настройки Habit Pulse.

    Значения читаются из переменных окружения и файла .env.
    Настройки конкретного сервиса наследуются от этого класса.
    """

    PROJECT_NAME: str = "Habit Pulse"
    APP_VERSION: str = "0.1.0"

    DEVELOPMENT: bool = Field(default=False, description="Режим разработки")

    # --- Логирование ---
    LOG_LEVEL: str = Field(default="INFO", description="Уровень логирования")
    LOG_TO_FILE: bool = Field(default=False, description="Дублировать логи в файл logs/<service>_<date>.log")
    LOG_JSON: bool = Field(default=False, description="Писать логи в формате JSON")

    # --- Sentry ---
    SENTRY_DSN: str | None = Field(default=None, description="DSN Sentry. Если не задан, мониторинг отключен.")
    SENTRY_TRACES_SAMPLE_RATE: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Доля трейсов. По умолчанию 1.0 в разработке и 0.1 в продакшене.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @computed_field
    @property
    def ENVIRONMENT(self) -> str:
        return "development" if self.DEVELOPMENT else "production"

    @property
    def RELEASE(self) -> str:
        """Идентификатор релиза для Sentry."""
        return f"{self.PROJECT_NAME.lower().replace(' ', '-')}@{self.APP_VERSION}"

    def log_config(self) -> LogConfig:
        """Конфигурация логирования для точки входа сервиса."""
        return LogConfig(level=self.LOG_LEVEL, enable_file_logging=self.LOG_TO_FILE, serialize=self.LOG_JSON)
