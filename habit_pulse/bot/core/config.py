"""
Конфигурация Телеграм-бота.

Определяет настройки, загружаемые из переменных окружения (.env).
Экземпляр настроек создается в точке входа (habit_pulse.bot.main),
компоненты бота получают параметры через конструкторы.
"""

from pydantic import Field

from habit_pulse.storage.config import StorageSettings


class BotSettings(StorageSettings):
    """
    Настройки бота.

    Наследует настройки подключения к БД: бот работает с хранилищем напрямую.
    """

    # --- Настройки Telegram ---
    BOT_TOKEN: str = Field(..., description="Токен телеграм бота, полученный от BotFather")

    # --- Поведение бота ---
    DUPLICATE_CALLBACK_WINDOW_SECONDS: float = Field(
        default=1.0,
        gt=0,
        description="Окно (сек), в котором повторное нажатие той же кнопки изменения цели игнорируется",
    )
    HABIT_NAME_MAX_LENGTH: int = Field(default=100, gt=0, le=255, description="Максимальная длина названия привычки")
