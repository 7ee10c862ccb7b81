"""Пользователь, от имени которого пришло событие."""

from aiogram.types import User as TelegramUser
from pydantic import BaseModel, ConfigDict

from habit_pulse.bot.core.i18n import Locale, get_locale


class Actor(BaseModel):
    """
    Идентичность и язык автора события.

    Attributes:
        telegram_id (int): ID пользователя в Telegram.
        locale (Locale): Язык интерфейса для ответа.
        username (str | None): Username в Telegram.
        first_name (str | None): Имя.
        last_name (str | None): Фамилия.
    """

    model_config = ConfigDict(frozen=True)

    telegram_id: int
    locale: Locale = Locale.EN
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_telegram(cls, tg_user: TelegramUser) -> "Actor":
        return cls(
            telegram_id=tg_user.id,
            locale=get_locale(tg_user.language_code),
            username=tg_user.username,
            first_name=tg_user.first_name,
            last_name=tg_user.last_name,
        )

    @property
    def display_name(self) -> str:
        return self.first_name or self.username or str(self.telegram_id)
