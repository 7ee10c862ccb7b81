"""Внешняя граница обработки ошибок для сообщений и нажатий кнопок."""

from contextlib import suppress
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.exceptions import TelegramAPIError
from aiogram.types import CallbackQuery, Message, TelegramObject

from habit_pulse.bot.core.i18n import get_locale, get_text
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.logging_setup import setup_logger

log = setup_logger("BotErrors")


class ErrorBoundaryMiddleware(BaseMiddleware):
    """
    Перехватывает непредвиденные ошибки обработчиков.

    Ошибка логируется (и уходит в Sentry через LoguruIntegration), пользователь получает извинение.
    Если до ошибки обработчик успел изменить незавершенный диалог пользователя, диалог сбрасывается.
    Иначе диалог сохраняется.
    """

    def __init__(self, sessions: SessionStore):
        self.sessions = sessions

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        tg_user = getattr(event, "from_user", None)
        pending_before = await self.sessions.get_pending(tg_user.id) if tg_user else None

        try:
            return await handler(event, data)
        except Exception as exc:
            log.exception(f"Необработанная ошибка при обработке {type(event).__name__}: {exc}")

            if tg_user is None:
                return None

            if await self.sessions.get_pending(tg_user.id) != pending_before:
                log.warning(f"Пользователь {tg_user.id}: диалог сброшен после ошибки.")
                await self.sessions.clear_pending(tg_user.id)

            await self._apologize(event, get_text("error_generic", get_locale(tg_user.language_code)))
            return None

    @staticmethod
    async def _apologize(event: TelegramObject, text: str) -> None:
        # Ошибка Telegram при извинении не должна перекрывать исходную
        with suppress(TelegramAPIError):
            if isinstance(event, CallbackQuery):
                await event.answer(text, show_alert=True)
            elif isinstance(event, Message):
                await event.answer(text)
