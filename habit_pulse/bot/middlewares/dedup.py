"""Подавление двойных нажатий кнопок."""

from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery

from habit_pulse.bot.core.i18n import get_locale, get_text
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.logging_setup import setup_logger

log = setup_logger("BotDedup")


class RepeatedCallbackMiddleware(BaseMiddleware):
    """
    Игнорирует повторное нажатие той же кнопки тем же пользователем в пределах окна SessionStore.

    Применяется только к callback_data с указанными префиксами.
    Это защита от случайного двойного нажатия, а не механизм синхронизации.
    """

    def __init__(self, sessions: SessionStore, prefixes: tuple[str, ...]):
        self.sessions = sessions
        self.prefixes = prefixes

    def _is_guarded(self, data: str) -> bool:
        return data.split(":", 1)[0] in self.prefixes

    async def __call__(
        self,
        handler: Callable[[CallbackQuery, dict[str, Any]], Awaitable[Any]],
        event: CallbackQuery,
        data: dict[str, Any],
    ) -> Any:
        if event.data and self._is_guarded(event.data):
            if await self.sessions.is_duplicate_action(event.from_user.id, event.data):
                log.warning(f"Пользователь {event.from_user.id}: повторное нажатие '{event.data}' проигнорировано.")
                await event.answer(get_text("duplicate_action", get_locale(event.from_user.language_code)))
                return None

        return await handler(event, data)
