"""
Отправка ответов пользователю.

Сценарии бота работают с протоколом Responder и не зависят от того,
пришло ли событие сообщением или нажатием кнопки.
"""

from contextlib import suppress
from enum import StrEnum
from typing import Protocol

from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message, ReplyKeyboardMarkup

from habit_pulse.core_shared.logging_setup import setup_logger

log = setup_logger("BotResponder")

Keyboard = InlineKeyboardMarkup | ReplyKeyboardMarkup


class EditOutcome(StrEnum):
    """Результат редактирования сообщения."""

    EDITED = "edited"
    UNCHANGED = "unchanged"  # Новый текст совпадает с текущим, это не ошибка
    FAILED = "failed"


class Responder(Protocol):
    """Примитивы ответа: новое сообщение, редактирование текущего, всплывающее уведомление."""

    async def send(self, text: str, keyboard: Keyboard | None = None) -> None: ...

    async def edit(self, text: str, keyboard: InlineKeyboardMarkup | None = None) -> EditOutcome: ...

    async def notify(self, text: str | None = None, alert: bool = False) -> None: ...


class AiogramResponder:
    """
    Реализация Responder для событий aiogram.

    Для сообщения edit отправляет новое сообщение, notify без текста ничего не делает.
    Для нажатия кнопки edit редактирует сообщение с кнопкой, notify отвечает на callback.
    """

    def __init__(self, event: Message | CallbackQuery):
        self.event = event

    @property
    def _message(self) -> Message | None:
        if isinstance(self.event, Message):
            return self.event

        # Сообщение может быть недоступно (слишком старое)
        message = self.event.message
        return message if isinstance(message, Message) else None

    async def send(self, text: str, keyboard: Keyboard | None = None) -> None:
        message = self._message

        if message is None:
            if isinstance(self.event, CallbackQuery):
                await self.event.bot.send_message(self.event.from_user.id, text, reply_markup=keyboard)
            return

        await message.answer(text, reply_markup=keyboard)

    async def edit(self, text: str, keyboard: InlineKeyboardMarkup | None = None) -> EditOutcome:
        message = self._message

        if isinstance(self.event, Message) or message is None:
            await self.send(text, keyboard)
            return EditOutcome.EDITED

        try:
            await message.edit_text(text, reply_markup=keyboard)
        except TelegramBadRequest as exc:
            if "message is not modified" in exc.message:
                log.debug("Сообщение не изменилось, редактирование пропущено.")
                return EditOutcome.UNCHANGED

            log.error(f"Не удалось отредактировать сообщение: {exc.message}")
            return EditOutcome.FAILED

        return EditOutcome.EDITED

    async def notify(self, text: str | None = None, alert: bool = False) -> None:
        if isinstance(self.event, CallbackQuery):
            # Ответ на callback может опоздать (query is too old), это не влияет на результат действия
            with suppress(TelegramAPIError):
                await self.event.answer(text, show_alert=alert)
            return

        if text:
            await self.event.answer(text)
