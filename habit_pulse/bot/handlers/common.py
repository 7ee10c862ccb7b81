"""
Общие обработчики команд бота.

Включает в себя:
- /start: регистрация пользователя и главное меню.
- /cancel: отмена незавершенного диалога.
"""

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.i18n import Locale, get_text
from habit_pulse.bot.keyboards.reply import get_main_menu_keyboard
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.logging_setup import setup_logger
from habit_pulse.storage import HabitStorage
from habit_pulse.storage.schemas import UserSchemaCreate

log = setup_logger("BotCommonHandlers")

router = Router(name="common_handlers")


async def identify(message: Message) -> Actor | None:
    """
    Определяет автора сообщения.

    Если автора нет (например, сообщение от имени канала), отвечает об ошибке идентификации.
    """
    if message.from_user is None:
        await message.answer(get_text("unable_to_identify", Locale.EN))
        return None

    return Actor.from_telegram(message.from_user)


@router.message(CommandStart())
async def start_command(message: Message, storage: HabitStorage, sessions: SessionStore) -> None:
    """Регистрирует пользователя при первом обращении и показывает главное меню."""
    actor = await identify(message)

    if actor is None:
        return

    await sessions.clear_pending(actor.telegram_id)

    user = await storage.get_user(actor.telegram_id)

    if user is None:
        user = await storage.create_user(
            UserSchemaCreate(
                telegram_id=actor.telegram_id,
                username=actor.username,
                first_name=actor.first_name,
                last_name=actor.last_name,
                locale=actor.locale,
            )
        )
        log.info(f"Новый пользователь {actor.telegram_id} (ID: {user.id}).")

    await message.answer(
        get_text("welcome", actor.locale, name=actor.display_name),
        reply_markup=get_main_menu_keyboard(actor.locale),
    )


@router.message(Command("cancel"))
async def cancel_command(message: Message, sessions: SessionStore) -> None:
    """Отменяет любой незавершенный диалог."""
    actor = await identify(message)

    if actor is None:
        return

    if await sessions.get_pending(actor.telegram_id) is None:
        await message.answer(
            get_text("nothing_to_cancel", actor.locale), reply_markup=get_main_menu_keyboard(actor.locale)
        )
        return

    await sessions.clear_pending(actor.telegram_id)
    await message.answer(get_text("cancelled", actor.locale), reply_markup=get_main_menu_keyboard(actor.locale))
