"""
Обработчики работы с привычками.

Включает в себя:
- /add_habit: сценарий создания привычки.
- /view_habits: список привычек и карточка привычки.
- Изменение целей, включение/выключение и удаление привычки из карточки.
"""

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from habit_pulse.bot.conversation.creation import HabitCreationFlow
from habit_pulse.bot.conversation.targets import TargetEditFlow
from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.handlers.common import identify
from habit_pulse.bot.keyboards.callbacks import (
    HabitListCallback,
    HabitRemoveCallback,
    HabitToggleCallback,
    HabitViewCallback,
    TargetEditCallback,
)
from habit_pulse.bot.services.habit_catalog import HabitCatalog
from habit_pulse.bot.services.responder import AiogramResponder
from habit_pulse.bot.session.store import SessionStore

router = Router(name="habit_handlers")


# ==============================================================================
# Команды
# ==============================================================================


@router.message(Command("add_habit"))
async def add_habit_command(message: Message, creation_flow: HabitCreationFlow) -> None:
    actor = await identify(message)

    if actor is not None:
        await creation_flow.start(actor, AiogramResponder(message))


@router.message(Command("view_habits"))
async def view_habits_command(message: Message, habit_catalog: HabitCatalog, sessions: SessionStore) -> None:
    actor = await identify(message)

    if actor is not None:
        await sessions.clear_pending(actor.telegram_id)
        await habit_catalog.show_list(actor, AiogramResponder(message))


# ==============================================================================
# Карточка привычки
# ==============================================================================


@router.callback_query(HabitListCallback.filter())
async def habits_list_callback(callback: CallbackQuery, habit_catalog: HabitCatalog) -> None:
    await habit_catalog.show_list(Actor.from_telegram(callback.from_user), AiogramResponder(callback), edit=True)


@router.callback_query(HabitViewCallback.filter())
async def habit_view_callback(
    callback: CallbackQuery, callback_data: HabitViewCallback, habit_catalog: HabitCatalog
) -> None:
    await habit_catalog.show_detail(
        Actor.from_telegram(callback.from_user), callback_data.habit_id, AiogramResponder(callback)
    )


@router.callback_query(HabitToggleCallback.filter())
async def habit_toggle_callback(
    callback: CallbackQuery, callback_data: HabitToggleCallback, habit_catalog: HabitCatalog
) -> None:
    await habit_catalog.set_enabled(
        Actor.from_telegram(callback.from_user),
        callback_data.habit_id,
        callback_data.enabled,
        AiogramResponder(callback),
    )


@router.callback_query(HabitRemoveCallback.filter())
async def habit_remove_callback(
    callback: CallbackQuery, callback_data: HabitRemoveCallback, habit_catalog: HabitCatalog
) -> None:
    actor = Actor.from_telegram(callback.from_user)
    responder = AiogramResponder(callback)

    if callback_data.confirmed:
        await habit_catalog.remove(actor, callback_data.habit_id, responder)
    else:
        await habit_catalog.request_removal(actor, callback_data.habit_id, responder)


# ==============================================================================
# Изменение целей
# ==============================================================================


@router.callback_query(TargetEditCallback.filter())
async def target_edit_callback(
    callback: CallbackQuery, callback_data: TargetEditCallback, target_flow: TargetEditFlow
) -> None:
    await target_flow.start(
        Actor.from_telegram(callback.from_user),
        callback_data.habit_id,
        callback_data.target,
        AiogramResponder(callback),
    )
