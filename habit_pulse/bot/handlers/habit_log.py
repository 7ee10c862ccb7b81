"""
Обработчики отметки выполнения привычки.

- /log_habit [название]: список привычек или сразу отметка за сегодня.
- Кнопка привычки: выбор даты.
- Кнопки "Сегодня" / "Другая дата".
"""

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from habit_pulse.bot.conversation.habit_logging import HabitLoggingFlow
from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.enums import DateMode
from habit_pulse.bot.handlers.common import identify
from habit_pulse.bot.keyboards.callbacks import LogDateCallback, LogHabitCallback
from habit_pulse.bot.services.responder import AiogramResponder

router = Router(name="habit_log_handlers")


@router.message(Command("log_habit"))
async def log_habit_command(message: Message, command: CommandObject, logging_flow: HabitLoggingFlow) -> None:
    actor = await identify(message)

    if actor is not None:
        await logging_flow.start(actor, AiogramResponder(message), habit_name=command.args)


@router.callback_query(LogHabitCallback.filter())
async def log_habit_callback(
    callback: CallbackQuery, callback_data: LogHabitCallback, logging_flow: HabitLoggingFlow
) -> None:
    await logging_flow.select_habit(
        Actor.from_telegram(callback.from_user), callback_data.habit_id, AiogramResponder(callback)
    )


@router.callback_query(LogDateCallback.filter())
async def log_date_callback(
    callback: CallbackQuery, callback_data: LogDateCallback, logging_flow: HabitLoggingFlow
) -> None:
    actor = Actor.from_telegram(callback.from_user)
    responder = AiogramResponder(callback)

    if callback_data.mode == DateMode.TODAY:
        await logging_flow.log_today(actor, callback_data.habit_id, responder)
    else:
        await logging_flow.request_custom_date(actor, callback_data.habit_id, responder)
