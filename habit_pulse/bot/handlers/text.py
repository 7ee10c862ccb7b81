"""
Обработчик свободного текста.

Порядок: кнопка главного меню -> шаг незавершенного диалога -> подсказка.
Нажатие кнопки меню завершает незавершенный диалог и запускает соответствующую команду.
"""

from aiogram import F, Router
from aiogram.types import Message

from habit_pulse.bot.conversation.creation import HabitCreationFlow
from habit_pulse.bot.conversation.habit_logging import HabitLoggingFlow
from habit_pulse.bot.conversation.router import ConversationRouter
from habit_pulse.bot.core.enums import MenuCommand
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.handlers.common import identify
from habit_pulse.bot.keyboards.reply import get_main_menu_keyboard, get_menu_command_from_text
from habit_pulse.bot.services.habit_catalog import HabitCatalog
from habit_pulse.bot.services.responder import AiogramResponder
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.bot.stats.navigation import StatsNavigator

router = Router(name="text_handlers")


@router.message(F.text)
async def text_message(
    message: Message,
    sessions: SessionStore,
    conversation: ConversationRouter,
    creation_flow: HabitCreationFlow,
    logging_flow: HabitLoggingFlow,
    habit_catalog: HabitCatalog,
    stats_navigator: StatsNavigator,
) -> None:
    actor = await identify(message)

    if actor is None:
        return

    text = message.text or ""
    responder = AiogramResponder(message)

    menu_command = get_menu_command_from_text(text)

    if menu_command is not None:
        await sessions.clear_pending(actor.telegram_id)

        match menu_command:
            case MenuCommand.ADD_HABIT:
                await creation_flow.start(actor, responder)
            case MenuCommand.VIEW_HABITS:
                await habit_catalog.show_list(actor, responder)
            case MenuCommand.LOG_HABIT:
                await logging_flow.start(actor, responder)
            case MenuCommand.STATS:
                await stats_navigator.open(actor, responder)
        return

    if await conversation.route(actor, text, responder):
        return

    await message.answer(get_text("unknown_text", actor.locale), reply_markup=get_main_menu_keyboard(actor.locale))
