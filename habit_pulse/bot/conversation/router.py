"""
Маршрутизация свободного текста в незавершенный диалог пользователя.

У пользователя не более одного незавершенного диалога, поэтому выбор обработчика -
один match по его типу. Слово отмены завершает любой диалог.
Команда без собственного обработчика (/help, /foo) тоже завершает диалог
и не передается его шагу.
"""

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.enums import is_cancel_token, is_command, is_skip_token
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.conversation.creation import HabitCreationFlow
from habit_pulse.bot.conversation.habit_logging import HabitLoggingFlow
from habit_pulse.bot.conversation.targets import TargetEditFlow
from habit_pulse.bot.keyboards.reply import get_main_menu_keyboard
from habit_pulse.bot.services.responder import Responder
from habit_pulse.bot.session.pending import (
    AwaitingCustomLogDate,
    AwaitingHabitLogSelection,
    AwaitingHabitName,
    AwaitingLogHabitName,
    AwaitingMonthlyTarget,
    AwaitingMonthlyTargetEdit,
    AwaitingYearlyTarget,
    AwaitingYearlyTargetEdit,
)
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.logging_setup import setup_logger

log = setup_logger("BotConversation")


class ConversationRouter:
    """Передает текст пользователя шагу его текущего диалога."""

    def __init__(
        self,
        sessions: SessionStore,
        creation: HabitCreationFlow,
        targets: TargetEditFlow,
        habit_logging: HabitLoggingFlow,
    ):
        self.sessions = sessions
        self.creation = creation
        self.targets = targets
        self.habit_logging = habit_logging

    async def route(self, actor: Actor, text: str, responder: Responder) -> bool:
        """
        Обрабатывает текст, если пользователь находится в диалоге.

        Args:
            actor (Actor): Автор сообщения.
            text (str): Текст сообщения.
            responder (Responder): Канал ответа.

        Returns:
            bool: True, если текст обработан диалогом. False - диалога нет (или его прервала команда),
                текст нужно обработать иначе.
        """
        pending = await self.sessions.get_pending(actor.telegram_id)

        if pending is None:
            return False

        if is_cancel_token(text):
            await self.sessions.clear_pending(actor.telegram_id)
            log.debug(f"Пользователь {actor.telegram_id} отменил {type(pending).__name__}.")
            await responder.send(get_text("cancelled", actor.locale), get_main_menu_keyboard(actor.locale))
            return True

        if is_command(text) and not is_skip_token(text):
            await self.sessions.clear_pending(actor.telegram_id)
            command = text.split()[0]
            log.debug(f"Пользователь {actor.telegram_id}: команда {command!r} прервала {type(pending).__name__}.")
            return False

        match pending:
            case AwaitingHabitName():
                await self.creation.on_name(actor, text, responder)
            case AwaitingMonthlyTarget():
                await self.creation.on_monthly_target(actor, pending, text, responder)
            case AwaitingYearlyTarget():
                await self.creation.on_yearly_target(actor, pending, text, responder)
            case AwaitingMonthlyTargetEdit() | AwaitingYearlyTargetEdit():
                await self.targets.on_value(actor, pending, text, responder)
            case AwaitingLogHabitName():
                await self.habit_logging.on_habit_name(actor, text, responder)
            case AwaitingHabitLogSelection() | AwaitingCustomLogDate():
                await self.habit_logging.on_custom_date(actor, pending, text, responder)

        return True
