"""
Сценарий создания привычки: название -> цель на месяц -> цель на год -> сохранение.

Некорректный ввод на любом шаге не меняет состояние: пользователь получает подсказку
и остается на том же шаге. Конфликт названия завершает сценарий.
"""

from html import escape

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.conversation.validation import normalize_habit_name, parse_optional_target
from habit_pulse.bot.keyboards.reply import get_main_menu_keyboard
from habit_pulse.bot.services.responder import Responder
from habit_pulse.bot.session.pending import AwaitingHabitName, AwaitingMonthlyTarget, AwaitingYearlyTarget
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.exceptions import DuplicateHabitException
from habit_pulse.core_shared.logging_setup import setup_logger
from habit_pulse.storage import HabitStorage

log = setup_logger("BotHabitCreation")


class HabitCreationFlow:
    """Пошаговое создание привычки."""

    def __init__(self, storage: HabitStorage, sessions: SessionStore, name_max_length: int = 100):
        self.storage = storage
        self.sessions = sessions
        self.name_max_length = name_max_length

    async def start(self, actor: Actor, responder: Responder) -> None:
        """Команда /add_habit: заменяет любой незавершенный диалог и запрашивает название."""
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("need_start", actor.locale))
            return

        await self.sessions.set_pending(actor.telegram_id, AwaitingHabitName())
        await responder.send(get_text("ask_habit_name", actor.locale))

    async def on_name(self, actor: Actor, text: str, responder: Responder) -> None:
        name = normalize_habit_name(text)

        if not name or len(name) > self.name_max_length:
            await responder.send(get_text("habit_name_invalid", actor.locale, max_length=self.name_max_length))
            return

        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("need_start", actor.locale))
            return

        if await self.storage.find_habit_by_name(user.id, name):
            log.warning(f"Пользователь {actor.telegram_id}: привычка '{name}' уже существует.")
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("habit_exists", actor.locale, name=escape(name)))
            return

        await self.sessions.set_pending(actor.telegram_id, AwaitingMonthlyTarget(habit_name=name))
        await responder.send(get_text("ask_monthly_target", actor.locale, name=escape(name)))

    async def on_monthly_target(
        self, actor: Actor, pending: AwaitingMonthlyTarget, text: str, responder: Responder
    ) -> None:
        try:
            monthly_target = parse_optional_target(text)
        except ValueError:
            await responder.send(get_text("optional_target_invalid", actor.locale))
            return

        await self.sessions.set_pending(
            actor.telegram_id,
            AwaitingYearlyTarget(habit_name=pending.habit_name, monthly_target=monthly_target),
        )
        await responder.send(get_text("ask_yearly_target", actor.locale))

    async def on_yearly_target(
        self, actor: Actor, pending: AwaitingYearlyTarget, text: str, responder: Responder
    ) -> None:
        try:
            yearly_target = parse_optional_target(text)
        except ValueError:
            await responder.send(get_text("optional_target_invalid", actor.locale))
            return

        # Пользователь мог исчезнуть, пока шел диалог
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            log.warning(f"Пользователь {actor.telegram_id} не найден при сохранении привычки.")
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("need_start", actor.locale))
            return

        try:
            habit = await self.storage.create_habit(
                user.id,
                pending.habit_name,
                target_per_month=pending.monthly_target,
                target_per_year=yearly_target,
            )
        except DuplicateHabitException:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("habit_exists", actor.locale, name=escape(pending.habit_name)))
            return

        await self.sessions.clear_pending(actor.telegram_id)
        log.info(f"Пользователь {actor.telegram_id} создал привычку '{habit.name}' (ID: {habit.id}).")

        not_set = get_text("not_set", actor.locale)
        await responder.send(
            get_text(
                "habit_created",
                actor.locale,
                name=escape(habit.name),
                monthly=habit.target_per_month or not_set,
                yearly=habit.target_per_year or not_set,
            ),
            get_main_menu_keyboard(actor.locale),
        )
