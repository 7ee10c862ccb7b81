"""Изменение цели на месяц или на год из карточки привычки."""

from html import escape

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.enums import TargetType
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.conversation.validation import parse_target_edit
from habit_pulse.bot.services.responder import Responder
from habit_pulse.bot.session.pending import AwaitingMonthlyTargetEdit, AwaitingYearlyTargetEdit
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.logging_setup import setup_logger
from habit_pulse.storage import HabitStorage

log = setup_logger("BotTargetEdit")

# Поле модели, тексты запроса, обновления и удаления для каждого типа цели
_TARGET_FIELDS = {
    TargetType.MONTH: ("target_per_month", "ask_month_target_edit", "month_target_updated", "month_target_removed"),
    TargetType.YEAR: ("target_per_year", "ask_year_target_edit", "year_target_updated", "year_target_removed"),
}


class TargetEditFlow:
    """Одношаговый ввод новой цели. 0 удаляет цель."""

    def __init__(self, storage: HabitStorage, sessions: SessionStore):
        self.storage = storage
        self.sessions = sessions

    async def start(self, actor: Actor, habit_id: int, target: TargetType, responder: Responder) -> None:
        """Нажатие кнопки "Цель на месяц/год": запрашивает значение."""
        user = await self.storage.get_user(actor.telegram_id)
        habit = await self.storage.get_habit(user.id, habit_id) if user else None

        if habit is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.notify(get_text("habit_not_found", actor.locale), alert=True)
            return

        pending = (
            AwaitingMonthlyTargetEdit(habit_id=habit_id)
            if target == TargetType.MONTH
            else AwaitingYearlyTargetEdit(habit_id=habit_id)
        )
        await self.sessions.set_pending(actor.telegram_id, pending)

        _, prompt_key, _, _ = _TARGET_FIELDS[target]
        await responder.edit(get_text(prompt_key, actor.locale, name=escape(habit.name)))
        await responder.notify()

    async def on_value(
        self,
        actor: Actor,
        pending: AwaitingMonthlyTargetEdit | AwaitingYearlyTargetEdit,
        text: str,
        responder: Responder,
    ) -> None:
        target = TargetType.MONTH if isinstance(pending, AwaitingMonthlyTargetEdit) else TargetType.YEAR
        field, _, updated_key, removed_key = _TARGET_FIELDS[target]

        try:
            value = parse_target_edit(text)
        except ValueError:
            await responder.send(get_text("target_edit_invalid", actor.locale))
            return

        user = await self.storage.get_user(actor.telegram_id)
        habit = (
            await self.storage.update_habit_targets(user.id, pending.habit_id, **{field: value}) if user else None
        )

        await self.sessions.clear_pending(actor.telegram_id)

        if habit is None:
            log.warning(f"Пользователь {actor.telegram_id}: привычка {pending.habit_id} не найдена при изменении цели.")
            await responder.send(get_text("habit_not_found", actor.locale))
            return

        log.info(f"Пользователь {actor.telegram_id}: {field}={value} для привычки ID: {habit.id}.")

        if value is None:
            await responder.send(get_text(removed_key, actor.locale, name=escape(habit.name)))
        else:
            await responder.send(get_text(updated_key, actor.locale, name=escape(habit.name), value=value))
