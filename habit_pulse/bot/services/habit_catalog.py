"""
Список привычек и карточка привычки (/view_habits).

Карточка показывает дату создания, дату последней отметки, цели и кнопки действий:
статистика, изменение целей, включение/выключение, удаление с подтверждением.
"""

from html import escape

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.keyboards.inline import (
    get_habit_detail_keyboard,
    get_habit_remove_confirmation_keyboard,
    get_habits_list_keyboard,
)
from habit_pulse.bot.services.responder import Responder
from habit_pulse.bot.session.pending import refers_to_habit
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.date_utils import format_day, utc_day
from habit_pulse.core_shared.logging_setup import setup_logger
from habit_pulse.storage import HabitStorage
from habit_pulse.storage.schemas import HabitSchemaRead, UserSchemaRead

log = setup_logger("BotHabitCatalog")


class HabitCatalog:
    """Просмотр и управление привычками через inline-кнопки."""

    def __init__(self, storage: HabitStorage, sessions: SessionStore):
        self.storage = storage
        self.sessions = sessions

    async def show_list(self, actor: Actor, responder: Responder, edit: bool = False) -> None:
        """
        Показывает список привычек.

        Args:
            actor (Actor): Пользователь.
            responder (Responder): Канал ответа.
            edit (bool): Редактировать текущее сообщение (кнопка "Назад") вместо отправки нового.
        """
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await responder.send(get_text("need_start", actor.locale))
            return

        habits = await self.storage.list_habits(user.id)

        if not habits:
            text, keyboard = get_text("no_habits", actor.locale), None
        else:
            text, keyboard = get_text("select_habit_to_view", actor.locale), get_habits_list_keyboard(habits)

        if edit:
            await responder.edit(text, keyboard)
            await responder.notify()
        else:
            await responder.send(text, keyboard)

    async def show_detail(self, actor: Actor, habit_id: int, responder: Responder) -> None:
        """Карточка привычки."""
        loaded = await self._load(actor, habit_id, responder)

        if loaded is None:
            return

        _, habit = loaded
        await responder.edit(await self._detail_text(actor, habit), get_habit_detail_keyboard(habit, actor.locale))
        await responder.notify()

    async def set_enabled(self, actor: Actor, habit_id: int, enabled: bool, responder: Responder) -> None:
        """Включает или выключает привычку и обновляет карточку."""
        loaded = await self._load(actor, habit_id, responder)

        if loaded is None:
            return

        user, _ = loaded
        habit = await self.storage.set_habit_enabled(user.id, habit_id, enabled)

        if habit is None:
            await responder.notify(get_text("habit_not_found", actor.locale), alert=True)
            return

        await responder.edit(await self._detail_text(actor, habit), get_habit_detail_keyboard(habit, actor.locale))
        await responder.notify(get_text("habit_enabled" if enabled else "habit_disabled", actor.locale))

    async def request_removal(self, actor: Actor, habit_id: int, responder: Responder) -> None:
        """Первое нажатие "Удалить": запрашивает подтверждение."""
        loaded = await self._load(actor, habit_id, responder)

        if loaded is None:
            return

        _, habit = loaded
        await responder.edit(
            get_text("confirm_remove", actor.locale, name=escape(habit.name)),
            get_habit_remove_confirmation_keyboard(habit_id, actor.locale),
        )
        await responder.notify()

    async def remove(self, actor: Actor, habit_id: int, responder: Responder) -> None:
        """
        Удаляет привычку вместе с отметками.

        Незавершенный диалог, относящийся к этой привычке, завершается.
        """
        loaded = await self._load(actor, habit_id, responder)

        if loaded is None:
            return

        user, habit = loaded
        removed = await self.storage.delete_habit(user.id, habit_id)

        if removed is None:
            await responder.notify(get_text("habit_not_found", actor.locale), alert=True)
            return

        if refers_to_habit(await self.sessions.get_pending(actor.telegram_id), habit_id):
            await self.sessions.clear_pending(actor.telegram_id)

        log.info(f"Пользователь {actor.telegram_id} удалил привычку ID: {habit_id} ({removed} отметок).")
        await responder.edit(get_text("habit_removed", actor.locale, name=escape(habit.name), count=removed))
        await responder.notify()

    async def _load(
        self, actor: Actor, habit_id: int, responder: Responder
    ) -> tuple[UserSchemaRead, HabitSchemaRead] | None:
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await responder.notify(get_text("need_start", actor.locale), alert=True)
            return None

        habit = await self.storage.get_habit(user.id, habit_id)

        if habit is None:
            log.warning(f"Пользователь {actor.telegram_id}: привычка {habit_id} не найдена.")
            await responder.notify(get_text("habit_not_found", actor.locale), alert=True)
            return None

        return user, habit

    async def _detail_text(self, actor: Actor, habit: HabitSchemaRead) -> str:
        completions = await self.storage.list_completions([habit.id])
        total = await self.storage.count_completions(habit.id)
        not_set = get_text("not_set", actor.locale)

        # Отметки отсортированы от новых к старым
        last_logged = format_day(utc_day(completions[0].timestamp)) if completions else get_text("never", actor.locale)
        status = get_text("status_enabled" if habit.enabled else "status_disabled", actor.locale)

        return get_text(
            "habit_detail",
            actor.locale,
            name=escape(habit.name),
            status=status,
            created=format_day(utc_day(habit.created_at)),
            last_logged=last_logged,
            total=total,
            monthly=habit.target_per_month or not_set,
            yearly=habit.target_per_year or not_set,
        )
