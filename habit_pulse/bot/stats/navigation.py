"""
Сообщение статистики и навигация по месяцам.

Позиция пользователя (месяц и выбранная привычка) хранится в SessionStore.
Любое действие (выбор привычки, переход к месяцу, "сегодня") перестраивает сообщение целиком
и редактирует уже показанное сообщение.
"""

from datetime import datetime
from html import escape
from typing import Callable

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.i18n import Locale, get_text
from habit_pulse.bot.keyboards.inline import get_stats_habit_selection_keyboard, get_stats_navigation_keyboard
from habit_pulse.bot.services.responder import EditOutcome, Responder
from habit_pulse.bot.session.store import SessionStore, StatsViewState
from habit_pulse.bot.stats.calendar_view import render_month_grid
from habit_pulse.core_shared.date_utils import utc_now
from habit_pulse.core_shared.logging_setup import setup_logger
from habit_pulse.storage import HabitStorage
from habit_pulse.storage.schemas import HabitSchemaRead

log = setup_logger("BotStats")

SEPARATOR = "─────"


def _with_target(total: int, target: int | None) -> str:
    return f"{total}/{target}" if target else str(total)


class StatsNavigator:
    """Команда /stats и обработка кнопок навигации статистики."""

    def __init__(self, storage: HabitStorage, sessions: SessionStore, clock: Callable[[], datetime] = utc_now):
        self.storage = storage
        self.sessions = sessions
        self.clock = clock

    async def open(self, actor: Actor, responder: Responder) -> None:
        """
        Команда /stats.

        Нет привычек - подсказка, одна привычка - сразу статистика,
        несколько - выбор привычки с кнопкой "Все привычки".
        """
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await responder.send(get_text("need_start", actor.locale))
            return

        habits = await self.storage.list_habits(user.id)

        if not habits:
            await responder.send(get_text("no_habits", actor.locale))
            return

        if len(habits) > 1:
            await responder.send(
                get_text("stats_select_habit", actor.locale),
                get_stats_habit_selection_keyboard(habits, actor.locale),
            )
            return

        state = await self.sessions.get_stats_view(actor.telegram_id)
        state = StatsViewState(year=state.year, month=state.month)
        await self.sessions.set_stats_view(actor.telegram_id, state)

        text = await self.render(actor, habits)
        await responder.send(text, get_stats_navigation_keyboard(state.year, state.month, actor.locale))

    async def select_habit(self, actor: Actor, habit_id: int | None, responder: Responder) -> None:
        """Выбор привычки (None - все привычки) с сохранением текущего месяца."""
        habits = await self._load_habits(actor, responder)

        if habits is None:
            return

        state = await self.sessions.get_stats_view(actor.telegram_id)
        await self.sessions.set_stats_view(
            actor.telegram_id, StatsViewState(year=state.year, month=state.month, habit_id=habit_id)
        )

        await self._refresh(actor, habits, responder)

    async def jump(self, actor: Actor, year: int, month: int, responder: Responder) -> None:
        """Переход к явно указанному месяцу. Повторное нажатие той же кнопки ничего не меняет."""
        if not 1 <= month <= 12:
            log.warning(f"Пользователь {actor.telegram_id}: некорректный месяц навигации {year}-{month}.")
            await responder.notify(get_text("stats_update_failed", actor.locale))
            return

        habits = await self._load_habits(actor, responder)

        if habits is None:
            return

        state = await self.sessions.get_stats_view(actor.telegram_id)
        await self.sessions.set_stats_view(
            actor.telegram_id, StatsViewState(year=year, month=month, habit_id=state.habit_id)
        )

        await self._refresh(actor, habits, responder)

    async def show_today(self, actor: Actor, responder: Responder) -> None:
        """Возврат к текущему месяцу с любой глубины навигации."""
        now = self.clock()
        await self.jump(actor, now.year, now.month, responder)

    async def render(self, actor: Actor, habits: list[HabitSchemaRead]) -> str:
        """
        Строит текст статистики для текущей позиции пользователя.

        Если выбранной привычки больше нет, показываются все привычки,
        а выбор в состоянии сбрасывается.

        Args:
            actor (Actor): Пользователь.
            habits (list[HabitSchemaRead]): Все привычки пользователя.

        Returns:
            str: HTML-текст сообщения.
        """
        state = await self.sessions.get_stats_view(actor.telegram_id)
        selected = habits

        if state.habit_id is not None:
            selected = [habit for habit in habits if habit.id == state.habit_id]

            if not selected:
                log.warning(f"Пользователь {actor.telegram_id}: привычка {state.habit_id} не найдена, показываем все.")
                state = StatsViewState(year=state.year, month=state.month)
                await self.sessions.set_stats_view(actor.telegram_id, state)
                selected = habits

        lines = [get_text("stats_title", actor.locale), ""]

        for habit in selected:
            lines.extend(await self._render_habit(habit, state, actor.locale))

        return "\n".join(lines)

    async def _render_habit(self, habit: HabitSchemaRead, state: StatsViewState, locale: Locale) -> list[str]:
        lines = [f"<b>{escape(habit.name)}:</b>"]
        completions = await self.storage.list_completions([habit.id])

        if not completions:
            lines.extend([get_text("stats_no_logs", locale), SEPARATOR, ""])
            return lines

        view = render_month_grid(
            (completion.timestamp for completion in completions), state.year, state.month, locale
        )

        month_total = _with_target(view.month_total, habit.target_per_month)
        year_total = _with_target(view.year_total, habit.target_per_year)

        lines.extend(
            [
                f"<pre>{view.grid}</pre>",
                f"<b>{get_text('stats_total_month', locale, total=month_total)}</b>",
                f"<b>{get_text('stats_total_year', locale, total=year_total)}</b>",
                SEPARATOR,
                "",
            ]
        )
        return lines

    async def _load_habits(self, actor: Actor, responder: Responder) -> list[HabitSchemaRead] | None:
        """Загружает пользователя и его привычки, при отсутствии отвечает уведомлением."""
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await responder.notify(get_text("need_start", actor.locale), alert=True)
            return None

        habits = await self.storage.list_habits(user.id)

        if not habits:
            await responder.notify(get_text("no_habits", actor.locale), alert=True)
            return None

        return habits

    async def _refresh(self, actor: Actor, habits: list[HabitSchemaRead], responder: Responder) -> None:
        text = await self.render(actor, habits)
        state = await self.sessions.get_stats_view(actor.telegram_id)

        outcome = await responder.edit(text, get_stats_navigation_keyboard(state.year, state.month, actor.locale))

        match outcome:
            case EditOutcome.UNCHANGED:
                await responder.notify(get_text("stats_not_modified", actor.locale))
            case EditOutcome.FAILED:
                await responder.notify(get_text("stats_update_failed", actor.locale))
            case _:
                await responder.notify()
