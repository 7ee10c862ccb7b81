"""
Сценарий отметки выполнения привычки.

Вход: кнопка привычки (-> выбор даты -> сегодня или своя дата) либо название текстом
(в ответ на список или аргументом команды /log_habit), которое сразу отмечает сегодняшний день.
Все пути сходятся в одной функции записи с проверками существования привычки и дубля за день.
"""

from datetime import date, datetime
from html import escape
from typing import Callable

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.keyboards.inline import get_date_mode_keyboard, get_log_habit_keyboard
from habit_pulse.bot.services.responder import Responder
from habit_pulse.bot.session.pending import (
    AwaitingCustomLogDate,
    AwaitingHabitLogSelection,
    AwaitingLogHabitName,
)
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.date_utils import (
    ImpossibleDate,
    InvalidDateFormat,
    format_day,
    is_in_month,
    parse_day_month_year,
    start_of_day,
    utc_day,
    utc_now,
)
from habit_pulse.core_shared.exceptions import DuplicateCompletionException, NotFoundException
from habit_pulse.core_shared.logging_setup import setup_logger
from habit_pulse.storage import HabitStorage
from habit_pulse.storage.schemas import UserSchemaRead

log = setup_logger("BotHabitLogging")


class HabitLoggingFlow:
    """Отметка выполнения привычки за сегодня или за прошедший день."""

    def __init__(self, storage: HabitStorage, sessions: SessionStore, clock: Callable[[], datetime] = utc_now):
        self.storage = storage
        self.sessions = sessions
        self.clock = clock

    async def start(self, actor: Actor, responder: Responder, habit_name: str | None = None) -> None:
        """
        Команда /log_habit.

        С аргументом (/log_habit Run) сразу отмечает привычку за сегодня.
        Без аргумента показывает включенные привычки и ждет нажатия кнопки или названия.
        """
        await self.sessions.clear_pending(actor.telegram_id)
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await responder.send(get_text("need_start", actor.locale))
            return

        if habit_name and habit_name.strip():
            await self._log_by_name(actor, user, habit_name, responder)
            return

        habits = await self.storage.list_habits(user.id, enabled_only=True)

        if not habits:
            await responder.send(get_text("no_enabled_habits", actor.locale))
            return

        await self.sessions.set_pending(actor.telegram_id, AwaitingLogHabitName())
        await responder.send(get_text("select_habit_to_log", actor.locale), get_log_habit_keyboard(habits))

    async def on_habit_name(self, actor: Actor, text: str, responder: Responder) -> None:
        """Название привычки, введенное текстом в ответ на список."""
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("need_start", actor.locale))
            return

        await self._log_by_name(actor, user, text, responder)

    async def select_habit(self, actor: Actor, habit_id: int, responder: Responder) -> None:
        """Нажатие кнопки привычки: предлагает выбрать дату."""
        user = await self.storage.get_user(actor.telegram_id)
        habit = await self.storage.get_habit(user.id, habit_id) if user else None

        if habit is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.notify(get_text("habit_not_found", actor.locale), alert=True)
            return

        await self.sessions.set_pending(actor.telegram_id, AwaitingHabitLogSelection(habit_id=habit_id))
        await responder.edit(
            get_text("choose_date_mode", actor.locale, name=escape(habit.name)),
            get_date_mode_keyboard(habit_id, actor.locale),
        )
        await responder.notify()

    async def log_today(self, actor: Actor, habit_id: int, responder: Responder) -> None:
        """Кнопка "Сегодня"."""
        await responder.notify()
        user = await self._resolve_user(actor, responder)

        if user is not None:
            await self._commit(actor, user, habit_id, utc_day(self.clock()), responder)

    async def request_custom_date(self, actor: Actor, habit_id: int, responder: Responder) -> None:
        """Кнопка "Другая дата": ждет дату текстом."""
        user = await self.storage.get_user(actor.telegram_id)
        habit = await self.storage.get_habit(user.id, habit_id) if user else None

        if habit is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.notify(get_text("habit_not_found", actor.locale), alert=True)
            return

        await self.sessions.set_pending(actor.telegram_id, AwaitingCustomLogDate(habit_id=habit_id))
        await responder.edit(get_text("ask_custom_date", actor.locale, name=escape(habit.name)))
        await responder.notify()

    async def on_custom_date(
        self,
        actor: Actor,
        pending: AwaitingCustomLogDate | AwaitingHabitLogSelection,
        text: str,
        responder: Responder,
    ) -> None:
        """
        Дата выполнения, введенная текстом (ДД.ММ.ГГГГ).

        Некорректная, несуществующая или будущая дата - подсказка без смены состояния.
        """
        try:
            day = parse_day_month_year(text)
        except ImpossibleDate:
            await responder.send(get_text("date_impossible", actor.locale))
            return
        except InvalidDateFormat:
            await responder.send(get_text("date_invalid_format", actor.locale))
            return

        if day > utc_day(self.clock()):
            await responder.send(get_text("date_in_future", actor.locale))
            return

        user = await self._resolve_user(actor, responder)

        if user is not None:
            await self._commit(actor, user, pending.habit_id, day, responder)

    async def _resolve_user(self, actor: Actor, responder: Responder) -> UserSchemaRead | None:
        user = await self.storage.get_user(actor.telegram_id)

        if user is None:
            await self.sessions.clear_pending(actor.telegram_id)
            await responder.send(get_text("need_start", actor.locale))

        return user

    async def _log_by_name(self, actor: Actor, user: UserSchemaRead, text: str, responder: Responder) -> None:
        habit = await self.storage.find_habit_by_name(user.id, text)

        if habit is None or not habit.enabled:
            # Остаемся в ожидании названия
            await self.sessions.set_pending(actor.telegram_id, AwaitingLogHabitName())
            await responder.send(get_text("log_habit_unknown_name", actor.locale, name=escape(text.strip())))
            return

        await self._commit(actor, user, habit.id, utc_day(self.clock()), responder)

    async def _commit(self, actor: Actor, user: UserSchemaRead, habit_id: int, day: date, responder: Responder) -> None:
        """
        Записывает выполнение за день и завершает диалог.

        Перед записью заново проверяет, что привычка существует, включена и за этот день еще не отмечена.
        Ограничение уникальности в БД - окончательная проверка при параллельных нажатиях.
        """
        await self.sessions.clear_pending(actor.telegram_id)
        habit = await self.storage.get_habit(user.id, habit_id)

        if habit is None:
            log.warning(f"Пользователь {actor.telegram_id}: привычка {habit_id} не найдена при отметке.")
            await responder.send(get_text("habit_not_found", actor.locale))
            return

        if not habit.enabled:
            log.warning(f"Пользователь {actor.telegram_id}: привычка {habit_id} выключена, отметка отклонена.")
            await responder.send(get_text("habit_log_disabled", actor.locale, name=escape(habit.name)))
            return

        already_logged = get_text("already_logged", actor.locale, name=escape(habit.name), date=format_day(day))

        if await self.storage.has_completion_on(habit_id, day):
            log.warning(f"Пользователь {actor.telegram_id}: привычка {habit_id} уже отмечена за {day}.")
            await responder.send(already_logged)
            return

        now = self.clock()
        # Сегодняшняя отметка хранит фактическое время, прошедшие дни - начало дня
        timestamp = now if day == utc_day(now) else start_of_day(day)

        try:
            await self.storage.add_completion(user.id, habit_id, timestamp)
        except DuplicateCompletionException:
            await responder.send(already_logged)
            return
        except NotFoundException:
            await responder.send(get_text("habit_not_found", actor.locale))
            return

        completions = await self.storage.list_completions([habit_id])
        month_total = sum(1 for completion in completions if is_in_month(completion.timestamp, day.year, day.month))

        log.info(f"Пользователь {actor.telegram_id} отметил привычку ID: {habit_id} за {day}.")
        await responder.send(
            get_text(
                "habit_logged",
                actor.locale,
                name=escape(habit.name),
                date=format_day(day),
                month_total=month_total,
            )
        )
