"""Обработчики статистики: /stats, выбор привычки и навигация по месяцам."""

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.enums import StatsNav
from habit_pulse.bot.handlers.common import identify
from habit_pulse.bot.keyboards.callbacks import HabitStatsCallback, StatsHabitCallback, StatsNavCallback
from habit_pulse.bot.services.responder import AiogramResponder
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.bot.stats.navigation import StatsNavigator

router = Router(name="stats_handlers")


@router.message(Command("stats"))
async def stats_command(message: Message, stats_navigator: StatsNavigator, sessions: SessionStore) -> None:
    actor = await identify(message)

    if actor is not None:
        await sessions.clear_pending(actor.telegram_id)
        await stats_navigator.open(actor, AiogramResponder(message))


@router.callback_query(StatsHabitCallback.filter())
async def stats_habit_callback(
    callback: CallbackQuery, callback_data: StatsHabitCallback, stats_navigator: StatsNavigator
) -> None:
    await stats_navigator.select_habit(
        Actor.from_telegram(callback.from_user), callback_data.habit_id, AiogramResponder(callback)
    )


@router.callback_query(HabitStatsCallback.filter())
async def habit_stats_callback(
    callback: CallbackQuery, callback_data: HabitStatsCallback, stats_navigator: StatsNavigator
) -> None:
    await stats_navigator.select_habit(
        Actor.from_telegram(callback.from_user), callback_data.habit_id, AiogramResponder(callback)
    )


@router.callback_query(StatsNavCallback.filter())
async def stats_nav_callback(
    callback: CallbackQuery, callback_data: StatsNavCallback, stats_navigator: StatsNavigator
) -> None:
    actor = Actor.from_telegram(callback.from_user)
    responder = AiogramResponder(callback)

    if callback_data.action == StatsNav.TODAY:
        await stats_navigator.show_today(actor, responder)
    else:
        await stats_navigator.jump(actor, callback_data.year, callback_data.month, responder)
