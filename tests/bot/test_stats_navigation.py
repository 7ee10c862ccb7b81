from datetime import datetime

import pytest

from habit_pulse.bot.core.enums import StatsNav
from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.keyboards.callbacks import StatsNavCallback
from habit_pulse.bot.services.responder import EditOutcome
from habit_pulse.bot.session.store import StatsViewState
from habit_pulse.bot.stats.calendar_view import COMPLETION_MARK
from habit_pulse.core_shared.date_utils import UTC

pytestmark = pytest.mark.asyncio


def nav_targets(keyboard) -> tuple[str, str]:
    """callback_data кнопок "назад" и "вперед"."""
    prev_button, _, next_button = keyboard.inline_keyboard[0]
    return prev_button.callback_data, next_button.callback_data


async def test_stats_without_habits(stats_navigator, responder, actor, user):
    """Тест: нет привычек - подсказка."""
    await stats_navigator.open(actor, responder)

    assert responder.last_text == get_text("no_habits", actor.locale)


async def test_stats_with_several_habits_asks_selection(stats_navigator, storage, responder, actor, user):
    """Тест: несколько привычек - выбор привычки."""
    await storage.create_habit(user.id, "Run")
    await storage.create_habit(user.id, "Read")

    await stats_navigator.open(actor, responder)

    text, keyboard = responder.sent[-1]
    assert text == get_text("stats_select_habit", actor.locale)
    assert len(keyboard.inline_keyboard) == 3


async def test_stats_with_single_habit_shows_current_month(stats_navigator, storage, sessions, responder, actor, user):
    """Тест: одна привычка - сразу календарь текущего месяца с итогами и целями."""
    habit = await storage.create_habit(user.id, "Run", target_per_month=10)
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 3, 7, 0, tzinfo=UTC))
    await storage.add_completion(user.id, habit.id, datetime(2026, 1, 3, 7, 0, tzinfo=UTC))

    await stats_navigator.open(actor, responder)

    text, keyboard = responder.sent[-1]
    assert text.startswith(get_text("stats_title", actor.locale))
    assert "<b>Run:</b>" in text
    assert "🗓 Mar 2026" in text
    assert f" 1  2 {COMPLETION_MARK}  4" in text
    assert get_text("stats_total_month", actor.locale, total="1/10") in text
    assert get_text("stats_total_year", actor.locale, total="2") in text

    assert await sessions.get_stats_view(actor.telegram_id) == StatsViewState(year=2026, month=3)
    assert nav_targets(keyboard) == (
        StatsNavCallback(action=StatsNav.JUMP, year=2026, month=2).pack(),
        StatsNavCallback(action=StatsNav.JUMP, year=2026, month=4).pack(),
    )


async def test_habit_without_logs(stats_navigator, storage, responder, actor, user):
    """Тест: привычка без отметок."""
    await storage.create_habit(user.id, "Run")

    await stats_navigator.open(actor, responder)

    assert get_text("stats_no_logs", actor.locale) in responder.last_text


async def test_navigation_across_year_boundary(stats_navigator, storage, sessions, responder, actor, user):
    """
    Сценарий:
    1. Переход к январю 2026 -> кнопка "назад" ведет в декабрь 2025.
    2. Переход к декабрю 2025 -> кнопка "вперед" ведет в январь 2026.
    """
    await storage.create_habit(user.id, "Run")

    await stats_navigator.jump(actor, 2026, 1, responder)

    text, keyboard = responder.edited[-1]
    assert "🗓" not in text  # отметок нет, сетка не строится
    assert nav_targets(keyboard)[0] == StatsNavCallback(action=StatsNav.JUMP, year=2025, month=12).pack()

    await stats_navigator.jump(actor, 2025, 12, responder)

    assert await sessions.get_stats_view(actor.telegram_id) == StatsViewState(year=2025, month=12)
    assert nav_targets(responder.edited[-1][1])[1] == StatsNavCallback(action=StatsNav.JUMP, year=2026, month=1).pack()


async def test_today_returns_to_current_month(stats_navigator, storage, sessions, responder, actor, user):
    """Тест: "сегодня" возвращает к текущему месяцу с любой глубины и сохраняет выбор привычки."""
    habit = await storage.create_habit(user.id, "Run")
    await storage.create_habit(user.id, "Read")
    await sessions.set_stats_view(actor.telegram_id, StatsViewState(year=2019, month=7, habit_id=habit.id))

    await stats_navigator.show_today(actor, responder)

    assert await sessions.get_stats_view(actor.telegram_id) == StatsViewState(year=2026, month=3, habit_id=habit.id)


async def test_select_habit_keeps_month(stats_navigator, storage, sessions, responder, actor, user):
    """Тест: выбор привычки сохраняет текущий месяц и показывает только ее."""
    run = await storage.create_habit(user.id, "Run")
    await storage.create_habit(user.id, "Read")
    await sessions.set_stats_view(actor.telegram_id, StatsViewState(year=2025, month=11))

    await stats_navigator.select_habit(actor, run.id, responder)

    assert await sessions.get_stats_view(actor.telegram_id) == StatsViewState(year=2025, month=11, habit_id=run.id)
    text = responder.edited[-1][0]
    assert "<b>Run:</b>" in text
    assert "<b>Read:</b>" not in text


async def test_removed_habit_falls_back_to_all(stats_navigator, storage, sessions, responder, actor, user):
    """Тест: выбранная привычка удалена - показываются все, выбор сбрасывается."""
    run = await storage.create_habit(user.id, "Run")
    await storage.create_habit(user.id, "Read")
    await stats_navigator.select_habit(actor, run.id, responder)

    await storage.delete_habit(user.id, run.id)
    await stats_navigator.jump(actor, 2026, 2, responder)

    assert (await sessions.get_stats_view(actor.telegram_id)).habit_id is None
    assert "<b>Read:</b>" in responder.edited[-1][0]


@pytest.mark.parametrize(
    ("outcome", "expected"),
    [
        (EditOutcome.EDITED, (None, False)),
        (EditOutcome.UNCHANGED, ("stats_not_modified", False)),
        (EditOutcome.FAILED, ("stats_update_failed", False)),
    ],
)
async def test_edit_outcome_is_reported(stats_navigator, storage, responder, actor, user, outcome, expected):
    """Тест: результат редактирования сообщается уведомлением, "не изменилось" - не ошибка."""
    await storage.create_habit(user.id, "Run")
    responder.edit_outcome = outcome

    await stats_navigator.show_today(actor, responder)

    key, alert = expected
    assert responder.notifications == [(get_text(key, actor.locale) if key else None, alert)]


async def test_invalid_month_is_rejected(stats_navigator, storage, responder, actor, user):
    """Тест: некорректный месяц навигации не меняет сообщение."""
    await storage.create_habit(user.id, "Run")

    await stats_navigator.jump(actor, 2026, 13, responder)

    assert responder.edited == []
    assert responder.notifications == [(get_text("stats_update_failed", actor.locale), False)]


async def test_navigation_without_habits(stats_navigator, responder, actor, user):
    """Тест: навигация, когда привычек уже нет."""
    await stats_navigator.jump(actor, 2026, 2, responder)

    assert responder.notifications == [(get_text("no_habits", actor.locale), True)]


async def test_habit_name_is_escaped(stats_navigator, storage, responder, actor, user):
    """Тест: название экранируется в HTML."""
    await storage.create_habit(user.id, "Tea & <coffee>")

    await stats_navigator.open(actor, responder)

    assert "<b>Tea &amp; &lt;coffee&gt;:</b>" in responder.last_text
