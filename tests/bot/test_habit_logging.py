from datetime import date, datetime

import pytest

from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.keyboards.callbacks import LogHabitCallback
from habit_pulse.bot.session.pending import AwaitingCustomLogDate, AwaitingHabitLogSelection, AwaitingLogHabitName
from habit_pulse.core_shared.date_utils import UTC, start_of_day

pytestmark = pytest.mark.asyncio


async def test_log_habit_shows_enabled_habits(logging_flow, storage, sessions, responder, actor, user):
    """Тест: /log_habit показывает только включенные привычки."""
    run = await storage.create_habit(user.id, "Run")
    read = await storage.create_habit(user.id, "Read")
    await storage.set_habit_enabled(user.id, read.id, False)

    await logging_flow.start(actor, responder)

    text, keyboard = responder.sent[-1]
    assert text == get_text("select_habit_to_log", actor.locale)
    assert [row[0].callback_data for row in keyboard.inline_keyboard] == [LogHabitCallback(habit_id=run.id).pack()]
    assert await sessions.get_pending(actor.telegram_id) == AwaitingLogHabitName()


async def test_log_habit_without_enabled_habits(logging_flow, sessions, responder, actor, user):
    """Тест: нет включенных привычек - подсказка без диалога."""
    await logging_flow.start(actor, responder)

    assert responder.last_text == get_text("no_enabled_habits", actor.locale)
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_log_by_typed_name(logging_flow, conversation, storage, sessions, responder, actor, user, now):
    """Тест: название, введенное текстом, отмечает привычку сегодняшним днем."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.start(actor, responder)
    await conversation.route(actor, " run ", responder)

    completions = await storage.list_completions([habit.id])
    assert len(completions) == 1
    assert completions[0].timestamp == now

    assert responder.last_text == get_text(
        "habit_logged", actor.locale, name="Run", date="15.03.2026", month_total=1
    )
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_log_by_command_argument(logging_flow, storage, responder, actor, user):
    """Тест: /log_habit Run сразу отмечает привычку."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.start(actor, responder, habit_name="Run")

    assert await storage.count_completions(habit.id) == 1


async def test_unknown_or_disabled_name_keeps_waiting(
    logging_flow, conversation, storage, sessions, responder, actor, user
):
    """Тест: неизвестное или выключенное название - подсказка, ожидание названия продолжается."""
    habit = await storage.create_habit(user.id, "Run")
    await storage.create_habit(user.id, "Swim")
    await storage.set_habit_enabled(user.id, habit.id, False)

    await logging_flow.start(actor, responder)

    for text in ("Walk", "Run"):
        await conversation.route(actor, text, responder)

        assert responder.last_text == get_text("log_habit_unknown_name", actor.locale, name=text)
        assert await sessions.get_pending(actor.telegram_id) == AwaitingLogHabitName()

    assert await storage.count_completions(habit.id) == 0


async def test_log_today_twice(logging_flow, storage, responder, actor, user):
    """Тест: повторная отметка за тот же день отклоняется."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.select_habit(actor, habit.id, responder)
    await logging_flow.log_today(actor, habit.id, responder)
    await logging_flow.log_today(actor, habit.id, responder)

    assert await storage.count_completions(habit.id) == 1
    assert responder.last_text == get_text("already_logged", actor.locale, name="Run", date="15.03.2026")


async def test_select_habit_asks_for_date(logging_flow, storage, sessions, responder, actor, user):
    """Тест: кнопка привычки предлагает выбрать дату."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.select_habit(actor, habit.id, responder)

    assert await sessions.get_pending(actor.telegram_id) == AwaitingHabitLogSelection(habit_id=habit.id)
    assert responder.edited[-1][0] == get_text("choose_date_mode", actor.locale, name="Run")
    assert responder.notifications[-1] == (None, False)


async def test_select_removed_habit(logging_flow, sessions, responder, actor, user):
    """Тест: кнопка удаленной привычки - уведомление, диалог завершен."""
    await logging_flow.select_habit(actor, 999, responder)

    assert responder.notifications == [(get_text("habit_not_found", actor.locale), True)]
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_log_custom_past_date(logging_flow, conversation, storage, sessions, responder, actor, user):
    """Тест: прошедшая дата записывается началом дня UTC."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.request_custom_date(actor, habit.id, responder)
    assert await sessions.get_pending(actor.telegram_id) == AwaitingCustomLogDate(habit_id=habit.id)

    await conversation.route(actor, "10.03.2026", responder)

    completions = await storage.list_completions([habit.id])
    assert completions[0].timestamp == start_of_day(date(2026, 3, 10))
    assert completions[0].completed_on == date(2026, 3, 10)
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_custom_date_equal_to_today_keeps_time(logging_flow, conversation, storage, responder, actor, user, now):
    """Тест: дата, равная сегодняшней, записывается текущим моментом."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.request_custom_date(actor, habit.id, responder)
    await conversation.route(actor, "15.03.2026", responder)

    assert (await storage.list_completions([habit.id]))[0].timestamp == now


@pytest.mark.parametrize(
    ("text", "key"),
    [
        ("2026-03-10", "date_invalid_format"),
        ("31.02.2026", "date_impossible"),
        ("16.03.2026", "date_in_future"),
    ],
)
async def test_bad_custom_date_keeps_waiting(
    logging_flow, conversation, storage, sessions, responder, actor, user, text, key
):
    """Тест: некорректная, несуществующая или будущая дата - подсказка без смены состояния."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.request_custom_date(actor, habit.id, responder)
    await conversation.route(actor, text, responder)

    assert responder.last_text == get_text(key, actor.locale)
    assert await sessions.get_pending(actor.telegram_id) == AwaitingCustomLogDate(habit_id=habit.id)
    assert await storage.count_completions(habit.id) == 0


async def test_date_typed_after_habit_selection(logging_flow, conversation, storage, responder, actor, user):
    """Тест: дата, введенная текстом вместо нажатия кнопки даты, принимается."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.select_habit(actor, habit.id, responder)
    await conversation.route(actor, "01.03.2026", responder)

    assert (await storage.list_completions([habit.id]))[0].completed_on == date(2026, 3, 1)


async def test_month_total_counts_only_logged_month(logging_flow, storage, responder, actor, user):
    """Тест: итог в ответе считается за месяц отмеченной даты."""
    habit = await storage.create_habit(user.id, "Run")
    await storage.add_completion(user.id, habit.id, datetime(2026, 2, 27, 9, 0, tzinfo=UTC))
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 2, 9, 0, tzinfo=UTC))

    await logging_flow.log_today(actor, habit.id, responder)

    assert responder.last_text == get_text(
        "habit_logged", actor.locale, name="Run", date="15.03.2026", month_total=2
    )


async def test_log_requires_registration(logging_flow, responder, actor):
    """Тест: без /start отметка невозможна."""
    await logging_flow.start(actor, responder, habit_name="Run")

    assert responder.last_text == get_text("need_start", actor.locale)


async def test_custom_date_already_logged(logging_flow, conversation, storage, sessions, responder, actor, user):
    """Тест: прошедшая дата, за которую привычка уже отмечена, отклоняется и завершает диалог."""
    habit = await storage.create_habit(user.id, "Run")
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 10, 18, 0, tzinfo=UTC))

    await logging_flow.request_custom_date(actor, habit.id, responder)
    await conversation.route(actor, "10.03.2026", responder)

    assert responder.last_text == get_text("already_logged", actor.locale, name="Run", date="10.03.2026")
    assert await storage.count_completions(habit.id) == 1
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_february_30_is_impossible(logging_flow, conversation, storage, sessions, responder, actor, user):
    """Тест: 30.02.2026 - несуществующая дата, ожидание даты продолжается."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.request_custom_date(actor, habit.id, responder)
    await conversation.route(actor, "30.02.2026", responder)

    assert responder.last_text == get_text("date_impossible", actor.locale)
    assert await sessions.get_pending(actor.telegram_id) == AwaitingCustomLogDate(habit_id=habit.id)


async def test_stale_date_button_for_disabled_habit(logging_flow, storage, sessions, responder, actor, user):
    """Тест: кнопка "Сегодня" привычки, выключенной после выбора, не создает отметку."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.select_habit(actor, habit.id, responder)
    await storage.set_habit_enabled(user.id, habit.id, False)
    await logging_flow.log_today(actor, habit.id, responder)

    assert responder.last_text == get_text("habit_log_disabled", actor.locale, name="Run")
    assert await storage.count_completions(habit.id) == 0
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_custom_date_for_habit_disabled_meanwhile(
    logging_flow, conversation, storage, responder, actor, user
):
    """Тест: дата, введенная после выключения привычки, не создает отметку."""
    habit = await storage.create_habit(user.id, "Run")

    await logging_flow.request_custom_date(actor, habit.id, responder)
    await storage.set_habit_enabled(user.id, habit.id, False)
    await conversation.route(actor, "10.03.2026", responder)

    assert responder.last_text == get_text("habit_log_disabled", actor.locale, name="Run")
    assert await storage.count_completions(habit.id) == 0
