from datetime import datetime

import pytest

from habit_pulse.bot.core.i18n import get_text
from habit_pulse.bot.keyboards.callbacks import HabitViewCallback
from habit_pulse.bot.session.pending import AwaitingCustomLogDate, AwaitingHabitName
from habit_pulse.core_shared.date_utils import UTC

pytestmark = pytest.mark.asyncio


async def test_show_empty_list(habit_catalog, responder, actor, user):
    """Тест: пустой список привычек."""
    await habit_catalog.show_list(actor, responder)

    assert responder.sent == [(get_text("no_habits", actor.locale), None)]


async def test_show_list(habit_catalog, storage, responder, actor, user):
    """Тест: список привычек с кнопками карточек."""
    run = await storage.create_habit(user.id, "Run")

    await habit_catalog.show_list(actor, responder)

    text, keyboard = responder.sent[-1]
    assert text == get_text("select_habit_to_view", actor.locale)
    assert keyboard.inline_keyboard[0][0].callback_data == HabitViewCallback(habit_id=run.id).pack()


async def test_back_to_list_edits_message(habit_catalog, storage, responder, actor, user):
    """Тест: кнопка "Назад" редактирует сообщение."""
    await storage.create_habit(user.id, "Run")

    await habit_catalog.show_list(actor, responder, edit=True)

    assert responder.sent == []
    assert len(responder.edited) == 1


async def test_detail_shows_last_logged(habit_catalog, storage, responder, actor, user, now):
    """Тест карточки: дата создания, последняя отметка, число отметок и цели."""
    habit = await storage.create_habit(user.id, "Run", target_per_year=100)
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 1, 9, 0, tzinfo=UTC))
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 12, 9, 0, tzinfo=UTC))

    await habit_catalog.show_detail(actor, habit.id, responder)

    assert responder.edited[-1][0] == get_text(
        "habit_detail",
        actor.locale,
        name="Run",
        status=get_text("status_enabled", actor.locale),
        created="15.03.2026",
        last_logged="12.03.2026",
        total=2,
        monthly=get_text("not_set", actor.locale),
        yearly=100,
    )


async def test_disable_habit(habit_catalog, storage, responder, actor, user):
    """Тест: выключение привычки обновляет карточку."""
    habit = await storage.create_habit(user.id, "Run")

    await habit_catalog.set_enabled(actor, habit.id, False, responder)

    assert (await storage.get_habit(user.id, habit.id)).enabled is False
    assert get_text("status_disabled", actor.locale) in responder.edited[-1][0]
    assert responder.notifications[-1] == (get_text("habit_disabled", actor.locale), False)


async def test_remove_requires_confirmation(habit_catalog, storage, responder, actor, user):
    """Тест: первое нажатие "Удалить" только спрашивает подтверждение."""
    habit = await storage.create_habit(user.id, "Run")

    await habit_catalog.request_removal(actor, habit.id, responder)

    assert responder.edited[-1][0] == get_text("confirm_remove", actor.locale, name="Run")
    assert await storage.get_habit(user.id, habit.id) is not None


async def test_remove_habit_with_logs(habit_catalog, storage, sessions, responder, actor, user):
    """Тест: удаление привычки удаляет ее отметки и завершает связанный диалог."""
    habit = await storage.create_habit(user.id, "Run")
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 1, 9, 0, tzinfo=UTC))
    await storage.add_completion(user.id, habit.id, datetime(2026, 3, 2, 9, 0, tzinfo=UTC))
    await sessions.set_pending(actor.telegram_id, AwaitingCustomLogDate(habit_id=habit.id))

    await habit_catalog.remove(actor, habit.id, responder)

    assert await storage.get_habit(user.id, habit.id) is None
    assert await storage.count_completions(habit.id) == 0
    assert responder.edited[-1][0] == get_text("habit_removed", actor.locale, name="Run", count=2)
    assert await sessions.get_pending(actor.telegram_id) is None


async def test_remove_keeps_unrelated_dialog(habit_catalog, storage, sessions, responder, actor, user):
    """Тест: диалог, не связанный с удаляемой привычкой, сохраняется."""
    habit = await storage.create_habit(user.id, "Run")
    await sessions.set_pending(actor.telegram_id, AwaitingHabitName())

    await habit_catalog.remove(actor, habit.id, responder)

    assert await sessions.get_pending(actor.telegram_id) == AwaitingHabitName()


async def test_foreign_habit_is_not_found(habit_catalog, storage, responder, actor, user):
    """Тест: чужая привычка недоступна."""
    other = await storage.create_habit(user.id + 1000, "Run")

    await habit_catalog.show_detail(actor, other.id, responder)

    assert responder.edited == []
    assert responder.notifications == [(get_text("habit_not_found", actor.locale), True)]
