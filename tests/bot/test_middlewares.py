from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import CallbackQuery, Chat, Message, User

from habit_pulse.bot.core.i18n import Locale, get_text
from habit_pulse.bot.middlewares.dedup import RepeatedCallbackMiddleware
from habit_pulse.bot.middlewares.errors import ErrorBoundaryMiddleware
from habit_pulse.bot.session.pending import AwaitingHabitName, AwaitingMonthlyTarget
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.core_shared.date_utils import UTC

pytestmark = pytest.mark.asyncio

TG_USER = User(id=777, is_bot=False, first_name="Alex", language_code="uk")


def make_callback(data: str) -> CallbackQuery:
    return CallbackQuery(id="1", from_user=TG_USER, chat_instance="chat", data=data)


def make_message(text: str) -> Message:
    return Message(
        message_id=1,
        date=datetime(2026, 3, 15, tzinfo=UTC),
        chat=Chat(id=777, type="private"),
        from_user=TG_USER,
        text=text,
    )


class FailingHandler:
    """Обработчик, который меняет диалог (опционально) и падает."""

    def __init__(self, sessions: SessionStore, new_pending=None):
        self.sessions = sessions
        self.new_pending = new_pending

    async def __call__(self, event, data):
        if self.new_pending is not None:
            await self.sessions.set_pending(TG_USER.id, self.new_pending)
        raise RuntimeError("boom")


async def test_error_boundary_passes_result(sessions):
    """Тест: без ошибки результат обработчика возвращается как есть."""
    middleware = ErrorBoundaryMiddleware(sessions)

    async def handler(event, data):
        return "ok"

    assert await middleware(handler, make_message("hi"), {}) == "ok"


async def test_error_boundary_apologizes_on_callback(sessions):
    """Тест: ошибка при нажатии кнопки - извинение во всплывающем окне на языке пользователя."""
    middleware = ErrorBoundaryMiddleware(sessions)

    with patch.object(CallbackQuery, "answer", new_callable=AsyncMock) as answer:
        result = await middleware(FailingHandler(sessions), make_callback("log:5"), {})

    assert result is None
    answer.assert_awaited_once_with(get_text("error_generic", Locale.UK), show_alert=True)


async def test_error_boundary_resets_changed_dialog(sessions):
    """Тест: диалог, измененный до ошибки, сбрасывается."""
    await sessions.set_pending(TG_USER.id, AwaitingHabitName())
    middleware = ErrorBoundaryMiddleware(sessions)
    handler = FailingHandler(sessions, new_pending=AwaitingMonthlyTarget(habit_name="Run"))

    with patch.object(Message, "answer", new_callable=AsyncMock) as answer:
        await middleware(handler, make_message("Run"), {})

    assert await sessions.get_pending(TG_USER.id) is None
    answer.assert_awaited_once_with(get_text("error_generic", Locale.UK))


async def test_error_boundary_keeps_unchanged_dialog(sessions):
    """Тест: диалог, не измененный до ошибки, сохраняется."""
    await sessions.set_pending(TG_USER.id, AwaitingHabitName())
    middleware = ErrorBoundaryMiddleware(sessions)

    with patch.object(Message, "answer", new_callable=AsyncMock):
        await middleware(FailingHandler(sessions), make_message("Run"), {})

    assert await sessions.get_pending(TG_USER.id) == AwaitingHabitName()


async def test_repeated_target_button_is_dropped(clock):
    """Тест: повторное нажатие кнопки цели в пределах окна не доходит до обработчика."""
    sessions = SessionStore(MemoryStorage(), duplicate_window=60.0, clock=clock)
    middleware = RepeatedCallbackMiddleware(sessions, prefixes=("target",))
    handler = AsyncMock(return_value="handled")

    with patch.object(CallbackQuery, "answer", new_callable=AsyncMock) as answer:
        first = await middleware(handler, make_callback("target:5:month"), {})
        second = await middleware(handler, make_callback("target:5:month"), {})

    assert first == "handled"
    assert second is None
    assert handler.await_count == 1
    answer.assert_awaited_once_with(get_text("duplicate_action", Locale.UK))


async def test_unguarded_buttons_pass_through(clock):
    """Тест: кнопки без защиты от повторов обрабатываются всегда."""
    sessions = SessionStore(MemoryStorage(), duplicate_window=60.0, clock=clock)
    middleware = RepeatedCallbackMiddleware(sessions, prefixes=("target",))
    handler = AsyncMock(return_value="handled")

    # "targets" - другой префикс, совпадение только по началу строки не считается
    for data in ("log:5", "log:5", "targets:1"):
        assert await middleware(handler, make_callback(data), {}) == "handled"

    assert handler.await_count == 3
