"""
Состояние диалогов пользователей поверх FSM-хранилища aiogram.

Единственный владелец данных "на пользователя": незавершенный диалог
(состояние FSM и его поля), позиция в календаре статистики и последнее нажатие кнопки
(для подавления двойных нажатий). Все это лежит в данных FSM под ключом пользователя,
поэтому хранилище то же, что и у Dispatcher.
"""

import time
from datetime import datetime
from typing import Any, Callable

from aiogram.fsm.storage.base import BaseStorage, StorageKey
from aiogram.fsm.storage.memory import MemoryStorage
from pydantic import BaseModel, ConfigDict, Field

from habit_pulse.bot.session.pending import PendingInteraction, pending_fields, pending_from_fsm
from habit_pulse.core_shared.date_utils import utc_now
from habit_pulse.core_shared.logging_setup import setup_logger

log = setup_logger("BotSessions")

# Ключи данных FSM, которые переживают смену и завершение диалога
STATS_VIEW_KEY = "stats_view"
LAST_ACTION_KEY = "last_action"
_SESSION_KEYS = (STATS_VIEW_KEY, LAST_ACTION_KEY)


class StatsViewState(BaseModel):
    """
    Позиция пользователя в календаре статистики.

    Attributes:
        year (int): Год отображаемого месяца.
        month (int): Месяц (1-12).
        habit_id (int | None): Выбранная привычка или None для всех привычек.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    habit_id: int | None = None


def _session_part(data: dict[str, Any]) -> dict[str, Any]:
    return {name: data[name] for name in _SESSION_KEYS if name in data}


class SessionStore:
    """
    Состояние диалогов, разделенное по Telegram ID пользователя.

    Доступ только через методы. Обработчики разных пользователей не пересекаются,
    для одного пользователя действует "последняя запись выигрывает".
    Бот работает в личных чатах, поэтому ключ FSM - (bot_id, user_id, user_id),
    как у FSMContext, который Dispatcher создает для сообщений пользователя.
    """

    def __init__(
        self,
        storage: BaseStorage | None = None,
        bot_id: int = 0,
        duplicate_window: float = 1.0,
        monotonic: Callable[[], float] = time.monotonic,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            storage (BaseStorage | None): FSM-хранилище Dispatcher. По умолчанию MemoryStorage.
            bot_id (int): ID бота, часть ключа FSM.
            duplicate_window (float): Окно (сек) подавления повторного нажатия.
            monotonic (Callable[[], float]): Источник монотонного времени (для окна повторов).
            clock (Callable[[], datetime]): Текущее время UTC (для месяца по умолчанию).
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.bot_id = bot_id
        self.duplicate_window = duplicate_window
        self._monotonic = monotonic
        self._clock = clock

    def key(self, user_id: int) -> StorageKey:
        return StorageKey(bot_id=self.bot_id, chat_id=user_id, user_id=user_id)

    # --- Незавершенные диалоги ---

    async def get_pending(self, user_id: int) -> PendingInteraction | None:
        key = self.key(user_id)
        state = await self.storage.get_state(key)

        if state is None:
            return None

        return pending_from_fsm(state, await self.storage.get_data(key))

    async def set_pending(self, user_id: int, pending: PendingInteraction) -> None:
        """Переводит пользователя в состояние шага диалога, заменяя поля предыдущего шага."""
        key = self.key(user_id)
        previous = await self.storage.get_state(key)

        data = _session_part(await self.storage.get_data(key))
        data.update(pending_fields(pending))

        await self.storage.set_state(key, pending.fsm_state)
        await self.storage.set_data(key, data)
        log.debug(f"Пользователь {user_id}: {previous} -> {pending.fsm_state.state}")

    async def clear_pending(self, user_id: int) -> None:
        """Завершает диалог. Для пользователя без диалога ничего не делает."""
        key = self.key(user_id)
        state = await self.storage.get_state(key)

        if state is None:
            return

        await self.storage.set_state(key, None)
        await self.storage.set_data(key, _session_part(await self.storage.get_data(key)))
        log.debug(f"Пользователь {user_id}: диалог {state} завершен.")

    # --- Навигация статистики ---

    async def get_stats_view(self, user_id: int) -> StatsViewState:
        """Текущая позиция в календаре. При первом обращении - текущий месяц и все привычки."""
        key = self.key(user_id)
        stored = (await self.storage.get_data(key)).get(STATS_VIEW_KEY)

        if stored is not None:
            return StatsViewState.model_validate(stored)

        now = self._clock()
        view = StatsViewState(year=now.year, month=now.month)
        await self.storage.update_data(key, {STATS_VIEW_KEY: view.model_dump()})
        return view

    async def set_stats_view(self, user_id: int, state: StatsViewState) -> None:
        log.debug(f"Пользователь {user_id}: статистика -> {state.year}-{state.month:02d}, привычка {state.habit_id}")
        await self.storage.update_data(self.key(user_id), {STATS_VIEW_KEY: state.model_dump()})

    # --- Повторные нажатия ---

    async def is_duplicate_action(self, user_id: int, action: str) -> bool:
        """
        Регистрирует нажатие кнопки и сообщает, является ли оно повтором.

        Повтор - то же действие от того же пользователя в пределах окна duplicate_window
        с момента первого нажатия.

        Returns:
            bool: True, если нажатие нужно проигнорировать.
        """
        key = self.key(user_id)
        now = self._monotonic()
        last = (await self.storage.get_data(key)).get(LAST_ACTION_KEY)

        if last is not None:
            last_action, pressed_at = last
            if last_action == action and now - pressed_at < self.duplicate_window:
                return True

        await self.storage.update_data(key, {LAST_ACTION_KEY: [action, now]})
        return False
