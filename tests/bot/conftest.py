"""
Фикстуры для тестов бота.

Бот тестируется без Telegram и без базы данных: хранилище заменено реализацией в памяти
с теми же ограничениями уникальности, ответы пользователю записываются в список.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

import pytest
import pytest_asyncio
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import InlineKeyboardMarkup, ReplyKeyboardMarkup

from habit_pulse.bot.conversation.creation import HabitCreationFlow
from habit_pulse.bot.conversation.habit_logging import HabitLoggingFlow
from habit_pulse.bot.conversation.router import ConversationRouter
from habit_pulse.bot.conversation.targets import TargetEditFlow
from habit_pulse.bot.core.actor import Actor
from habit_pulse.bot.core.i18n import Locale
from habit_pulse.bot.services.habit_catalog import HabitCatalog
from habit_pulse.bot.services.responder import EditOutcome
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.bot.stats.navigation import StatsNavigator
from habit_pulse.core_shared.date_utils import to_utc, utc_day
from habit_pulse.core_shared.exceptions import (
    DuplicateCompletionException,
    DuplicateHabitException,
    NotFoundException,
)
from habit_pulse.storage import habit_name_key
from habit_pulse.storage.schemas import CompletionSchemaRead, HabitSchemaRead, UserSchemaCreate, UserSchemaRead

TELEGRAM_ID = 777


class InMemoryHabitStorage:
    """Реализация HabitStorage в памяти с теми же правилами, что и у PostgreSQL."""

    def __init__(self, clock):
        self.clock = clock
        self.users: dict[int, UserSchemaRead] = {}
        self.habits: dict[int, HabitSchemaRead] = {}
        self.name_keys: dict[int, str] = {}
        self.completions: list[CompletionSchemaRead] = []
        self._next_id = 1

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def get_user(self, telegram_id: int) -> UserSchemaRead | None:
        return self.users.get(telegram_id)

    async def create_user(self, user_in: UserSchemaCreate) -> UserSchemaRead:
        if user_in.telegram_id not in self.users:
            self.users[user_in.telegram_id] = UserSchemaRead(
                id=self._new_id(), created_at=self.clock(), **user_in.model_dump()
            )
        return self.users[user_in.telegram_id]

    def _owned(self, user_id: int, habit_id: int) -> HabitSchemaRead | None:
        habit = self.habits.get(habit_id)
        return habit if habit and habit.user_id == user_id else None

    async def list_habits(self, user_id: int, enabled_only: bool = False) -> list[HabitSchemaRead]:
        return [
            habit
            for habit in self.habits.values()
            if habit.user_id == user_id and (habit.enabled or not enabled_only)
        ]

    async def get_habit(self, user_id: int, habit_id: int) -> HabitSchemaRead | None:
        return self._owned(user_id, habit_id)

    async def find_habit_by_name(self, user_id: int, name: str) -> HabitSchemaRead | None:
        for habit_id, key in self.name_keys.items():
            habit = self.habits[habit_id]
            if habit.user_id == user_id and key == habit_name_key(name):
                return habit
        return None

    async def create_habit(self, user_id, name, target_per_month=None, target_per_year=None) -> HabitSchemaRead:
        if await self.find_habit_by_name(user_id, name):
            raise DuplicateHabitException(name)

        now = self.clock()
        habit = HabitSchemaRead(
            id=self._new_id(),
            user_id=user_id,
            name=name,
            enabled=True,
            target_per_month=target_per_month,
            target_per_year=target_per_year,
            created_at=now,
            updated_at=now,
        )
        self.habits[habit.id] = habit
        self.name_keys[habit.id] = habit_name_key(name)
        return habit

    async def update_habit_targets(self, user_id: int, habit_id: int, **targets) -> HabitSchemaRead | None:
        habit = self._owned(user_id, habit_id)

        if habit is None:
            return None

        habit = habit.model_copy(update={**targets, "updated_at": self.clock()})
        self.habits[habit_id] = habit
        return habit

    async def set_habit_enabled(self, user_id: int, habit_id: int, enabled: bool) -> HabitSchemaRead | None:
        return await self.update_habit_targets(user_id, habit_id, enabled=enabled)

    async def delete_habit(self, user_id: int, habit_id: int) -> int | None:
        if self._owned(user_id, habit_id) is None:
            return None

        removed = [completion for completion in self.completions if completion.habit_id == habit_id]
        self.completions = [completion for completion in self.completions if completion.habit_id != habit_id]
        del self.habits[habit_id]
        del self.name_keys[habit_id]
        return len(removed)

    async def has_completion_on(self, habit_id: int, day: date) -> bool:
        return any(c.habit_id == habit_id and c.completed_on == day for c in self.completions)

    async def add_completion(self, user_id: int, habit_id: int, timestamp: datetime) -> CompletionSchemaRead:
        if self._owned(user_id, habit_id) is None:
            raise NotFoundException()

        moment = to_utc(timestamp)

        if await self.has_completion_on(habit_id, utc_day(moment)):
            raise DuplicateCompletionException(habit_id, utc_day(moment))

        completion = CompletionSchemaRead(
            id=self._new_id(),
            habit_id=habit_id,
            user_id=user_id,
            timestamp=moment,
            completed_on=utc_day(moment),
            created_at=self.clock(),
        )
        self.completions.append(completion)
        return completion

    async def list_completions(self, habit_ids: list[int]) -> list[CompletionSchemaRead]:
        selected = [completion for completion in self.completions if completion.habit_id in habit_ids]
        return sorted(selected, key=lambda completion: completion.timestamp, reverse=True)

    async def count_completions(self, habit_id: int) -> int:
        return sum(1 for completion in self.completions if completion.habit_id == habit_id)


@dataclass
class RecordingResponder:
    """Записывает все ответы. Результат edit задается через edit_outcome."""

    edit_outcome: EditOutcome = EditOutcome.EDITED
    sent: list[tuple[str, InlineKeyboardMarkup | ReplyKeyboardMarkup | None]] = field(default_factory=list)
    edited: list[tuple[str, InlineKeyboardMarkup | None]] = field(default_factory=list)
    notifications: list[tuple[str | None, bool]] = field(default_factory=list)

    async def send(self, text, keyboard=None) -> None:
        self.sent.append((text, keyboard))

    async def edit(self, text, keyboard=None) -> EditOutcome:
        self.edited.append((text, keyboard))
        return self.edit_outcome

    async def notify(self, text=None, alert=False) -> None:
        self.notifications.append((text, alert))

    @property
    def last_text(self) -> str:
        return self.sent[-1][0]


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def storage(clock) -> InMemoryHabitStorage:
    return InMemoryHabitStorage(clock)


@pytest.fixture
def sessions(clock) -> SessionStore:
    return SessionStore(MemoryStorage(), bot_id=42, duplicate_window=1.0, clock=clock)


@pytest.fixture
def responder() -> RecordingResponder:
    return RecordingResponder()


@pytest.fixture
def actor() -> Actor:
    return Actor(telegram_id=TELEGRAM_ID, locale=Locale.EN, first_name="Alex")


@pytest_asyncio.fixture
async def user(storage, actor) -> UserSchemaRead:
    """Зарегистрированный пользователь (как после /start)."""
    return await storage.create_user(UserSchemaCreate(telegram_id=actor.telegram_id, first_name=actor.first_name))


@pytest.fixture
def creation_flow(storage, sessions) -> HabitCreationFlow:
    return HabitCreationFlow(storage, sessions, name_max_length=100)


@pytest.fixture
def target_flow(storage, sessions) -> TargetEditFlow:
    return TargetEditFlow(storage, sessions)


@pytest.fixture
def logging_flow(storage, sessions, clock) -> HabitLoggingFlow:
    return HabitLoggingFlow(storage, sessions, clock=clock)


@pytest.fixture
def conversation(sessions, creation_flow, target_flow, logging_flow) -> ConversationRouter:
    return ConversationRouter(sessions, creation_flow, target_flow, logging_flow)


@pytest.fixture
def stats_navigator(storage, sessions, clock) -> StatsNavigator:
    return StatsNavigator(storage, sessions, clock=clock)


@pytest.fixture
def habit_catalog(storage, sessions) -> HabitCatalog:
    return HabitCatalog(storage, sessions)
