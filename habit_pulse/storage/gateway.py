"""
Интерфейс хранилища привычек для бота и его реализация на SQLAlchemy.

Бот работает только с протоколом HabitStorage и Pydantic-схемами,
ORM-объекты за пределы этого модуля не выходят.
Чтения идут через `Database.session`, изменения через `Database.transaction` или явный commit.
"""

from datetime import date, datetime
from typing import Protocol

from sqlalchemy.exc import IntegrityError

from habit_pulse.core_shared.date_utils import to_utc, utc_day
from habit_pulse.core_shared.exceptions import (
    DuplicateCompletionException,
    DuplicateHabitException,
    NotFoundException,
)

from .database import Database
from .logging import storage_log as log
from .repositories import CompletionRepository, HabitRepository, UserRepository
from .models import CompletionRecord, Habit, User
from .schemas import (
    CompletionSchemaCreate,
    CompletionSchemaRead,
    HabitSchemaCreate,
    HabitSchemaRead,
    HabitSchemaUpdate,
    UserSchemaCreate,
    UserSchemaRead,
)


def habit_name_key(name: str) -> str:
    """Ключ уникальности названия привычки (без учета регистра)."""
    return name.strip().casefold()


class HabitStorage(Protocol):
    """Операции с данными, которые нужны сценариям бота."""

    async def get_user(self, telegram_id: int) -> UserSchemaRead | None: ...

    async def create_user(self, user_in: UserSchemaCreate) -> UserSchemaRead: ...

    async def list_habits(self, user_id: int, enabled_only: bool = False) -> list[HabitSchemaRead]: ...

    async def get_habit(self, user_id: int, habit_id: int) -> HabitSchemaRead | None: ...

    async def find_habit_by_name(self, user_id: int, name: str) -> HabitSchemaRead | None: ...

    async def create_habit(
        self,
        user_id: int,
        name: str,
        target_per_month: int | None = None,
        target_per_year: int | None = None,
    ) -> HabitSchemaRead: ...

    async def update_habit_targets(
        self, user_id: int, habit_id: int, **targets: int | None
    ) -> HabitSchemaRead | None: ...

    async def set_habit_enabled(self, user_id: int, habit_id: int, enabled: bool) -> HabitSchemaRead | None: ...

    async def delete_habit(self, user_id: int, habit_id: int) -> int | None: ...

    async def has_completion_on(self, habit_id: int, day: date) -> bool: ...

    async def add_completion(self, user_id: int, habit_id: int, timestamp: datetime) -> CompletionSchemaRead: ...

    async def list_completions(self, habit_ids: list[int]) -> list[CompletionSchemaRead]: ...

    async def count_completions(self, habit_id: int) -> int: ...


class SqlAlchemyHabitStorage:
    """
    Реализация HabitStorage поверх PostgreSQL.

    Ограничения уникальности БД являются окончательной проверкой:
    если два обновления одного пользователя пришли одновременно,
    второе получит DuplicateHabitException / DuplicateCompletionException.
    """

    def __init__(self, database: Database):
        self.database = database
        self.user_repo = UserRepository(User)
        self.habit_repo = HabitRepository(Habit)
        self.completion_repo = CompletionRepository(CompletionRecord)

    # --- Пользователи ---

    async def get_user(self, telegram_id: int) -> UserSchemaRead | None:
        async with self.database.session() as session:
            user = await self.user_repo.get_by_telegram_id(session, telegram_id=telegram_id)
            return UserSchemaRead.model_validate(user) if user else None

    async def create_user(self, user_in: UserSchemaCreate) -> UserSchemaRead:
        """
        Регистрирует пользователя.

        Если пользователь с таким telegram_id уже есть (повторный /start), возвращает существующего.
        """
        async with self.database.session() as session:
            existing = await self.user_repo.get_by_telegram_id(session, telegram_id=user_in.telegram_id)

            if existing:
                return UserSchemaRead.model_validate(existing)

            try:
                user = await self.user_repo.create(session, obj_in=user_in)
                await session.commit()
            except IntegrityError:
                await session.rollback()
                log.warning(f"Пользователь {user_in.telegram_id} был зарегистрирован параллельно.")
                user = await self.user_repo.get_by_telegram_id(session, telegram_id=user_in.telegram_id)

                if user is None:
                    raise

            log.info(f"Пользователь Telegram ID: {user_in.telegram_id} зарегистрирован (ID: {user.id}).")
            return UserSchemaRead.model_validate(user)

    # --- Привычки ---

    async def list_habits(self, user_id: int, enabled_only: bool = False) -> list[HabitSchemaRead]:
        async with self.database.session() as session:
            habits = await self.habit_repo.get_user_habits(session, user_id=user_id, enabled_only=enabled_only)
            return [HabitSchemaRead.model_validate(habit) for habit in habits]

    async def get_habit(self, user_id: int, habit_id: int) -> HabitSchemaRead | None:
        async with self.database.session() as session:
            habit = await self.habit_repo.get_user_habit(session, user_id=user_id, habit_id=habit_id)
            return HabitSchemaRead.model_validate(habit) if habit else None

    async def find_habit_by_name(self, user_id: int, name: str) -> HabitSchemaRead | None:
        async with self.database.session() as session:
            habit = await self.habit_repo.get_by_name_key(session, user_id=user_id, name_key=habit_name_key(name))
            return HabitSchemaRead.model_validate(habit) if habit else None

    async def create_habit(
        self,
        user_id: int,
        name: str,
        target_per_month: int | None = None,
        target_per_year: int | None = None,
    ) -> HabitSchemaRead:
        """
        Создает включенную привычку.

        Raises:
            DuplicateHabitException: Если у пользователя уже есть привычка с таким названием.
        """
        habit_in = HabitSchemaCreate(
            user_id=user_id,
            name=name,
            name_key=habit_name_key(name),
            target_per_month=target_per_month,
            target_per_year=target_per_year,
        )

        async with self.database.session() as session:
            try:
                habit = await self.habit_repo.create(session, obj_in=habit_in)
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                log.warning(f"Привычка '{name}' пользователя ID: {user_id} уже существует.")
                raise DuplicateHabitException(name) from exc

            log.info(f"Привычка '{name}' (ID: {habit.id}) создана для пользователя ID: {user_id}.")
            return HabitSchemaRead.model_validate(habit)

    async def update_habit_targets(
        self, user_id: int, habit_id: int, **targets: int | None
    ) -> HabitSchemaRead | None:
        """
        Изменяет цели привычки. Передаются только изменяемые поля,
        значение None удаляет цель.

        Returns:
            HabitSchemaRead | None: Обновленная привычка или None, если ее уже нет.
        """
        update_in = HabitSchemaUpdate(**targets)

        async with self.database.transaction() as session:
            habit = await self.habit_repo.get_user_habit(session, user_id=user_id, habit_id=habit_id)

            if habit is None:
                log.warning(f"Привычка ID: {habit_id} не найдена при изменении цели.")
                return None

            habit = await self.habit_repo.update(session, db_obj=habit, obj_in=update_in)

            log.info(f"Цели привычки ID: {habit_id} обновлены: {update_in.model_dump(exclude_unset=True)}")
            return HabitSchemaRead.model_validate(habit)

    async def set_habit_enabled(self, user_id: int, habit_id: int, enabled: bool) -> HabitSchemaRead | None:
        async with self.database.transaction() as session:
            habit = await self.habit_repo.get_user_habit(session, user_id=user_id, habit_id=habit_id)

            if habit is None:
                log.warning(f"Привычка ID: {habit_id} не найдена при смене статуса.")
                return None

            habit = await self.habit_repo.update(session, db_obj=habit, obj_in=HabitSchemaUpdate(enabled=enabled))

            log.info(f"Привычка ID: {habit_id} {'включена' if enabled else 'выключена'}.")
            return HabitSchemaRead.model_validate(habit)

    async def delete_habit(self, user_id: int, habit_id: int) -> int | None:
        """
        Удаляет привычку вместе со всеми ее отметками.

        Returns:
            int | None: Количество удаленных отметок или None, если привычки уже нет.
        """
        async with self.database.transaction() as session:
            habit = await self.habit_repo.get_user_habit(session, user_id=user_id, habit_id=habit_id)

            if habit is None:
                log.warning(f"Привычка ID: {habit_id} не найдена при удалении.")
                return None

            removed = await self.completion_repo.delete_for_habit(session, habit_id=habit_id)
            await self.habit_repo.remove(session, db_obj=habit)

            log.info(f"Привычка ID: {habit_id} удалена вместе с {removed} отметками.")
            return removed

    # --- Отметки выполнения ---

    async def has_completion_on(self, habit_id: int, day: date) -> bool:
        async with self.database.session() as session:
            return await self.completion_repo.exists_on(session, habit_id=habit_id, day=day)

    async def add_completion(self, user_id: int, habit_id: int, timestamp: datetime) -> CompletionSchemaRead:
        """
        Записывает выполнение привычки.

        Raises:
            NotFoundException: Если привычки уже нет.
            DuplicateCompletionException: Если за этот день (UTC) уже есть отметка.
        """
        moment = to_utc(timestamp)
        completion_in = CompletionSchemaCreate(
            habit_id=habit_id,
            user_id=user_id,
            timestamp=moment,
            completed_on=utc_day(moment),
        )

        async with self.database.session() as session:
            habit = await self.habit_repo.get_user_habit(session, user_id=user_id, habit_id=habit_id)

            if habit is None:
                raise NotFoundException(f"Привычка ID: {habit_id} не найдена.")

            try:
                completion = await self.completion_repo.create(session, obj_in=completion_in)
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()

                if "uq_completion_per_day" in str(exc.orig):
                    log.warning(f"Привычка ID: {habit_id} уже отмечена за {completion_in.completed_on}.")
                    raise DuplicateCompletionException(habit_id, completion_in.completed_on) from exc

                # Привычку удалили между проверкой и вставкой
                raise NotFoundException(f"Привычка ID: {habit_id} не найдена.") from exc

            log.info(f"Привычка ID: {habit_id} отмечена за {completion_in.completed_on}.")
            return CompletionSchemaRead.model_validate(completion)

    async def list_completions(self, habit_ids: list[int]) -> list[CompletionSchemaRead]:
        async with self.database.session() as session:
            completions = await self.completion_repo.get_for_habits(session, habit_ids=habit_ids)
            return [CompletionSchemaRead.model_validate(completion) for completion in completions]

    async def count_completions(self, habit_id: int) -> int:
        async with self.database.session() as session:
            return await self.completion_repo.count_for_habit(session, habit_id=habit_id)
