"""
Варианты незавершенного диалога с пользователем.

У пользователя может быть не более одного варианта одновременно.
Каждый вариант соответствует состоянию FSM, а его поля хранятся в данных FSM.
"""

from typing import Any, ClassVar

from aiogram.fsm.state import State
from pydantic import BaseModel, ConfigDict

from habit_pulse.bot.states.conversation_states import HabitCreation, HabitLogging, TargetEditing


class _PendingBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    fsm_state: ClassVar[State]


# --- Создание привычки ---


class AwaitingHabitName(_PendingBase):
    """Ожидается название новой привычки."""

    fsm_state = HabitCreation.waiting_for_name


class AwaitingMonthlyTarget(_PendingBase):
    """Ожидается цель на месяц (или skip) для создаваемой привычки."""

    fsm_state = HabitCreation.waiting_for_monthly_target

    habit_name: str


class AwaitingYearlyTarget(_PendingBase):
    """Ожидается цель на год (или skip) для создаваемой привычки."""

    fsm_state = HabitCreation.waiting_for_yearly_target

    habit_name: str
    monthly_target: int | None = None


# --- Изменение цели ---


class AwaitingMonthlyTargetEdit(_PendingBase):
    fsm_state = TargetEditing.waiting_for_monthly_target

    habit_id: int


class AwaitingYearlyTargetEdit(_PendingBase):
    fsm_state = TargetEditing.waiting_for_yearly_target

    habit_id: int


# --- Отметка выполнения ---


class AwaitingLogHabitName(_PendingBase):
    """Показан список привычек для отметки, пользователь может ввести название текстом."""

    fsm_state = HabitLogging.waiting_for_habit_name


class AwaitingHabitLogSelection(_PendingBase):
    """Привычка выбрана, ожидается выбор даты (кнопкой или вводом даты)."""

    fsm_state = HabitLogging.waiting_for_date_mode

    habit_id: int


class AwaitingCustomLogDate(_PendingBase):
    """Ожидается дата выполнения в формате ДД.ММ.ГГГГ."""

    fsm_state = HabitLogging.waiting_for_custom_date

    habit_id: int


PendingInteraction = (
    AwaitingHabitName
    | AwaitingMonthlyTarget
    | AwaitingYearlyTarget
    | AwaitingMonthlyTargetEdit
    | AwaitingYearlyTargetEdit
    | AwaitingLogHabitName
    | AwaitingHabitLogSelection
    | AwaitingCustomLogDate
)

_VARIANT_BY_STATE: dict[str, type[_PendingBase]] = {
    variant.fsm_state.state: variant
    for variant in (
        AwaitingHabitName,
        AwaitingMonthlyTarget,
        AwaitingYearlyTarget,
        AwaitingMonthlyTargetEdit,
        AwaitingYearlyTargetEdit,
        AwaitingLogHabitName,
        AwaitingHabitLogSelection,
        AwaitingCustomLogDate,
    )
}


def pending_fields(pending: PendingInteraction) -> dict[str, Any]:
    """Поля варианта для записи в данные FSM."""
    return pending.model_dump()


def pending_from_fsm(state: str | None, data: dict[str, Any]) -> PendingInteraction | None:
    """
    Восстанавливает вариант по состоянию FSM и его данным.

    Состояния, не относящиеся к диалогам бота, считаются отсутствием диалога.
    """
    variant = _VARIANT_BY_STATE.get(state) if state else None

    if variant is None:
        return None

    return variant.model_validate({name: data[name] for name in variant.model_fields if name in data})


def refers_to_habit(pending: PendingInteraction | None, habit_id: int) -> bool:
    """Относится ли незавершенный диалог к указанной привычке."""
    return getattr(pending, "habit_id", None) == habit_id
