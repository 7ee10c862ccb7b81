"""
Состояния FSM (Finite State Machine) для диалогов, ожидающих текстовый ввод.
"""

from aiogram.fsm.state import State, StatesGroup


class HabitCreation(StatesGroup):
    """
    Создание привычки.

    1. waiting_for_name: Название привычки.
    2. waiting_for_monthly_target: Цель на месяц или skip.
    3. waiting_for_yearly_target: Цель на год или skip.
    """

    waiting_for_name = State()
    waiting_for_monthly_target = State()
    waiting_for_yearly_target = State()


class TargetEditing(StatesGroup):
    """Изменение цели существующей привычки (0 удаляет цель)."""

    waiting_for_monthly_target = State()
    waiting_for_yearly_target = State()


class HabitLogging(StatesGroup):
    """
    Отметка выполнения.

    - waiting_for_habit_name: Показан список привычек, название можно ввести текстом.
    - waiting_for_date_mode: Привычка выбрана, ожидается "сегодня" или своя дата.
    - waiting_for_custom_date: Ожидается дата в формате ДД.ММ.ГГГГ.
    """

    waiting_for_habit_name = State()
    waiting_for_date_mode = State()
    waiting_for_custom_date = State()
