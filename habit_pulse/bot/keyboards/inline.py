"""
Генераторы Inline-клавиатур (кнопок под сообщениями).

Содержит клавиатуры выбора привычки для отметки и статистики, выбора даты,
карточки привычки с действиями и навигации по месяцам статистики.
"""

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from habit_pulse.bot.core.enums import DateMode, StatsNav, TargetType
from habit_pulse.bot.core.i18n import Locale, get_text
from habit_pulse.bot.keyboards.callbacks import (
    HabitListCallback,
    HabitRemoveCallback,
    HabitStatsCallback,
    HabitToggleCallback,
    HabitViewCallback,
    LogDateCallback,
    LogHabitCallback,
    StatsHabitCallback,
    StatsNavCallback,
    TargetEditCallback,
)
from habit_pulse.core_shared.date_utils import shift_month
from habit_pulse.storage.schemas import HabitSchemaRead


def get_habits_list_keyboard(habits: list[HabitSchemaRead]) -> InlineKeyboardMarkup:
    """Список привычек для просмотра карточек, по одной в строке."""
    builder = InlineKeyboardBuilder()

    for habit in habits:
        icon = "🔹" if habit.enabled else "⏸"
        builder.button(text=f"{icon} {habit.name}", callback_data=HabitViewCallback(habit_id=habit.id))

    builder.adjust(1)
    return builder.as_markup()


def get_habit_detail_keyboard(habit: HabitSchemaRead, locale: Locale) -> InlineKeyboardMarkup:
    """
    Генерирует клавиатуру карточки привычки.

    Args:
        habit (HabitSchemaRead): Привычка.
        locale (Locale): Язык кнопок.

    Returns:
        InlineKeyboardMarkup: Статистика, две кнопки целей, включение/выключение, удаление, назад.
    """
    builder = InlineKeyboardBuilder()

    builder.button(text=get_text("btn_view_stats", locale), callback_data=HabitStatsCallback(habit_id=habit.id))
    builder.button(
        text=get_text("btn_set_month_target", locale),
        callback_data=TargetEditCallback(habit_id=habit.id, target=TargetType.MONTH),
    )
    builder.button(
        text=get_text("btn_set_year_target", locale),
        callback_data=TargetEditCallback(habit_id=habit.id, target=TargetType.YEAR),
    )

    toggle_key = "btn_disable" if habit.enabled else "btn_enable"
    builder.button(
        text=get_text(toggle_key, locale),
        callback_data=HabitToggleCallback(habit_id=habit.id, enabled=not habit.enabled),
    )
    builder.button(text=get_text("btn_remove", locale), callback_data=HabitRemoveCallback(habit_id=habit.id))
    builder.button(text=get_text("btn_back_to_list", locale), callback_data=HabitListCallback())

    # Статистика | две цели | статус | удаление | назад
    builder.adjust(1, 2, 1, 1, 1)
    return builder.as_markup()


def get_habit_remove_confirmation_keyboard(habit_id: int, locale: Locale) -> InlineKeyboardMarkup:
    """Подтверждение удаления привычки. Отмена возвращает к карточке."""
    builder = InlineKeyboardBuilder()

    builder.button(
        text=get_text("btn_confirm_remove", locale),
        callback_data=HabitRemoveCallback(habit_id=habit_id, confirmed=True),
    )
    builder.button(text=get_text("btn_cancel_remove", locale), callback_data=HabitViewCallback(habit_id=habit_id))

    builder.adjust(1)
    return builder.as_markup()


def get_log_habit_keyboard(habits: list[HabitSchemaRead]) -> InlineKeyboardMarkup:
    """Список включенных привычек для отметки выполнения."""
    builder = InlineKeyboardBuilder()

    for habit in habits:
        builder.button(text=habit.name, callback_data=LogHabitCallback(habit_id=habit.id))

    builder.adjust(1)
    return builder.as_markup()


def get_date_mode_keyboard(habit_id: int, locale: Locale) -> InlineKeyboardMarkup:
    """Кнопки "Сегодня" и "Другая дата" для выбранной привычки."""
    builder = InlineKeyboardBuilder()

    builder.button(
        text=get_text("btn_log_today", locale),
        callback_data=LogDateCallback(habit_id=habit_id, mode=DateMode.TODAY),
    )
    builder.button(
        text=get_text("btn_log_custom_date", locale),
        callback_data=LogDateCallback(habit_id=habit_id, mode=DateMode.CUSTOM),
    )

    builder.adjust(2)
    return builder.as_markup()


def get_stats_habit_selection_keyboard(habits: list[HabitSchemaRead], locale: Locale) -> InlineKeyboardMarkup:
    """Выбор привычки для статистики и кнопка "Все привычки" в конце."""
    builder = InlineKeyboardBuilder()

    for habit in habits:
        builder.button(text=habit.name, callback_data=StatsHabitCallback(habit_id=habit.id))

    builder.button(text=get_text("btn_all_habits", locale), callback_data=StatsHabitCallback(habit_id=None))

    builder.adjust(1)
    return builder.as_markup()


def get_stats_navigation_keyboard(year: int, month: int, locale: Locale) -> InlineKeyboardMarkup:
    """
    Кнопки навигации по месяцам: назад, текущий месяц, вперед.

    Соседние месяцы вычисляются здесь и вшиваются в callback_data.

    Args:
        year (int): Год отображаемого месяца.
        month (int): Отображаемый месяц (1-12).
        locale (Locale): Язык кнопок.
    """
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)

    builder = InlineKeyboardBuilder()

    builder.button(
        text=get_text("btn_prev_month", locale),
        callback_data=StatsNavCallback(action=StatsNav.JUMP, year=prev_year, month=prev_month),
    )
    builder.button(
        text=get_text("btn_current_month", locale),
        callback_data=StatsNavCallback(action=StatsNav.TODAY),
    )
    builder.button(
        text=get_text("btn_next_month", locale),
        callback_data=StatsNavCallback(action=StatsNav.JUMP, year=next_year, month=next_month),
    )

    builder.adjust(3)
    return builder.as_markup()
