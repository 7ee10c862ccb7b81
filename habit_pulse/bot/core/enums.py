"""
Перечисления (Enums) и служебные константы бота.

Используются для избежания "магических строк" в callback_data и хендлерах.
"""

from enum import StrEnum

# Слова, которые пользователь может отправить вместо значения
SKIP_TOKENS = frozenset({"skip", "/skip"})
CANCEL_TOKENS = frozenset({"cancel", "/cancel"})


class TargetType(StrEnum):
    """Тип цели привычки."""

    MONTH = "month"
    YEAR = "year"


class DateMode(StrEnum):
    """Способ выбора даты при отметке выполнения."""

    TODAY = "today"  # Отметить сегодняшним днем
    CUSTOM = "custom"  # Ввести дату вручную


class StatsNav(StrEnum):
    """Действия навигации по календарю статистики."""

    JUMP = "jump"  # Перейти к явно указанному месяцу
    TODAY = "today"  # Вернуться к текущему месяцу


class MenuCommand(StrEnum):
    """Кнопки главного меню."""

    ADD_HABIT = "add_habit"
    VIEW_HABITS = "view_habits"
    LOG_HABIT = "log_habit"
    STATS = "stats"


def is_skip_token(text: str) -> bool:
    return text.strip().lower() in SKIP_TOKENS


def is_cancel_token(text: str) -> bool:
    return text.strip().lower() in CANCEL_TOKENS


def is_command(text: str) -> bool:
    """Похож ли текст на команду бота (/help, /foo)."""
    return text.strip().startswith("/")
