"""
Определение структур CallbackData для Inline-кнопок.

Каждый класс имеет собственный уникальный префикс: фильтр aiogram сравнивает префикс целиком,
поэтому "log" и "logdate" не пересекаются. Хендлеры получают уже разобранный объект
и никогда не разбирают строку callback_data вручную.
"""

from aiogram.filters.callback_data import CallbackData

from habit_pulse.bot.core.enums import DateMode, StatsNav, TargetType


class LogHabitCallback(CallbackData, prefix="log"):
    """
    Выбор привычки для отметки выполнения.

    Attributes:
        habit_id (int): ID привычки.
    """

    habit_id: int


class LogDateCallback(CallbackData, prefix="logdate"):
    """
    Выбор даты выполнения для выбранной привычки.

    Attributes:
        habit_id (int): ID привычки.
        mode (DateMode): "today" или "custom".
    """

    habit_id: int
    mode: DateMode


class TargetEditCallback(CallbackData, prefix="target"):
    """
    Запрос на изменение цели привычки.

    Attributes:
        habit_id (int): ID привычки.
        target (TargetType): "month" или "year".
    """

    habit_id: int
    target: TargetType


class StatsNavCallback(CallbackData, prefix="stats_nav"):
    """
    Навигация по месяцам в статистике.

    Месяц назначения вычисляется при построении клавиатуры и передается явно,
    поэтому повторное или запоздалое нажатие всегда ведет в один и тот же месяц.

    Attributes:
        action (StatsNav): "jump" - перейти к year/month, "today" - к текущему месяцу.
        year (int): Год назначения (для "today" не используется).
        month (int): Месяц назначения 1-12 (для "today" не используется).
    """

    action: StatsNav
    year: int = 0
    month: int = 0


class StatsHabitCallback(CallbackData, prefix="stats_habit"):
    """
    Выбор привычки в статистике.

    Attributes:
        habit_id (int | None): ID привычки или None для "Все привычки".
    """

    habit_id: int | None = None


class HabitViewCallback(CallbackData, prefix="habit_view"):
    """Просмотр карточки привычки."""

    habit_id: int


class HabitListCallback(CallbackData, prefix="habit_list"):
    """Возврат к списку привычек."""


class HabitStatsCallback(CallbackData, prefix="habit_stats"):
    """Статистика конкретной привычки из ее карточки."""

    habit_id: int


class HabitToggleCallback(CallbackData, prefix="habit_toggle"):
    """
    Включение/выключение привычки.

    Attributes:
        habit_id (int): ID привычки.
        enabled (bool): Новый статус.
    """

    habit_id: int
    enabled: bool


class HabitRemoveCallback(CallbackData, prefix="habit_rm"):
    """
    Удаление привычки.

    Attributes:
        habit_id (int): ID привычки.
        confirmed (bool): False - показать подтверждение, True - удалить.
    """

    habit_id: int
    confirmed: bool = False
