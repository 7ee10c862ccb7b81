"""
Календарная арифметика, общая для сценария отметки выполнения и статистики.

Все "дни" считаются в единой системе отсчета - UTC, независимо от языка и часового пояса пользователя.
Месяцы нумеруются с единицы (1 - январь, 12 - декабрь).
"""

import calendar
import re
from datetime import date, datetime, time, timezone

UTC = timezone.utc

# ДД.ММ.ГГГГ, день и месяц допускаются без ведущего нуля
_DAY_MONTH_YEAR_PATTERN = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")


class InvalidDateFormat(ValueError):
    """Строка не соответствует формату ДД.ММ.ГГГГ."""


class ImpossibleDate(ValueError):
    """Строка в верном формате, но такой даты не существует (например, 30.02)."""


def utc_now() -> datetime:
    """Текущий момент времени в UTC (aware datetime)."""
    return datetime.now(UTC)


def to_utc(moment: datetime) -> datetime:
    """
    Приводит момент времени к UTC.

    Naive datetime считается уже записанным в UTC (так их возвращают некоторые драйверы БД).
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def utc_day(moment: datetime) -> date:
    """Календарный день (UTC), к которому относится момент времени."""
    return to_utc(moment).date()


def start_of_day(day: date) -> datetime:
    """Начало дня 00:00:00.000 UTC."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def days_in_month(year: int, month: int) -> int:
    """Количество дней в месяце с учетом високосных лет."""
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """
    Сдвигает пару (год, месяц) на delta месяцев с переходом через границу года.

    Пример: shift_month(2026, 1, -1) -> (2025, 12).
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Некорректный месяц: {month}")

    # Переводим в "абсолютный" номер месяца, чтобы перенос через год получился сам собой
    absolute = year * 12 + (month - 1) + delta
    return absolute // 12, absolute % 12 + 1


def is_in_month(moment: datetime, year: int, month: int) -> bool:
    """Относится ли момент времени (по дню UTC) к указанному месяцу указанного года."""
    day = utc_day(moment)
    return day.year == year and day.month == month


def is_in_year(moment: datetime, year: int) -> bool:
    """Относится ли момент времени (по дню UTC) к указанному году."""
    return utc_day(moment).year == year


def parse_day_month_year(text: str) -> date:
    """
    Разбирает дату в формате ДД.ММ.ГГГГ.

    Дата должна существовать в календаре: 31.04 или 29.02 невисокосного года отклоняются,
    а не "переносятся" на следующий месяц.

    Raises:
        InvalidDateFormat: Если строка не соответствует формату.
        ImpossibleDate: Если такой даты не существует.
    """
    match = _DAY_MONTH_YEAR_PATTERN.match(text.strip())

    if not match:
        raise InvalidDateFormat(text)

    day, month, year = (int(group) for group in match.groups())

    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ImpossibleDate(text) from exc


def format_day(day: date) -> str:
    """Форматирует дату как ДД.ММ.ГГГГ."""
    return f"{day.day:02d}.{day.month:02d}.{day.year}"
