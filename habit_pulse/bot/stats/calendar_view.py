"""
Календарная сетка месяца с отметками выполнения.

Чистые функции без состояния: по списку моментов выполнения, году, месяцу и локали
строят текстовую сетку фиксированной ширины и считают итоги за месяц и год.

Формат сетки:

    🗓 Mar 2026
    Su Mo Tu We Th Fr Sa
     1  2 ✅  4  5  6  7
     8  9 ...

Каждая ячейка - отметка ✅ или номер дня, выровненный вправо по ширине 2, и пробел.
Перед первым днем месяца - по три пробела на каждый пропущенный день недели.
"""

from datetime import date, datetime
from typing import Iterable

from pydantic import BaseModel

from habit_pulse.bot.core.i18n import MONTH_NAMES, WEEK_START, WEEKDAY_NAMES, Locale
from habit_pulse.core_shared.date_utils import days_in_month, is_in_month, is_in_year, utc_day

COMPLETION_MARK = "✅"
CELL_WIDTH = 3


class CalendarView(BaseModel):
    """
    Результат построения календаря.

    Attributes:
        grid (str): Текст сетки (без HTML-разметки).
        month_total (int): Количество отметок в указанном месяце.
        year_total (int): Количество отметок в указанном году.
    """

    grid: str
    month_total: int
    year_total: int


def first_weekday_offset(year: int, month: int, week_start: int) -> int:
    """
    Номер колонки (0-6), в которую попадает первое число месяца.

    Args:
        year (int): Год.
        month (int): Месяц 1-12.
        week_start (int): Первый день недели в нумерации datetime.weekday() (понедельник = 0).
    """
    return (date(year, month, 1).weekday() - week_start) % 7


def month_weeks(year: int, month: int, week_start: int) -> list[list[int | None]]:
    """
    Раскладывает дни месяца по неделям.

    Неделя - список из 7 ячеек: номер дня или None для дней соседних месяцев.
    В зависимости от длины месяца и дня недели первого числа получается от 4 до 6 недель.
    """
    cells: list[int | None] = [None] * first_weekday_offset(year, month, week_start)
    cells.extend(range(1, days_in_month(year, month) + 1))

    # Добиваем последнюю неделю до 7 ячеек
    cells.extend([None] * (-len(cells) % 7))

    return [cells[index : index + 7] for index in range(0, len(cells), 7)]


def weekday_header(locale: Locale) -> str:
    """Строка сокращенных названий дней недели, начиная с первого дня недели локали."""
    names = WEEKDAY_NAMES[locale]
    start = WEEK_START[locale]
    return " ".join(names[(start + shift) % 7] for shift in range(7))


def _render_week(week: list[int | None], completed_days: set[int], is_first: bool) -> str:
    row = ""

    for day in week:
        if day is None:
            # Хвост последней недели не дополняется пробелами
            if is_first:
                row += " " * CELL_WIDTH
            continue

        row += (COMPLETION_MARK if day in completed_days else f"{day:>2}") + " "

    return row


def render_month_grid(timestamps: Iterable[datetime], year: int, month: int, locale: Locale) -> CalendarView:
    """
    Строит календарь месяца с отметками выполнения.

    День отмечен, если хотя бы один момент выполнения приходится на этот календарный день (UTC).
    Время внутри дня значения не имеет.

    Args:
        timestamps (Iterable[datetime]): Моменты выполнения (любых месяцев и лет).
        year (int): Год.
        month (int): Месяц 1-12.
        locale (Locale): Язык названий и первый день недели.

    Returns:
        CalendarView: Сетка и итоги за месяц и год.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Некорректный месяц: {month}")

    moments = list(timestamps)

    month_moments = [moment for moment in moments if is_in_month(moment, year, month)]
    completed_days = {utc_day(moment).day for moment in month_moments}

    lines = [
        f"🗓 {MONTH_NAMES[locale][month - 1]} {year}",
        weekday_header(locale),
    ]

    for index, week in enumerate(month_weeks(year, month, WEEK_START[locale])):
        lines.append(_render_week(week, completed_days, is_first=index == 0))

    return CalendarView(
        grid="\n".join(lines),
        month_total=len(month_moments),
        year_total=sum(1 for moment in moments if is_in_year(moment, year)),
    )
