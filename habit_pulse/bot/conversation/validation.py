"""Разбор пользовательского ввода в сценариях диалога."""

from habit_pulse.bot.core.enums import is_skip_token

# Верхняя граница цели (колонка INTEGER в БД)
MAX_TARGET = 1_000_000


def normalize_habit_name(text: str) -> str:
    """
    Каноническая форма названия привычки: первая буква заглавная, остальные строчные.

    Пример: "  rEAD books " -> "Read books".
    """
    return text.strip().capitalize()


def parse_optional_target(text: str) -> int | None:
    """
    Разбирает необязательную цель при создании привычки.

    Returns:
        int | None: Положительное число или None, если пользователь пропустил шаг (skip).

    Raises:
        ValueError: Если ввод не является ни skip, ни положительным целым числом.
    """
    if is_skip_token(text):
        return None

    value = text.strip()

    if not value.isdecimal() or not 0 < int(value) <= MAX_TARGET:
        raise ValueError(f"Некорректная цель: {text!r}")

    return int(value)


def parse_target_edit(text: str) -> int | None:
    """
    Разбирает новое значение цели для существующей привычки.

    Returns:
        int | None: Положительное число или None, если введен 0 (цель удаляется).

    Raises:
        ValueError: Если ввод не является неотрицательным целым числом.
    """
    value = text.strip()

    if not value.isdecimal() or int(value) > MAX_TARGET:
        raise ValueError(f"Некорректная цель: {text!r}")

    return int(value) or None
