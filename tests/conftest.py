"""Общие константы тестов."""

from datetime import datetime

import pytest

from habit_pulse.core_shared.date_utils import UTC

# Фиксированное "сейчас" для всех тестов бота: воскресенье, 15 марта 2026, 10:30 UTC
FIXED_NOW = datetime(2026, 3, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Текущий момент для тестов."""
    return FIXED_NOW
