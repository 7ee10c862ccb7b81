"""Исключения предметной области, общие для хранилища и бота."""


class AppException(Exception):
    """
    Базовое исключение приложения.

    Attributes:
        message (str): Человекочитаемое описание ошибки (для логов).
        error_type (str): Машиночитаемый тип ошибки.
    """

    def __init__(self, message: str, error_type: str = "app_error"):
        super().__init__(message)
        self.message = message
        self.error_type = error_type

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(error_type={self.error_type!r}, message={self.message!r})"


class NotFoundException(AppException):
    """Запрошенный объект не существует (например, удален параллельно)."""

    def __init__(self, message: str = "Объект не найден.", error_type: str = "not_found"):
        super().__init__(message=message, error_type=error_type)


class ConflictException(AppException):
    """Операция нарушает ограничение уникальности."""

    def __init__(self, message: str = "Конфликт данных.", error_type: str = "conflict"):
        super().__init__(message=message, error_type=error_type)


class DuplicateHabitException(ConflictException):
    """У пользователя уже есть привычка с таким названием (без учета регистра)."""

    def __init__(self, name: str):
        super().__init__(message=f"Привычка '{name}' уже существует.", error_type="habit_duplicate")
        self.name = name


class DuplicateCompletionException(ConflictException):
    """Для привычки уже есть отметка выполнения за этот день."""

    def __init__(self, habit_id: int, day: object):
        super().__init__(
            message=f"Привычка ID {habit_id} уже отмечена за {day}.",
            error_type="completion_duplicate",
        )
        self.habit_id = habit_id
        self.day = day
