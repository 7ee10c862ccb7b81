"""Логирование через Loguru для бота, хранилища и миграций."""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger as _root_logger
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from loguru import Logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[service_name]}</magenta> | {name}:{function}:{line} - <level>{message}</level>"
)


class LogConfig(BaseModel):
    """Куда и в каком виде писать логи процесса."""

    level: str = Field(default="INFO")
    format: str = Field(default=LOG_FORMAT)
    serialize: bool = Field(default=False, description="JSON вместо текстового формата")
    enable_file_logging: bool = Field(default=False)
    log_dir: Path = Field(default=Path("logs"))
    rotation: str = Field(default="10 MB")
    retention: str = Field(default="7 days")

    def file_sink(self, service_name: str) -> Path:
        return self.log_dir / f"{service_name.lower()}_{{time:YYYY-MM-DD}}.log"


_configured = False


def _install_sinks(service_name: str, config: LogConfig) -> None:
    # Обработчики общие для всего процесса: старые удаляются, чтобы записи не дублировались
    _root_logger.remove()
    _root_logger.configure(extra={"service_name": "-"})

    _root_logger.add(sys.stderr, level=config.level, format=config.format, serialize=config.serialize, colorize=True)

    if not config.enable_file_logging:
        return

    try:
        config.log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _root_logger.bind(service_name=service_name).warning(
            f"Каталог логов {config.log_dir} недоступен ({exc}), пишем только в stderr."
        )
        return

    _root_logger.add(
        str(config.file_sink(service_name)),
        level=config.level,
        format=config.format,
        serialize=config.serialize,
        rotation=config.rotation,
        retention=config.retention,
        encoding="utf-8",
    )


def setup_logger(
    service_name: str,
    log_config: LogConfig | None = None,
    log_level_override: str | None = None,
) -> "Logger":
    """
    Логгер с привязанным service_name.

    Модули вызывают `setup_logger("Имя")` и получают уже настроенный логгер.
    Точка входа передает `log_config` (или уровень) и этим перенастраивает обработчики.
    При первом вызове в процессе обработчики создаются с настройками по умолчанию.
    """
    global _configured

    bound = _root_logger.bind(service_name=service_name)

    if _configured and log_config is None and log_level_override is None:
        return bound

    config = log_config.model_copy() if log_config else LogConfig()
    config.level = (log_level_override or config.level).upper()

    _install_sinks(service_name, config)
    _configured = True

    bound.debug(f"Логирование настроено, уровень {config.level}.")
    return bound


class _LoguruBridge(logging.Handler):
    """Передает записи стандартного logging (aiogram, alembic, sqlalchemy) в Loguru."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._log = _root_logger.bind(service_name=service_name)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _root_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Пропускаем кадры самого logging, чтобы в записи было место реального вызова
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        self._log.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_stdlib_logging(service_name: str, level: int = logging.INFO, quiet: tuple[str, ...] = ()) -> None:
    """
    Перенаправляет корневой логгер стандартного logging в Loguru.

    Args:
        service_name: Имя, под которым записи попадут в лог.
        level: Минимальный уровень перехватываемых записей.
        quiet: Логгеры, для которых оставляются только предупреждения и ошибки.
    """
    logging.basicConfig(handlers=[_LoguruBridge(service_name)], level=level, force=True)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logger", "intercept_stdlib_logging", "LogConfig"]
