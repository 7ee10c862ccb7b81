"""Подключение Sentry к процессу бота."""

from logging import ERROR, INFO

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from .config import AppSettings
from .logging_setup import setup_logger

log = setup_logger("SentrySetup")


def setup_sentry(settings: AppSettings, service_name: str) -> bool:
    """
    Инициализирует Sentry SDK, если задан SENTRY_DSN.

    Ошибки попадают в Sentry через LoguruIntegration: любой log.error / log.exception
    становится событием, остальные записи - breadcrumbs.

    Args:
        settings (AppSettings): Настройки сервиса.
        service_name (str): Имя сервиса, добавляется тегом ко всем событиям.

    Returns:
        bool: True, если Sentry инициализирован.
    """
    if not settings.SENTRY_DSN:
        log.info("SENTRY_DSN не задан, Sentry отключен.")
        return False

    traces_sample_rate = settings.SENTRY_TRACES_SAMPLE_RATE

    if traces_sample_rate is None:
        traces_sample_rate = 1.0 if settings.DEVELOPMENT else 0.1

    try:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[
                AsyncioIntegration(),
                SqlalchemyIntegration(),
                LoguruIntegration(level=INFO, event_level=ERROR),
            ],
            environment=settings.ENVIRONMENT,
            release=settings.RELEASE,
            traces_sample_rate=traces_sample_rate,
        )
    except Exception as exc:
        log.exception(f"Не удалось инициализировать Sentry: {exc}")
        return False

    sentry_sdk.set_tag("service", service_name)
    log.info(f"Sentry включен ({settings.ENVIRONMENT}, {settings.RELEASE}, traces: {traces_sample_rate}).")
    return True
