"""Окружение Alembic: метаданные моделей хранилища и URL из StorageSettings."""

from alembic import context
from sqlalchemy import engine_from_config, pool

from habit_pulse.core_shared.logging_setup import intercept_stdlib_logging, setup_logger
from habit_pulse.storage.config import settings
from habit_pulse.storage.models import Base  # регистрирует все модели

log = setup_logger("Alembic")
intercept_stdlib_logging("Alembic", quiet=("sqlalchemy.engine",))

config = context.config
target_metadata = Base.metadata


def database_url() -> str:
    """URL из alembic.ini / Config (его задают тесты) или из настроек хранилища."""
    return config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL


def run_migrations_offline() -> None:
    """Выводит SQL миграций без подключения к базе данных."""
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = database_url()

    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)

        with context.begin_transaction():
            context.run_migrations()

    log.info("Миграции применены.")


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
