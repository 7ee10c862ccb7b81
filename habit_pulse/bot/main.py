"""
Главный файл запуска Telegram бота.

Отвечает за:
1. Настройку логирования и Sentry.
2. Подключение к базе данных.
3. Сборку компонентов бота (хранилище, состояние диалогов, сценарии) и их внедрение в Dispatcher.
4. Подключение middleware и роутеров.
5. Запуск процесса Polling.
"""

import asyncio

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.memory import MemoryStorage

from habit_pulse.bot.conversation.creation import HabitCreationFlow
from habit_pulse.bot.conversation.habit_logging import HabitLoggingFlow
from habit_pulse.bot.conversation.router import ConversationRouter
from habit_pulse.bot.conversation.targets import TargetEditFlow
from habit_pulse.bot.core.config import BotSettings
from habit_pulse.bot.handlers import common, habit_log, habits, stats, text
from habit_pulse.bot.keyboards.callbacks import TargetEditCallback
from habit_pulse.bot.middlewares.dedup import RepeatedCallbackMiddleware
from habit_pulse.bot.middlewares.errors import ErrorBoundaryMiddleware
from habit_pulse.bot.services.habit_catalog import HabitCatalog
from habit_pulse.bot.session.store import SessionStore
from habit_pulse.bot.stats.navigation import StatsNavigator
from habit_pulse.core_shared.logging_setup import intercept_stdlib_logging, setup_logger
from habit_pulse.core_shared.sentry_sdk_setup import setup_sentry
from habit_pulse.storage import HabitStorage, SqlAlchemyHabitStorage
from habit_pulse.storage.database import db

settings = BotSettings()  # type: ignore

# Настраиваем логгер
log = setup_logger("BotMain", log_config=settings.log_config())
intercept_stdlib_logging("aiogram", quiet=("sqlalchemy.engine",))


def build_dispatcher(storage: HabitStorage, sessions: SessionStore, bot_settings: BotSettings) -> Dispatcher:
    """
    Собирает Dispatcher со всеми зависимостями, middleware и роутерами.

    Args:
        storage (HabitStorage): Хранилище привычек.
        sessions (SessionStore): Состояние диалогов пользователей.
        bot_settings (BotSettings): Настройки бота.

    Returns:
        Dispatcher: Готовый к запуску диспетчер.
    """
    # Состояние диалогов лежит в FSM-хранилище Dispatcher
    dp = Dispatcher(storage=sessions.storage)

    creation_flow = HabitCreationFlow(storage, sessions, name_max_length=bot_settings.HABIT_NAME_MAX_LENGTH)
    target_flow = TargetEditFlow(storage, sessions)
    logging_flow = HabitLoggingFlow(storage, sessions)

    # Внедрение зависимостей: хендлеры получают их по имени аргумента
    dp["storage"] = storage
    dp["sessions"] = sessions
    dp["creation_flow"] = creation_flow
    dp["target_flow"] = target_flow
    dp["logging_flow"] = logging_flow
    dp["habit_catalog"] = HabitCatalog(storage, sessions)
    dp["stats_navigator"] = StatsNavigator(storage, sessions)
    dp["conversation"] = ConversationRouter(sessions, creation_flow, target_flow, logging_flow)

    # Граница ошибок - самая внешняя
    error_boundary = ErrorBoundaryMiddleware(sessions)
    dp.message.outer_middleware(error_boundary)
    dp.callback_query.outer_middleware(error_boundary)
    dp.callback_query.outer_middleware(
        RepeatedCallbackMiddleware(sessions, prefixes=(TargetEditCallback.__prefix__,))
    )

    # Порядок важен! Команды и кнопки выше обработчика свободного текста.
    dp.include_router(common.router)
    dp.include_router(habits.router)
    dp.include_router(habit_log.router)
    dp.include_router(stats.router)
    dp.include_router(text.router)

    return dp


async def main():
    """Асинхронная точка входа."""
    log.info("🚀 Запуск Telegram бота...")

    setup_sentry(settings, service_name="bot")

    # 1. Подключение к базе данных
    await db.connect()

    # 2. Инициализация бота
    bot = Bot(token=settings.BOT_TOKEN, default=DefaultBotProperties(parse_mode=ParseMode.HTML))

    # 3. Сборка компонентов
    sessions = SessionStore(
        MemoryStorage(),
        bot_id=bot.id,
        duplicate_window=settings.DUPLICATE_CALLBACK_WINDOW_SECONDS,
    )
    dp = build_dispatcher(SqlAlchemyHabitStorage(db), sessions, settings)

    try:
        # Удаляем вебхук и очищаем очередь обновлений, накопившихся пока бот спал
        await bot.delete_webhook(drop_pending_updates=True)

        log.info("Бот запущен и готов к работе (Polling mode).")
        await dp.start_polling(bot)

    except Exception as e:
        log.exception(f"Критическая ошибка при работе бота: {e}")

    finally:
        log.info("Остановка бота...")

        await db.disconnect()
        await bot.session.close()

        log.info("Бот остановлен.")


def run() -> None:
    """Синхронная точка входа (консольная команда habit-pulse-bot)."""
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        # Обработка Ctrl+C в терминале
        log.info("Бот остановлен вручную.")


if __name__ == "__main__":
    run()
