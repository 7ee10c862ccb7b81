"""Создаём экземпляр настроенного логгера для слоя хранения."""

from habit_pulse.core_shared.logging_setup import setup_logger

# Получаем экземпляр логгера хранилища
storage_log = setup_logger(service_name="Storage")
