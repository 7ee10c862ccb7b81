"""Reply-клавиатура главного меню."""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

from habit_pulse.bot.core.enums import MenuCommand
from habit_pulse.bot.core.i18n import MENU_BUTTONS, Locale


def get_main_menu_keyboard(locale: Locale) -> ReplyKeyboardMarkup:
    """Главное меню: две строки по две кнопки."""
    buttons = MENU_BUTTONS[locale]

    return ReplyKeyboardMarkup(
        keyboard=[
            [
                KeyboardButton(text=buttons[MenuCommand.ADD_HABIT]),
                KeyboardButton(text=buttons[MenuCommand.VIEW_HABITS]),
            ],
            [
                KeyboardButton(text=buttons[MenuCommand.LOG_HABIT]),
                KeyboardButton(text=buttons[MenuCommand.STATS]),
            ],
        ],
        resize_keyboard=True,
    )


def get_menu_command_from_text(text: str) -> MenuCommand | None:
    """
    Определяет, является ли текст надписью кнопки меню (на любом из языков).

    Returns:
        MenuCommand | None: Команда меню или None для обычного текста.
    """
    for buttons in MENU_BUTTONS.values():
        for command, label in buttons.items():
            if text == label:
                return command
    return None
