"""
Локализация бота.

Язык определяется по language_code пользователя Telegram: украинский, если код начинается с "uk",
иначе английский. Все тексты бота, названия месяцев, дней недели и первый день недели
берутся отсюда по локали.
"""

from enum import StrEnum
from typing import Any

from habit_pulse.bot.core.enums import MenuCommand


class Locale(StrEnum):
    """Поддерживаемые языки интерфейса."""

    EN = "en"
    UK = "uk"


def get_locale(language_code: str | None) -> Locale:
    """
    Определяет язык интерфейса по language_code из Telegram.

    Args:
        language_code (str | None): Код языка пользователя (например, "uk", "en-US").

    Returns:
        Locale: Locale.UK для украинского, для остальных Locale.EN.
    """
    if language_code and language_code.lower().startswith("uk"):
        return Locale.UK
    return Locale.EN


# --- Календарь ---

MONTH_NAMES: dict[Locale, tuple[str, ...]] = {
    Locale.EN: ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    Locale.UK: ("Січ", "Лют", "Бер", "Кві", "Тра", "Чер", "Лип", "Сер", "Вер", "Жов", "Лис", "Гру"),
}

# Названия дней недели в порядке datetime.weekday(): понедельник = 0
WEEKDAY_NAMES: dict[Locale, tuple[str, ...]] = {
    Locale.EN: ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"),
    Locale.UK: ("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Нд"),
}

# Первый день недели (в нумерации datetime.weekday())
WEEK_START: dict[Locale, int] = {
    Locale.EN: 6,  # воскресенье
    Locale.UK: 0,  # понедельник
}


# --- Кнопки главного меню ---

MENU_BUTTONS: dict[Locale, dict[MenuCommand, str]] = {
    Locale.EN: {
        MenuCommand.ADD_HABIT: "➕ Add habit",
        MenuCommand.VIEW_HABITS: "📋 View habits",
        MenuCommand.LOG_HABIT: "✅ Log habit",
        MenuCommand.STATS: "📊 Stats",
    },
    Locale.UK: {
        MenuCommand.ADD_HABIT: "➕ Додати звичку",
        MenuCommand.VIEW_HABITS: "📋 Мої звички",
        MenuCommand.LOG_HABIT: "✅ Записати звичку",
        MenuCommand.STATS: "📊 Статистика",
    },
}


# --- Тексты ---

TEXTS: dict[str, dict[Locale, str]] = {
    # Общие
    "unable_to_identify": {
        Locale.EN: "Unable to identify user.",
        Locale.UK: "Не вдалося визначити користувача.",
    },
    "need_start": {
        Locale.EN: "Please use /start first to register.",
        Locale.UK: "Спочатку скористайся командою /start для реєстрації.",
    },
    "habit_not_found": {
        Locale.EN: "❌ Habit not found. It may have been removed.",
        Locale.UK: "❌ Звичку не знайдено. Можливо, її видалено.",
    },
    "error_generic": {
        Locale.EN: "😔 Sorry, something went wrong. Please try again.",
        Locale.UK: "😔 Вибач, щось пішло не так. Спробуй ще раз.",
    },
    "cancelled": {
        Locale.EN: "❌ Cancelled.",
        Locale.UK: "❌ Скасовано.",
    },
    "nothing_to_cancel": {
        Locale.EN: "Nothing to cancel.",
        Locale.UK: "Немає чого скасовувати.",
    },
    "unknown_text": {
        Locale.EN: "I didn't understand that. Use the menu below or /add_habit, /log_habit, /stats.",
        Locale.UK: "Я не зрозумів. Скористайся меню нижче або /add_habit, /log_habit, /stats.",
    },
    "welcome": {
        Locale.EN: (
            "👋 Welcome to Habit Pulse, {name}!\n\n"
            "I'll help you track your daily habits and stay consistent.\n\n"
            "Let's build better habits together! 💪"
        ),
        Locale.UK: (
            "👋 Вітаю в Habit Pulse, {name}!\n\n"
            "Я допоможу тобі відстежувати звички та рухатись вперед.\n\n"
            "Разом до кращих звичок! 💪"
        ),
    },
    "not_set": {
        Locale.EN: "Not set",
        Locale.UK: "Не задано",
    },
    # Создание привычки
    "ask_habit_name": {
        Locale.EN: "✏️ What habit do you want to track?\n\nSend the habit name or /cancel.",
        Locale.UK: "✏️ Яку звичку хочеш відстежувати?\n\nНадішли назву звички або /cancel.",
    },
    "habit_name_invalid": {
        Locale.EN: "⚠️ The name must be from 1 to {max_length} characters. Try again or /cancel.",
        Locale.UK: "⚠️ Назва має містити від 1 до {max_length} символів. Спробуй ще раз або /cancel.",
    },
    "habit_exists": {
        Locale.EN: "⚠️ You already have a habit named <b>{name}</b>.",
        Locale.UK: "⚠️ У тебе вже є звичка <b>{name}</b>.",
    },
    "ask_monthly_target": {
        Locale.EN: "🎯 How many times per month do you want to do <b>{name}</b>?\n\nSend a number or /skip.",
        Locale.UK: "🎯 Скільки разів на місяць ти хочеш виконувати <b>{name}</b>?\n\nНадішли число або /skip.",
    },
    "ask_yearly_target": {
        Locale.EN: "📈 How many times per year?\n\nSend a number or /skip.",
        Locale.UK: "📈 А скільки разів на рік?\n\nНадішли число або /skip.",
    },
    "optional_target_invalid": {
        Locale.EN: "⚠️ Please send a positive whole number or /skip.",
        Locale.UK: "⚠️ Надішли додатне ціле число або /skip.",
    },
    "habit_created": {
        Locale.EN: (
            "🎉 Habit <b>{name}</b> created!\n\n"
            "Per month: {monthly}\nPer year: {yearly}\n\n"
            "Use /log_habit to track it."
        ),
        Locale.UK: (
            "🎉 Звичку <b>{name}</b> створено!\n\n"
            "На місяць: {monthly}\nНа рік: {yearly}\n\n"
            "Використовуй /log_habit, щоб відмічати її."
        ),
    },
    # Изменение цели
    "ask_month_target_edit": {
        Locale.EN: (
            "Set monthly target for <b>{name}</b>\n\n"
            "How many times per month?\n\nSend a number or \"0\" to remove the target."
        ),
        Locale.UK: (
            "Ціль на місяць для <b>{name}</b>\n\n"
            "Скільки разів на місяць?\n\nНадішли число або \"0\", щоб прибрати ціль."
        ),
    },
    "ask_year_target_edit": {
        Locale.EN: (
            "Set yearly target for <b>{name}</b>\n\n"
            "How many times per year?\n\nSend a number or \"0\" to remove the target."
        ),
        Locale.UK: (
            "Ціль на рік для <b>{name}</b>\n\n"
            "Скільки разів на рік?\n\nНадішли число або \"0\", щоб прибрати ціль."
        ),
    },
    "target_edit_invalid": {
        Locale.EN: "⚠️ Please send a whole number (0 to remove the target) or /cancel.",
        Locale.UK: "⚠️ Надішли ціле число (0, щоб прибрати ціль) або /cancel.",
    },
    "month_target_updated": {
        Locale.EN: "✅ Monthly target for <b>{name}</b> set to {value}.",
        Locale.UK: "✅ Ціль на місяць для <b>{name}</b>: {value}.",
    },
    "year_target_updated": {
        Locale.EN: "✅ Yearly target for <b>{name}</b> set to {value}.",
        Locale.UK: "✅ Ціль на рік для <b>{name}</b>: {value}.",
    },
    "month_target_removed": {
        Locale.EN: "✅ Monthly target for <b>{name}</b> removed.",
        Locale.UK: "✅ Ціль на місяць для <b>{name}</b> прибрано.",
    },
    "year_target_removed": {
        Locale.EN: "✅ Yearly target for <b>{name}</b> removed.",
        Locale.UK: "✅ Ціль на рік для <b>{name}</b> прибрано.",
    },
    # Просмотр привычек
    "no_habits": {
        Locale.EN: "You don't have any habits yet. Use /add_habit to create one!",
        Locale.UK: "У тебе ще немає звичок. Створи першу командою /add_habit!",
    },
    "select_habit_to_view": {
        Locale.EN: "📋 Select a habit to view details:",
        Locale.UK: "📋 Обери звичку, щоб переглянути деталі:",
    },
    "habit_detail": {
        Locale.EN: (
            "<b>{name}</b> {status}\n\n"
            "Created: {created}\nLast logged: {last_logged}\nTotal logs: {total}\n\n"
            "<b>Targets:</b>\nPer month: {monthly}\nPer year: {yearly}"
        ),
        Locale.UK: (
            "<b>{name}</b> {status}\n\n"
            "Створено: {created}\nОстанній запис: {last_logged}\nУсього записів: {total}\n\n"
            "<b>Цілі:</b>\nНа місяць: {monthly}\nНа рік: {yearly}"
        ),
    },
    "never": {
        Locale.EN: "Never",
        Locale.UK: "Ще не було",
    },
    "status_enabled": {
        Locale.EN: "🟢",
        Locale.UK: "🟢",
    },
    "status_disabled": {
        Locale.EN: "⏸ (disabled)",
        Locale.UK: "⏸ (вимкнено)",
    },
    "btn_view_stats": {
        Locale.EN: "📊 View stats",
        Locale.UK: "📊 Статистика",
    },
    "btn_set_month_target": {
        Locale.EN: "📊 Set monthly target",
        Locale.UK: "📊 Ціль на місяць",
    },
    "btn_set_year_target": {
        Locale.EN: "📈 Set yearly target",
        Locale.UK: "📈 Ціль на рік",
    },
    "btn_disable": {
        Locale.EN: "⏸ Disable",
        Locale.UK: "⏸ Вимкнути",
    },
    "btn_enable": {
        Locale.EN: "▶️ Enable",
        Locale.UK: "▶️ Увімкнути",
    },
    "btn_remove": {
        Locale.EN: "🗑 Remove habit",
        Locale.UK: "🗑 Видалити звичку",
    },
    "btn_back_to_list": {
        Locale.EN: "🔙 Back to list",
        Locale.UK: "🔙 До списку",
    },
    "confirm_remove": {
        Locale.EN: "⚠️ Remove <b>{name}</b> and all its logs? This cannot be undone.",
        Locale.UK: "⚠️ Видалити <b>{name}</b> разом з усіма записами? Це не можна скасувати.",
    },
    "btn_confirm_remove": {
        Locale.EN: "🔥 Yes, remove",
        Locale.UK: "🔥 Так, видалити",
    },
    "btn_cancel_remove": {
        Locale.EN: "❌ No, keep it",
        Locale.UK: "❌ Ні, залишити",
    },
    "habit_removed": {
        Locale.EN: "🗑 Habit <b>{name}</b> removed ({count} logs deleted).",
        Locale.UK: "🗑 Звичку <b>{name}</b> видалено (записів видалено: {count}).",
    },
    "habit_enabled": {
        Locale.EN: "▶️ Habit enabled",
        Locale.UK: "▶️ Звичку увімкнено",
    },
    "habit_disabled": {
        Locale.EN: "⏸ Habit disabled",
        Locale.UK: "⏸ Звичку вимкнено",
    },
    # Отметка выполнения
    "no_enabled_habits": {
        Locale.EN: "You don't have any active habits to log. Use /add_habit to create one!",
        Locale.UK: "У тебе немає активних звичок для запису. Створи звичку командою /add_habit!",
    },
    "habit_log_disabled": {
        Locale.EN: "⏸ <b>{name}</b> is disabled. Enable it in /view_habits to log it.",
        Locale.UK: "⏸ Звичку <b>{name}</b> вимкнено. Увімкни її в /view_habits, щоб відмітити.",
    },
    "select_habit_to_log": {
        Locale.EN: "✅ Which habit did you complete?\n\nTap a button or type the habit name.",
        Locale.UK: "✅ Яку звичку ти виконав?\n\nНатисни кнопку або надішли назву звички.",
    },
    "log_habit_unknown_name": {
        Locale.EN: "⚠️ No active habit named <b>{name}</b>. Try again or /cancel.",
        Locale.UK: "⚠️ Немає активної звички <b>{name}</b>. Спробуй ще раз або /cancel.",
    },
    "choose_date_mode": {
        Locale.EN: "📅 When did you complete <b>{name}</b>?",
        Locale.UK: "📅 Коли ти виконав <b>{name}</b>?",
    },
    "btn_log_today": {
        Locale.EN: "Today",
        Locale.UK: "Сьогодні",
    },
    "btn_log_custom_date": {
        Locale.EN: "📆 Custom date",
        Locale.UK: "📆 Інша дата",
    },
    "ask_custom_date": {
        Locale.EN: "📆 Send the date for <b>{name}</b> in DD.MM.YYYY format or /cancel.",
        Locale.UK: "📆 Надішли дату для <b>{name}</b> у форматі ДД.ММ.РРРР або /cancel.",
    },
    "date_invalid_format": {
        Locale.EN: "⚠️ Invalid format. Please use DD.MM.YYYY, for example 05.03.2026.",
        Locale.UK: "⚠️ Невірний формат. Використовуй ДД.ММ.РРРР, наприклад 05.03.2026.",
    },
    "date_impossible": {
        Locale.EN: "⚠️ This date does not exist. Please check the day and month.",
        Locale.UK: "⚠️ Такої дати не існує. Перевір день і місяць.",
    },
    "date_in_future": {
        Locale.EN: "⚠️ You can't log a habit for a future date.",
        Locale.UK: "⚠️ Не можна записати звичку на майбутню дату.",
    },
    "already_logged": {
        Locale.EN: "ℹ️ <b>{name}</b> is already logged for {date}.",
        Locale.UK: "ℹ️ <b>{name}</b> вже записано за {date}.",
    },
    "habit_logged": {
        Locale.EN: "✅ <b>{name}</b> logged for {date}!\nThis month: {month_total}",
        Locale.UK: "✅ <b>{name}</b> записано за {date}!\nЦього місяця: {month_total}",
    },
    # Статистика
    "stats_select_habit": {
        Locale.EN: "📊 Select a habit to view stats:",
        Locale.UK: "📊 Обери звичку для перегляду статистики:",
    },
    "btn_all_habits": {
        Locale.EN: "📊 All habits",
        Locale.UK: "📊 Усі звички",
    },
    "stats_title": {
        Locale.EN: "📊 Your Statistics:",
        Locale.UK: "📊 Твоя статистика:",
    },
    "stats_no_logs": {
        Locale.EN: "No logs yet for this habit.\nUse /log_habit to start tracking!",
        Locale.UK: "Для цієї звички ще немає записів.\nВикористовуй /log_habit, щоб почати!",
    },
    "stats_total_month": {
        Locale.EN: "Total this month: {total}",
        Locale.UK: "Цього місяця: {total}",
    },
    "stats_total_year": {
        Locale.EN: "Total this year: {total}",
        Locale.UK: "Цього року: {total}",
    },
    "btn_prev_month": {
        Locale.EN: "◀️ Prev",
        Locale.UK: "◀️ Назад",
    },
    "btn_current_month": {
        Locale.EN: "Today",
        Locale.UK: "Сьогодні",
    },
    "btn_next_month": {
        Locale.EN: "Next ▶️",
        Locale.UK: "Далі ▶️",
    },
    "stats_not_modified": {
        Locale.EN: "Already on current view",
        Locale.UK: "Вже показано",
    },
    "stats_update_failed": {
        Locale.EN: "Unable to update stats",
        Locale.UK: "Не вдалося оновити статистику",
    },
    "duplicate_action": {
        Locale.EN: "⏳ Already processing…",
        Locale.UK: "⏳ Вже обробляю…",
    },
}


def get_text(key: str, locale: Locale, **kwargs: Any) -> str:
    """
    Возвращает текст по ключу для указанной локали.

    Args:
        key (str): Ключ текста из TEXTS.
        locale (Locale): Язык.
        **kwargs: Значения для подстановки в шаблон.

    Returns:
        str: Готовый текст.

    Raises:
        KeyError: Если ключ отсутствует в каталоге.
    """
    template = TEXTS[key][locale]
    return template.format(**kwargs) if kwargs else template
