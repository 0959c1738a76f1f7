"""
Обработчики для настроек бота
"""
from telegram import Update
from telegram.ext import ContextTypes
from src.bot.formatters import format_avatar
from src.bot.keyboards.inline import InlineKeyboards
from src.bot.session import open_tracker
from src.database.models import CharacterGender
import logging

logger = logging.getLogger(__name__)

async def settings_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показать настройки"""
    query = update.callback_query
    await query.answer()

    message = """⚙️ НАСТРОЙКИ

🔹 Доступные действия:
• Сменить персонажа
• Удалить все планы, журнал активности и персонажа

Что хочешь настроить?"""

    await query.edit_message_text(
        text=message,
        reply_markup=InlineKeyboards.settings_actions()
    )

async def change_character_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Выбор персонажа"""
    query = update.callback_query
    await query.answer()

    await query.edit_message_text(
        "🧍 Выбери персонажа:",
        reply_markup=InlineKeyboards.character_selection()
    )

async def select_character_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Сохранение выбранного персонажа"""
    query = update.callback_query
    await query.answer()

    gender = query.data.split('_', 1)[1]  # character_FEMALE -> FEMALE
    tracker = await open_tracker(update, context)
    tracker.select_character(CharacterGender[gender])
    level = tracker.current_level_info().level

    await query.edit_message_text(
        f"✅ Персонаж выбран!\n\n{format_avatar(tracker.character, level)}",
        reply_markup=InlineKeyboards.progress_actions()
    )

async def clear_history_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Подтверждение удаления данных"""
    query = update.callback_query
    await query.answer()

    await query.edit_message_text(
        "🗑 Удалить все планы, журнал активности и персонажа? Это действие нельзя отменить.",
        reply_markup=InlineKeyboards.yes_no("clear")
    )

async def confirm_clear_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Удаление данных после подтверждения"""
    query = update.callback_query
    await query.answer()

    if query.data == "yes_clear":
        tracker = await open_tracker(update, context)
        tracker.clear_all_history()
        logger.info(f"Пользователь {update.effective_user.id} удалил все данные")
        message = "✅ Все данные удалены"
    else:
        message = "❌ Удаление отменено"

    await query.edit_message_text(message, reply_markup=InlineKeyboards.main_menu())
