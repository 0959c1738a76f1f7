"""
Обработчик команды /start и главное меню
"""
from telegram import Update
from telegram.ext import ContextTypes
from src.bot.keyboards.inline import InlineKeyboards
from src.bot.session import open_tracker, send_pending_notices
from src.bot.states import BotState
import logging

logger = logging.getLogger(__name__)

async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработчик команды /start"""
    user = update.effective_user

    # Загружаем состояние пользователя из хранилища
    tracker = await open_tracker(update, context)
    context.user_data['state'] = BotState.IDLE

    welcome_message = """🤖 Привет! Я твой AI фитнес-тренер.
Составлю план тренировок и питания на неделю, помогу отмечать тренировки и воду и покажу твой прогресс."""

    if tracker.plan_history():
        level_info = tracker.current_level_info()
        welcome_message += f"\n\n🏅 Твой уровень: {level_info.level}. Продолжаем!"
    else:
        welcome_message += "\n\n✨ Начни с нового плана!"

    await send_pending_notices(update, context)
    await update.message.reply_text(
        welcome_message,
        reply_markup=InlineKeyboards.main_menu()
    )

    logger.info(f"Пользователь {user.id} ({user.username}) запустил бота")

async def main_menu_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Возврат в главное меню"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.GENERATING:
        context.user_data['state'] = BotState.IDLE

    message = """🏠 Главное меню

Выбери действие:"""

    await query.edit_message_text(
        text=message,
        reply_markup=InlineKeyboards.main_menu()
    )

async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработчик команды /help"""
    help_text = """ℹ️ ПОМОЩЬ

🔹 Основные функции:

✨ Новый план - AI составит план тренировок и питания на 7 дней
📋 Мои планы - история планов, отметка выполненных дней
🏋️ Записать тренировку - добавить свою тренировку в журнал
💧 Вода - учет выпитой воды за сегодня
📈 Прогресс - уровень, серия тренировок, динамика веса

🔹 Уровни:
Каждые 5 дней с тренировками - новый уровень. Несколько тренировок
в один день считаются одним днем, вода на уровень не влияет.

🔹 Команды:
/start - главное меню
/help - эта справка
/plan - новый план
/progress - прогресс
/log - записать тренировку
"""

    if update.message:
        await update.message.reply_text(help_text, reply_markup=InlineKeyboards.back_to_menu())
    else:
        query = update.callback_query
        await query.answer()
        await query.edit_message_text(text=help_text, reply_markup=InlineKeyboards.back_to_menu())
