"""
Обработчики анкеты пользователя и генерации плана
"""
from telegram import Update
from telegram.ext import ContextTypes
from src.bot.formatters import format_plan_overview
from src.bot.keyboards.inline import InlineKeyboards
from src.bot.session import open_tracker
from src.bot.states import BotState
from src.database.models import ActivityLevel, FitnessGoal, Gender, Language, UserProfile
from src.utils.errors import GenerationFailure, ValidationError
from src.utils.validators import DataValidator
import logging

logger = logging.getLogger(__name__)

async def new_plan_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Начать анкету для нового плана"""
    if context.user_data.get('state') == BotState.GENERATING:
        text = "⏳ План уже составляется, подожди немного..."
        if update.callback_query:
            await update.callback_query.answer(text)
        else:
            await update.message.reply_text(text)
        return

    message = """✨ НОВЫЙ ПЛАН

Для составления персонального плана мне нужно узнать о тебе больше.
В числовых полях можно указать несколько значений через запятую - я возьму среднее.

Укажи свой возраст (в годах):"""

    context.user_data['state'] = BotState.PROFILE_AGE
    context.user_data['profile_data'] = {}

    if update.callback_query:
        await update.callback_query.answer()
        await update.callback_query.edit_message_text(text=message)
    else:
        await update.message.reply_text(message)

# Обработчики текстовых ответов анкеты
async def handle_profile_age(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка возраста"""
    valid, age, error = DataValidator.validate_age(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nПопробуй еще раз:")
        return

    context.user_data['profile_data'] = {'age': age}
    context.user_data['state'] = BotState.PROFILE_GENDER

    await update.message.reply_text(
        "👤 Укажи свой пол:",
        reply_markup=InlineKeyboards.gender_selection()
    )

async def handle_gender_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка выбора пола"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.PROFILE_GENDER:
        return

    gender = query.data.split('_', 1)[1]  # gender_MALE -> MALE
    context.user_data['profile_data']['gender'] = Gender[gender]
    context.user_data['state'] = BotState.PROFILE_WEIGHT

    await query.edit_message_text("⚖️ Укажи свой текущий вес (в килограммах):")

async def handle_profile_weight(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка веса"""
    valid, weight, error = DataValidator.validate_weight(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nПопробуй еще раз:")
        return

    context.user_data['profile_data']['weight'] = weight
    context.user_data['state'] = BotState.PROFILE_HEIGHT

    await update.message.reply_text("📏 Укажи свой рост (в сантиметрах):")

async def handle_profile_height(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка роста"""
    valid, height, error = DataValidator.validate_height(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nПопробуй еще раз:")
        return

    context.user_data['profile_data']['height'] = height
    context.user_data['state'] = BotState.PROFILE_ACTIVITY

    await update.message.reply_text(
        "💪 Выбери уровень своей физической активности:",
        reply_markup=InlineKeyboards.activity_level()
    )

async def handle_activity_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка выбора активности"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.PROFILE_ACTIVITY:
        return

    activity = query.data.split('_', 1)[1]  # activity_VERY_ACTIVE -> VERY_ACTIVE
    context.user_data['profile_data']['activity_level'] = ActivityLevel[activity]
    context.user_data['state'] = BotState.PROFILE_GOAL

    await query.edit_message_text(
        "🎯 Какая у тебя цель?",
        reply_markup=InlineKeyboards.goal_selection()
    )

async def handle_goal_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка выбора цели"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.PROFILE_GOAL:
        return

    goal = query.data.split('_', 1)[1]  # goal_LOSE_WEIGHT -> LOSE_WEIGHT
    context.user_data['profile_data']['goal'] = FitnessGoal[goal]
    context.user_data['state'] = BotState.PROFILE_TIMEFRAME

    await query.edit_message_text("⏳ За сколько недель хочешь достичь цели?")

async def handle_profile_timeframe(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка срока"""
    valid, weeks, error = DataValidator.validate_timeframe(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nПопробуй еще раз:")
        return

    context.user_data['profile_data']['timeframe'] = weeks
    context.user_data['state'] = BotState.PROFILE_WATER

    await update.message.reply_text("💧 Сколько воды ты сейчас пьешь в день (в литрах)?")

async def handle_profile_water(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка текущего потребления воды"""
    valid, liters, error = DataValidator.validate_water(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nПопробуй еще раз:")
        return

    context.user_data['profile_data']['water_intake'] = liters
    context.user_data['state'] = BotState.PROFILE_FOODS

    await update.message.reply_text(
        "🥗 Какие продукты ты любишь? Перечисли через запятую (например: курица, бурый рис, брокколи)",
        reply_markup=InlineKeyboards.skip("foods")
    )

async def handle_profile_foods(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка любимых продуктов"""
    context.user_data['profile_data']['preferred_foods'] = update.message.text.strip() or None
    context.user_data['state'] = BotState.PROFILE_LANGUAGE

    await update.message.reply_text(
        "🌍 На каком языке составить план?",
        reply_markup=InlineKeyboards.language_selection()
    )

async def skip_foods_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Пропуск любимых продуктов"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.PROFILE_FOODS:
        return

    context.user_data['profile_data']['preferred_foods'] = None
    context.user_data['state'] = BotState.PROFILE_LANGUAGE

    await query.edit_message_text(
        "🌍 На каком языке составить план?",
        reply_markup=InlineKeyboards.language_selection()
    )

async def handle_language_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка выбора языка и генерация плана"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.PROFILE_LANGUAGE:
        return

    language = query.data.split('_', 1)[1]  # language_RUSSIAN -> RUSSIAN
    profile_data = context.user_data['profile_data']
    profile_data['language'] = Language[language]

    # Блокируем повторную отправку анкеты, пока AI составляет план
    context.user_data['state'] = BotState.GENERATING
    await query.edit_message_text("⏳ Составляю твой персональный план тренировок и питания...")

    tracker = await open_tracker(update, context)

    try:
        profile = UserProfile(**profile_data)
        record = await tracker.generate_and_save(profile)

        context.user_data.pop('profile_data', None)
        await query.edit_message_text(
            text=format_plan_overview(record),
            reply_markup=InlineKeyboards.plan_days(record)
        )

    except (GenerationFailure, ValidationError) as e:
        logger.error(f"Ошибка генерации плана: {e}")
        await query.edit_message_text(
            f"❌ {e}",
            reply_markup=InlineKeyboards.main_menu()
        )

    finally:
        context.user_data['state'] = BotState.IDLE
