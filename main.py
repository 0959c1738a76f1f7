"""
Главный файл запуска Telegram бота AI фитнес-тренера
"""
import logging
import os
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    MessageHandler,
    filters,
    ContextTypes
)

# Импорты сервисов
from src.services.supabase_service import SupabaseService
from src.services.openai_service import OpenAIService
from src.database.storage import MemoryStorage
from src.config import SUPABASE_URL, SUPABASE_KEY, STORAGE_BACKEND

# Импорты обработчиков
from src.bot.handlers.start import start_command, main_menu_callback, help_command
from src.bot.handlers.profile import (
    new_plan_callback,
    handle_profile_age,
    handle_gender_callback,
    handle_profile_weight,
    handle_profile_height,
    handle_activity_callback,
    handle_goal_callback,
    handle_profile_timeframe,
    handle_profile_water,
    handle_profile_foods,
    skip_foods_callback,
    handle_language_callback
)
from src.bot.handlers.plans import (
    my_plans_callback,
    plan_detail_callback,
    day_detail_callback,
    mark_done_callback
)
from src.bot.handlers.activity import (
    log_workout_callback,
    handle_workout_type,
    handle_workout_duration,
    handle_intensity_callback,
    handle_workout_notes,
    skip_notes_callback,
    water_callback,
    handle_water_portion_callback,
    progress_callback
)
from src.bot.handlers.settings import (
    settings_callback,
    change_character_callback,
    select_character_callback,
    clear_history_callback,
    confirm_clear_callback
)
from src.bot.keyboards.inline import InlineKeyboards
from src.bot.states import BotState

# Настройка логирования
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)
logger = logging.getLogger(__name__)

TEXT_HANDLERS = {
    BotState.PROFILE_AGE: handle_profile_age,
    BotState.PROFILE_WEIGHT: handle_profile_weight,
    BotState.PROFILE_HEIGHT: handle_profile_height,
    BotState.PROFILE_TIMEFRAME: handle_profile_timeframe,
    BotState.PROFILE_WATER: handle_profile_water,
    BotState.PROFILE_FOODS: handle_profile_foods,
    BotState.WORKOUT_TYPE: handle_workout_type,
    BotState.WORKOUT_DURATION: handle_workout_duration,
    BotState.WORKOUT_NOTES: handle_workout_notes
}

async def route_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Маршрутизация текстовых сообщений в зависимости от состояния"""
    state = context.user_data.get('state', BotState.IDLE)
    handler = TEXT_HANDLERS.get(state)

    if handler:
        await handler(update, context)
    elif state == BotState.GENERATING:
        await update.message.reply_text("⏳ План еще составляется, подожди немного...")
    else:
        # По умолчанию - подсказка и главное меню
        await update.message.reply_text(
            "Выбери действие в меню 👇",
            reply_markup=InlineKeyboards.main_menu()
        )

async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Обработчик ошибок"""
    logger.error(f"Update {update} caused error {context.error}")

    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text(
            "❌ Произошла ошибка. Попробуй еще раз или напиши /start"
        )

def build_storage_factory(supabase_service=None):
    """Фабрика хранилищ: namespace (Telegram ID) -> хранилище пользователя"""
    if STORAGE_BACKEND == "memory":
        logger.warning("⚠️ Используется хранилище в памяти, данные не сохранятся после перезапуска")
        storages = {}
        return lambda namespace: storages.setdefault(namespace, MemoryStorage())

    return supabase_service.get_storage

def main():
    """Главная функция запуска бота"""
    logger.info("🚀 Запуск бота...")

    telegram_token = os.getenv("TELEGRAM_BOT_TOKEN")
    openai_api_key = os.getenv("OPENAI_API_KEY")
    supabase_service = None

    if STORAGE_BACKEND != "memory":
        # Инициализация Supabase
        if not SUPABASE_URL or not SUPABASE_KEY:
            logger.error("❌ SUPABASE_URL и SUPABASE_KEY должны быть установлены в .env файле!")
            return

        # Пытаемся получить секреты из Supabase если не в env
        supabase_service = SupabaseService(SUPABASE_URL, SUPABASE_KEY)
        if not telegram_token:
            telegram_token = supabase_service.get_secret("TELEGRAM_BOT_TOKEN")
        if not openai_api_key:
            openai_api_key = supabase_service.get_secret("OPENAI_API_KEY")

    if not telegram_token:
        logger.error("❌ TELEGRAM_BOT_TOKEN не найден!")
        return

    if not openai_api_key:
        logger.error("❌ OPENAI_API_KEY не найден!")
        return

    # Создание приложения
    application = Application.builder().token(telegram_token).build()

    # Сохраняем сервисы в bot_data для доступа в обработчиках
    application.bot_data['openai'] = OpenAIService(openai_api_key)
    application.bot_data['storage_factory'] = build_storage_factory(supabase_service)

    # Регистрация обработчиков команд
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("plan", new_plan_callback))
    application.add_handler(CommandHandler("progress", progress_callback))
    application.add_handler(CommandHandler("log", log_workout_callback))

    # Регистрация обработчиков callback'ов
    application.add_handler(CallbackQueryHandler(main_menu_callback, pattern="^main_menu$"))
    application.add_handler(CallbackQueryHandler(help_command, pattern="^help$"))

    # Анкета и генерация плана
    application.add_handler(CallbackQueryHandler(new_plan_callback, pattern="^new_plan$"))
    application.add_handler(CallbackQueryHandler(handle_gender_callback, pattern="^gender_"))
    application.add_handler(CallbackQueryHandler(handle_activity_callback, pattern="^activity_"))
    application.add_handler(CallbackQueryHandler(handle_goal_callback, pattern="^goal_"))
    application.add_handler(CallbackQueryHandler(skip_foods_callback, pattern="^skip_foods$"))
    application.add_handler(CallbackQueryHandler(handle_language_callback, pattern="^language_"))

    # История планов
    application.add_handler(CallbackQueryHandler(my_plans_callback, pattern="^my_plans$"))
    application.add_handler(CallbackQueryHandler(plan_detail_callback, pattern="^plan_"))
    application.add_handler(CallbackQueryHandler(day_detail_callback, pattern="^day_"))
    application.add_handler(CallbackQueryHandler(mark_done_callback, pattern="^done_"))

    # Журнал активности
    application.add_handler(CallbackQueryHandler(log_workout_callback, pattern="^log_workout$"))
    application.add_handler(CallbackQueryHandler(handle_intensity_callback, pattern="^intensity_"))
    application.add_handler(CallbackQueryHandler(skip_notes_callback, pattern="^skip_notes$"))
    application.add_handler(CallbackQueryHandler(water_callback, pattern="^water$"))
    application.add_handler(CallbackQueryHandler(handle_water_portion_callback, pattern=r"^water_\d+$"))
    application.add_handler(CallbackQueryHandler(progress_callback, pattern="^progress$"))

    # Настройки
    application.add_handler(CallbackQueryHandler(settings_callback, pattern="^settings$"))
    application.add_handler(CallbackQueryHandler(change_character_callback, pattern="^change_character$"))
    application.add_handler(CallbackQueryHandler(select_character_callback, pattern="^character_"))
    application.add_handler(CallbackQueryHandler(clear_history_callback, pattern="^clear_history$"))
    application.add_handler(CallbackQueryHandler(confirm_clear_callback, pattern="^(yes|no)_clear$"))

    # Обработчики сообщений
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, route_text_message))

    # Обработчик ошибок
    application.add_error_handler(error_handler)

    # Запуск бота
    logger.info("✅ Бот успешно запущен и готов к работе!")
    application.run_polling(allowed_updates=Update.ALL_TYPES)

if __name__ == "__main__":
    main()
