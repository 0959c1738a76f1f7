"""
Доступ к состоянию пользователя из обработчиков
"""
from telegram import Update
from telegram.ext import ContextTypes
import logging

from src.bot.formatters import format_avatar
from src.services.tracker_service import TrackerService

logger = logging.getLogger(__name__)

STORAGE_RESET_MESSAGE = (
    "⚠️ Сохраненные данные оказались повреждены и были сброшены. "
    "Планы, журнал активности и персонаж начинаются с нуля."
)


def get_tracker(update: Update, context: ContextTypes.DEFAULT_TYPE) -> TrackerService:
    """
    Состояние текущего пользователя

    Создается при первом обращении: данные читаются из хранилища
    под пространством имен Telegram ID пользователя.
    """
    tracker = context.user_data.get('tracker')
    if tracker is not None:
        return tracker

    user_id = update.effective_user.id
    storage = context.bot_data['storage_factory'](str(user_id))
    tracker = TrackerService(storage, plan_generator=context.bot_data.get('openai'))

    level_ups = context.user_data.setdefault('level_ups', [])
    tracker.add_level_up_listener(level_ups.append)

    if not tracker.load():
        context.user_data['storage_reset'] = True
    logger.info(f"Загружено состояние пользователя {user_id}")

    context.user_data['tracker'] = tracker
    return tracker


async def open_tracker(update: Update, context: ContextTypes.DEFAULT_TYPE) -> TrackerService:
    """Состояние пользователя; о сбросе поврежденных данных сообщаем сразу"""
    tracker = get_tracker(update, context)
    if context.user_data.pop('storage_reset', False):
        await update.effective_message.reply_text(STORAGE_RESET_MESSAGE)
    return tracker


async def send_pending_notices(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Отправить накопленные уведомления: сброс данных и новые уровни"""
    message = update.effective_message

    if context.user_data.pop('storage_reset', False):
        await message.reply_text(STORAGE_RESET_MESSAGE)

    level_ups = context.user_data.get('level_ups', [])
    tracker = context.user_data.get('tracker')
    while level_ups:
        level = level_ups.pop(0)
        text = f"🎉 НОВЫЙ УРОВЕНЬ!\n\nТы достиг уровня {level}!"
        if tracker is not None and tracker.character is not None:
            text += f"\n\n{format_avatar(tracker.character, level)}"
        text += "\n\nТак держать! 💪"
        await message.reply_text(text)
