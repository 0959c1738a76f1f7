"""
Обработчики журнала активности: тренировки, вода, прогресс
"""
from telegram import Update
from telegram.ext import ContextTypes
from src.bot.formatters import format_avatar, format_entry
from src.bot.keyboards.inline import InlineKeyboards
from src.bot.session import open_tracker, send_pending_notices
from src.bot.states import BotState
from src.database.models import Intensity
from src.utils.calculators import LevelCalculator
from src.utils.validators import DataValidator
import logging

logger = logging.getLogger(__name__)

async def log_workout_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Начать запись тренировки"""
    message = """🏋️ ЗАПИСЬ ТРЕНИРОВКИ

Какой была тренировка?

Примеры:
• "Бег"
• "Силовая на ноги"
• "Йога"
"""

    context.user_data['state'] = BotState.WORKOUT_TYPE
    context.user_data['pending_workout'] = {}

    if update.callback_query:
        await update.callback_query.answer()
        await update.callback_query.edit_message_text(text=message, reply_markup=InlineKeyboards.back_to_menu())
    else:
        await update.message.reply_text(message, reply_markup=InlineKeyboards.back_to_menu())

async def handle_workout_type(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка вида тренировки"""
    workout_type = update.message.text.strip()

    if not workout_type:
        await update.message.reply_text("❌ Опиши тренировку хотя бы одним словом:")
        return

    context.user_data['pending_workout'] = {'type': workout_type}
    context.user_data['state'] = BotState.WORKOUT_DURATION

    await update.message.reply_text("⏱ Сколько минут длилась тренировка?")

async def handle_workout_duration(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка длительности"""
    valid, duration, error = DataValidator.validate_duration(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nПопробуй еще раз:")
        return

    context.user_data['pending_workout']['duration'] = duration
    context.user_data['state'] = BotState.WORKOUT_INTENSITY

    await update.message.reply_text(
        "🔥 Какой была интенсивность?",
        reply_markup=InlineKeyboards.intensity_selection()
    )

async def handle_intensity_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка выбора интенсивности"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.WORKOUT_INTENSITY:
        return

    intensity = query.data.split('_', 1)[1]  # intensity_HIGH -> HIGH
    context.user_data['pending_workout']['intensity'] = Intensity[intensity]
    context.user_data['state'] = BotState.WORKOUT_NOTES

    await query.edit_message_text(
        "📝 Добавь заметку к тренировке или пропусти этот шаг:",
        reply_markup=InlineKeyboards.skip("notes")
    )

async def handle_workout_notes(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Обработка заметки и сохранение тренировки"""
    await _save_workout(update, context, notes=update.message.text.strip())

async def skip_notes_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Сохранение тренировки без заметки"""
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.WORKOUT_NOTES:
        return

    await _save_workout(update, context, notes=None)

async def _save_workout(update: Update, context: ContextTypes.DEFAULT_TYPE, notes):
    pending = context.user_data.pop('pending_workout', None)
    context.user_data['state'] = BotState.IDLE

    if not pending:
        await update.effective_message.reply_text("❌ Ошибка: данные не найдены")
        return

    tracker = await open_tracker(update, context)
    entry = tracker.log_workout(
        workout_type=pending['type'],
        duration_minutes=pending['duration'],
        intensity=pending['intensity'],
        notes=notes or None
    )
    level_info = tracker.current_level_info()

    message = f"""✅ ТРЕНИРОВКА ЗАПИСАНА!

{format_entry(entry)}

🏅 Уровень {level_info.level}: {level_info.progress} / {level_info.xp_for_next_level} дней до следующего"""

    await update.effective_message.reply_text(message, reply_markup=InlineKeyboards.progress_actions())
    await send_pending_notices(update, context)

async def water_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показать воду за сегодня"""
    query = update.callback_query
    await query.answer()

    tracker = await open_tracker(update, context)
    await query.edit_message_text(
        text=_water_message(tracker),
        reply_markup=InlineKeyboards.water_portions()
    )

async def handle_water_portion_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Добавить порцию воды"""
    query = update.callback_query

    amount = int(query.data.split('_')[1])  # water_250 -> 250
    tracker = await open_tracker(update, context)
    tracker.log_water(amount)

    await query.answer(f"💧 +{amount} мл")
    await query.edit_message_text(
        text=_water_message(tracker),
        reply_markup=InlineKeyboards.water_portions()
    )

def _water_message(tracker) -> str:
    current = tracker.todays_water()
    goal = tracker.water_goal()
    bar = LevelCalculator.progress_bar(min(current, goal), goal)
    return f"""💧 ВОДА СЕГОДНЯ

{bar}
{current} / {goal} мл

Добавь выпитую порцию:"""

async def progress_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показать прогресс"""
    tracker = await open_tracker(update, context)

    if not tracker.plan_history() and not tracker.activity_log.entries:
        text = "📈 Прогресса пока нет.\n\nСоздай первый план и начни отмечать тренировки!"
        markup = InlineKeyboards.main_menu()
    elif tracker.character is None:
        text = "🧍 Выбери персонажа, который будет расти вместе с тобой:"
        markup = InlineKeyboards.character_selection()
    else:
        text = _progress_message(tracker)
        markup = InlineKeyboards.progress_actions()

    if update.callback_query:
        await update.callback_query.answer()
        await update.callback_query.edit_message_text(text=text, reply_markup=markup)
    else:
        await update.message.reply_text(text, reply_markup=markup)

def _progress_message(tracker) -> str:
    stats = tracker.quick_stats()
    level_info = tracker.current_level_info()
    bar = LevelCalculator.progress_bar(level_info.progress, level_info.xp_for_next_level)

    message = f"""📈 ПРОГРЕСС

{format_avatar(tracker.character, stats.level)}
{bar} {level_info.progress} / {level_info.xp_for_next_level} дней до следующего уровня

📅 Активных дней: {stats.active_days}
🔥 Серия: {stats.current_streak} дн. подряд
🏋️ Тренировок: {stats.total_workouts}
✅ Выполнено дней плана: {stats.completed_plan_days}
💧 Вода сегодня: {tracker.todays_water()} / {tracker.water_goal()} мл
"""

    series = tracker.weight_series()
    if len(series) >= 2:
        message += "\n⚖️ Динамика веса:\n"
        for day, weight in series:
            message += f"• {day.isoformat()}: {weight} кг\n"

    workouts = tracker.recent_workouts()
    if workouts:
        message += "\n🕐 Последние тренировки:\n"
        message += "\n".join(format_entry(entry) for entry in workouts[:5])

    return message
