"""
Обработчики истории планов и отметки выполненных дней
"""
from telegram import Update
from telegram.ext import ContextTypes
from src.bot.formatters import format_day, format_plan_overview
from src.bot.keyboards.inline import InlineKeyboards
from src.bot.session import open_tracker, send_pending_notices
from src.config import WEEKDAY_NAMES
import logging

logger = logging.getLogger(__name__)

async def my_plans_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показать историю планов"""
    query = update.callback_query
    await query.answer()

    tracker = await open_tracker(update, context)
    plans = tracker.plan_history()

    if not plans:
        await query.edit_message_text(
            "⚠️ У тебя еще нет планов. Создай первый!",
            reply_markup=InlineKeyboards.main_menu()
        )
        return

    await query.edit_message_text(
        text=f"📋 МОИ ПЛАНЫ\n\nВсего планов: {len(plans)}. Выбери план:",
        reply_markup=InlineKeyboards.plan_history(plans)
    )

async def plan_detail_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показать план по дням"""
    query = update.callback_query
    await query.answer()

    plan_id = query.data.split('_', 1)[1]  # plan_<id> -> <id>
    tracker = await open_tracker(update, context)
    record = tracker.get_plan(plan_id)

    if record is None:
        await query.edit_message_text("❌ План не найден", reply_markup=InlineKeyboards.back_to_menu())
        return

    await query.edit_message_text(
        text=format_plan_overview(record),
        reply_markup=InlineKeyboards.plan_days(record)
    )

async def day_detail_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Показать тренировку и питание на день"""
    query = update.callback_query
    await query.answer()

    _, plan_id, day = query.data.split('_')  # day_<id>_Monday
    tracker = await open_tracker(update, context)
    record = tracker.get_plan(plan_id)

    if record is None or day not in WEEKDAY_NAMES:
        await query.edit_message_text("❌ День не найден", reply_markup=InlineKeyboards.back_to_menu())
        return

    await query.edit_message_text(
        text=format_day(record, day),
        reply_markup=InlineKeyboards.day_actions(record, day)
    )

async def mark_done_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Отметить день плана выполненным"""
    query = update.callback_query

    _, plan_id, day = query.data.split('_')  # done_<id>_Monday
    tracker = await open_tracker(update, context)
    record = tracker.get_plan(plan_id)

    if record is None or day not in record.plan.workout_plan:
        await query.answer("❌ План не найден")
        return

    # Повторное нажатие ничего не меняет и не создает вторую запись
    entry = tracker.mark_day_complete(plan_id, day)
    if entry is None:
        await query.answer("Этот день уже отмечен")
        return

    await query.answer(f"✅ Записано: {entry.type}, {entry.duration_minutes} мин")

    await query.edit_message_text(
        text=format_day(record, day),
        reply_markup=InlineKeyboards.day_actions(record, day)
    )
    await send_pending_notices(update, context)
