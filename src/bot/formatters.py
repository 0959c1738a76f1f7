"""
Форматирование сообщений бота
"""
from src.config import MEAL_SLOTS, MEAL_SLOT_NAMES, WEEKDAY_NAMES
from src.database.models import ActivityEntry, CharacterGender, Intensity, SavedPlanRecord
from src.utils.calculators import LevelCalculator
from src.utils.stats import ProgressStats

INTENSITY_NAMES = {
    Intensity.LOW: "низкая",
    Intensity.MEDIUM: "средняя",
    Intensity.HIGH: "высокая"
}

# Детали аватара, открывающиеся с уровнем
AVATAR_DETAILS = {
    3: "🎽",
    5: "💪",
    7: "👟",
    10: "🏆"
}


def format_avatar(gender: CharacterGender, level: int) -> str:
    base = "🏋️‍♂️" if gender == CharacterGender.MALE else "🏋️‍♀️"
    details = "".join(AVATAR_DETAILS[milestone] for milestone in LevelCalculator.avatar_milestones(level))
    return f"{base}{details} LVL {level}"


def format_plan_overview(record: SavedPlanRecord) -> str:
    plan = record.plan
    completed = sum(1 for done in record.completion.values() if done)
    return f"""🎯 ПЛАН ОТ {record.date.isoformat()}

💡 {plan.summary}

⚖️ Вес: {record.profile.weight} кг
🎯 Цель: {record.profile.goal.value}
⏳ Срок: {record.profile.timeframe} недель
💧 Норма воды: {plan.recommended_water_intake} л в день
✅ Выполнено дней: {completed}

Выбери день:"""


def format_day(record: SavedPlanRecord, day: str) -> str:
    plan = record.plan
    lines = [f"📅 {WEEKDAY_NAMES.get(day, day).upper()}", ""]

    lines.append("🏋️ Тренировка:")
    if plan.is_rest_day(day):
        lines.append("• Активное восстановление или полный отдых")
    else:
        lines.extend(f"• {exercise}" for exercise in plan.workout_plan[day])
    if record.is_completed(day):
        lines.append("✅ Выполнено")

    lines.append("")
    lines.append("🍽 Питание:")
    slots = plan.diet_plan.get(day) or {}
    for slot in MEAL_SLOTS:
        meals = slots.get(slot, [])
        if not meals:
            continue
        lines.append(f"{MEAL_SLOT_NAMES[slot]}:")
        for meal in meals:
            lines.append(f"• {meal.description} - {meal.calories:.0f} ккал, {meal.protein:.0f} г белка")

    totals = ProgressStats.daily_totals(plan, day)
    lines.append("")
    lines.append(f"📊 За день: 🔥 {totals['calories']:.0f} ккал, 🥩 {totals['protein']:.0f} г белка")
    return "\n".join(lines)


def format_entry(entry: ActivityEntry) -> str:
    text = f"• {entry.date.isoformat()} - {entry.type}, {entry.duration_minutes} мин"
    if entry.intensity:
        text += f", {INTENSITY_NAMES[entry.intensity]}"
    if entry.notes:
        text += f" ({entry.notes[:40]})"
    return text
