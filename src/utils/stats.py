"""
Статистика прогресса: вода, вес, тренировки
"""
from typing import Dict, List, Sequence
from datetime import date, timedelta

from src.config import DEFAULT_WATER_GOAL_ML, MEAL_SLOTS
from src.database.models import (
    ActivityEntry,
    ActivityKind,
    QuickStats,
    SavedPlanRecord,
    GeneratedPlan,
    WeightPoint
)
from src.utils.calculators import LevelCalculator


class ProgressStats:
    """Производные данные, пересчитываются при каждом чтении"""

    @staticmethod
    def todays_water_intake_ml(activity_log: Sequence[ActivityEntry], today: date) -> int:
        """Сколько воды выпито сегодня (мл)"""
        return sum(
            entry.amount_ml or 0
            for entry in activity_log
            if entry.kind == ActivityKind.WATER_INTAKE and entry.date == today
        )

    @staticmethod
    def daily_water_goal_ml(plan_history: Sequence[SavedPlanRecord]) -> int:
        """
        Дневная норма воды (мл) из последнего сохраненного плана

        История хранится от новых к старым, поэтому берется первый план.
        Без планов - норма по умолчанию.
        """
        if not plan_history:
            return DEFAULT_WATER_GOAL_ML
        return round(plan_history[0].plan.recommended_water_intake * 1000)

    @staticmethod
    def weight_series(plan_history: Sequence[SavedPlanRecord]) -> List[WeightPoint]:
        """
        Динамика веса: одна точка на каждый сохраненный план

        Сортировка по дате плана; при равных датах - в порядке сохранения.
        Вес берется из снимка профиля, сохраненного вместе с планом.
        """
        in_insertion_order = list(reversed(plan_history))
        ordered = sorted(in_insertion_order, key=lambda record: record.date)
        return [(record.date, record.profile.weight) for record in ordered]

    @staticmethod
    def recent_workouts(activity_log: Sequence[ActivityEntry]) -> List[ActivityEntry]:
        """Тренировки от новых к старым"""
        workouts = [entry for entry in activity_log if entry.is_workout]
        return sorted(workouts, key=lambda entry: entry.date, reverse=True)

    @staticmethod
    def current_streak(activity_log: Sequence[ActivityEntry], today: date) -> int:
        """
        Серия дней подряд с тренировками

        Серия заканчивается сегодня, а если сегодня тренировки еще не было - вчера.
        """
        workout_days = {entry.date for entry in activity_log if entry.is_workout}
        day = today if today in workout_days else today - timedelta(days=1)

        streak = 0
        while day in workout_days:
            streak += 1
            day -= timedelta(days=1)
        return streak

    @staticmethod
    def quick_stats(
        activity_log: Sequence[ActivityEntry],
        plan_history: Sequence[SavedPlanRecord],
        today: date
    ) -> QuickStats:
        """Краткая сводка для экрана прогресса"""
        level_info = LevelCalculator.calculate_level(activity_log)
        completed_days = sum(
            1 for record in plan_history for done in record.completion.values() if done
        )
        return QuickStats(
            active_days=level_info.active_days,
            level=level_info.level,
            progress=level_info.progress,
            current_streak=ProgressStats.current_streak(activity_log, today),
            total_workouts=sum(1 for entry in activity_log if entry.is_workout),
            completed_plan_days=completed_days
        )

    @staticmethod
    def daily_totals(plan: GeneratedPlan, day: str) -> Dict[str, float]:
        """Сумма калорий и белка по всем приемам пищи дня"""
        totals = {"calories": 0, "protein": 0}
        slots = plan.diet_plan.get(day) or {}
        for slot in MEAL_SLOTS:
            for meal in slots.get(slot, []):
                totals["calories"] += meal.calories
                totals["protein"] += meal.protein
        return totals
