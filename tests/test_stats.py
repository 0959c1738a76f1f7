from dataclasses import replace
from datetime import date

from src.database.models import (
    ActivityEntry,
    ActivityKind,
    GeneratedPlan,
    Intensity,
    SavedPlanRecord
)
from src.utils.stats import ProgressStats

from tests.conftest import plan_dict

DAY1 = date(2024, 5, 1)
DAY2 = date(2024, 5, 2)
DAY3 = date(2024, 5, 3)


def entry(entry_id, day, kind, amount=None):
    if kind == ActivityKind.WORKOUT:
        return ActivityEntry(entry_id, day, kind, "Running", duration_minutes=30, intensity=Intensity.LOW)
    return ActivityEntry(entry_id, day, kind, "Water Intake", amount_ml=amount)


def saved(record_id, day, profile, weight, water=3.0):
    return SavedPlanRecord(
        id=record_id,
        date=day,
        profile=replace(profile, weight=weight),
        plan=GeneratedPlan.from_dict(plan_dict(water=water))
    )


def test_todays_water_sums_only_today_water():
    log = [
        entry("1", DAY2, ActivityKind.WATER_INTAKE, 250),
        entry("2", DAY2, ActivityKind.WORKOUT),
        entry("3", DAY1, ActivityKind.WATER_INTAKE, 1000),
        entry("4", DAY2, ActivityKind.WATER_INTAKE, 500),
    ]
    assert ProgressStats.todays_water_intake_ml(log, DAY2) == 750
    assert ProgressStats.todays_water_intake_ml(log, DAY3) == 0
    assert ProgressStats.todays_water_intake_ml([], DAY2) == 0


def test_daily_water_goal(profile):
    assert ProgressStats.daily_water_goal_ml([]) == 3000

    history = [saved("new", DAY2, profile, 80, water=3.5), saved("old", DAY1, profile, 80, water=2.0)]
    assert ProgressStats.daily_water_goal_ml(history) == 3500


def test_weight_series_orders_by_plan_date(profile):
    # сохранены по порядку: day1, day3, затем план с датой day2 (история - от новых к старым)
    history = [
        saved("c", DAY2, profile, 79.5),
        saved("b", DAY3, profile, 79),
        saved("a", DAY1, profile, 80),
    ]
    assert ProgressStats.weight_series(history) == [(DAY1, 80), (DAY2, 79.5), (DAY3, 79)]


def test_weight_series_ties_keep_insertion_order(profile):
    history = [saved("second", DAY1, profile, 78), saved("first", DAY1, profile, 81)]
    assert ProgressStats.weight_series(history) == [(DAY1, 81), (DAY1, 78)]
    assert ProgressStats.weight_series([]) == []


def test_recent_workouts_sorted_by_date_desc():
    log = [
        entry("1", DAY1, ActivityKind.WORKOUT),
        entry("2", DAY3, ActivityKind.WATER_INTAKE, 250),
        entry("3", DAY3, ActivityKind.WORKOUT),
        entry("4", DAY2, ActivityKind.WORKOUT),
    ]
    assert [e.id for e in ProgressStats.recent_workouts(log)] == ["3", "4", "1"]
    assert ProgressStats.recent_workouts([]) == []


def test_current_streak():
    log = [entry(str(i), day, ActivityKind.WORKOUT) for i, day in enumerate([DAY1, DAY2, DAY3])]

    assert ProgressStats.current_streak(log, DAY3) == 3
    # сегодня еще не тренировался - серия считается до вчера
    assert ProgressStats.current_streak(log, date(2024, 5, 4)) == 3
    assert ProgressStats.current_streak(log, date(2024, 5, 6)) == 0
    assert ProgressStats.current_streak([entry("w", DAY1, ActivityKind.WATER_INTAKE, 250)], DAY1) == 0


def test_quick_stats_empty():
    stats = ProgressStats.quick_stats([], [], DAY1)
    assert stats.active_days == 0
    assert stats.level == 1
    assert stats.current_streak == 0
    assert stats.completed_plan_days == 0


def test_daily_totals():
    plan = GeneratedPlan.from_dict(plan_dict())
    assert ProgressStats.daily_totals(plan, "Monday") == {"calories": 1050, "protein": 36}
    assert ProgressStats.daily_totals(plan, "Funday") == {"calories": 0, "protein": 0}
