from datetime import date, timedelta

from src.database.models import ActivityEntry, ActivityKind, Intensity
from src.utils.calculators import LevelCalculator


def workout(day, label="Running"):
    return ActivityEntry(
        id=f"w-{day.isoformat()}-{label}",
        date=day,
        kind=ActivityKind.WORKOUT,
        type=label,
        duration_minutes=30,
        intensity=Intensity.MEDIUM
    )


def water(day, amount=250):
    return ActivityEntry(
        id=f"water-{day.isoformat()}-{amount}",
        date=day,
        kind=ActivityKind.WATER_INTAKE,
        type="Water Intake",
        amount_ml=amount
    )


START = date(2024, 1, 1)


def test_empty_log_is_level_one():
    info = LevelCalculator.calculate_level([])
    assert info.level == 1
    assert info.progress == 0
    assert info.active_days == 0
    assert info.xp_for_next_level == 5


def test_level_counts_distinct_workout_dates():
    for days in range(0, 13):
        log = []
        for offset in range(days):
            day = START + timedelta(days=offset)
            # несколько тренировок в один день считаются одним днем
            log.extend([workout(day, "Running"), workout(day, "Yoga")])
        info = LevelCalculator.calculate_level(log)
        assert info.active_days == days
        assert info.level == days // 5 + 1
        assert info.progress == days % 5


def test_water_entries_never_change_level():
    log = [workout(START + timedelta(days=i)) for i in range(4)]
    before = LevelCalculator.calculate_level(log)

    log += [water(START + timedelta(days=i), 500) for i in range(20)]
    after = LevelCalculator.calculate_level(log)

    assert after == before


def test_water_dates_do_not_count_as_active_days():
    log = [workout(START), water(START + timedelta(days=1))]
    assert LevelCalculator.count_active_days(log) == 1


def test_log_order_is_irrelevant():
    log = [workout(START + timedelta(days=i)) for i in range(7)]
    assert LevelCalculator.calculate_level(log) == LevelCalculator.calculate_level(list(reversed(log)))


def test_avatar_milestones():
    assert LevelCalculator.avatar_milestones(1) == []
    assert LevelCalculator.avatar_milestones(5) == [3, 5]
    assert LevelCalculator.avatar_milestones(12) == [3, 5, 7, 10]


def test_progress_bar():
    assert LevelCalculator.progress_bar(0, 5) == "░" * 10
    assert LevelCalculator.progress_bar(5, 5) == "▓" * 10
    assert LevelCalculator.progress_bar(2, 5) == "▓" * 4 + "░" * 6
    assert LevelCalculator.progress_bar(1, 0) == "░" * 10
