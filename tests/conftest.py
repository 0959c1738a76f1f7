import itertools
from datetime import date, timedelta

import pytest

from src.config import WEEKDAYS
from src.database.models import (
    ActivityLevel,
    FitnessGoal,
    Gender,
    GeneratedPlan,
    Language,
    UserProfile
)
from src.database.storage import MemoryStorage
from src.services.tracker_service import TrackerService
from src.utils.errors import GenerationFailure


class FakeClock:
    """Управляемая текущая дата"""

    def __init__(self, start: date):
        self.current = start

    def __call__(self) -> date:
        return self.current

    def advance(self, days: int = 1) -> date:
        self.current += timedelta(days=days)
        return self.current


class FlakyStorage(MemoryStorage):
    """Хранилище, в котором следующие `failures` записей завершаются ошибкой"""

    def __init__(self):
        super().__init__()
        self.failures = 0

    def set(self, key: str, value: str) -> None:
        if self.failures:
            self.failures -= 1
            raise ConnectionError("storage unavailable")
        super().set(key, value)


class FakePlanGenerator:
    def __init__(self, plan: GeneratedPlan = None, error: Exception = None):
        self.plan = plan
        self.error = error
        self.calls = []

    async def generate_fitness_plan(self, profile):
        self.calls.append(profile)
        if self.error:
            raise self.error
        return self.plan


def plan_dict(water=3.5, workouts=None):
    workouts = workouts or {}
    meal = {"description": "Oatmeal with berries", "calories": 350, "protein": 12}
    return {
        "summary": "Stay consistent and you will see results.",
        "workout_plan": {
            day: workouts.get(day, ["Squats (3x10)", "Push-ups"]) for day in WEEKDAYS
        },
        "diet_plan": {
            day: {"Breakfast": [meal], "Lunch": [meal], "Dinner": [meal], "Snacks": []}
            for day in WEEKDAYS
        },
        "recommended_water_intake": water
    }


@pytest.fixture
def clock():
    return FakeClock(date(2024, 3, 4))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def flaky_storage():
    return FlakyStorage()


@pytest.fixture
def ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def profile():
    return UserProfile(
        age=30,
        gender=Gender.MALE,
        weight=80.0,
        height=180.0,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        goal=FitnessGoal.GAIN_MUSCLE,
        timeframe=12,
        language=Language.ENGLISH,
        water_intake=3.0,
        preferred_foods="chicken, brown rice, broccoli"
    )


@pytest.fixture
def plan():
    return GeneratedPlan.from_dict(plan_dict(workouts={"Sunday": []}))


@pytest.fixture
def generator(plan):
    return FakePlanGenerator(plan=plan)


@pytest.fixture
def tracker(storage, generator, clock, ids):
    service = TrackerService(storage, plan_generator=generator, today=clock, id_factory=ids)
    service.load()
    return service


@pytest.fixture
def failing_generator():
    return FakePlanGenerator(error=GenerationFailure("Не удалось сгенерировать план"))
