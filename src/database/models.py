"""
Модели данных для работы с хранилищем
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Dict, List, Any, Tuple

from src.config import WEEKDAYS, MEAL_SLOTS


class ActivityKind(str, Enum):
    """Тип записи в журнале активности"""
    WORKOUT = "Workout"
    WATER_INTAKE = "WaterIntake"


class Intensity(str, Enum):
    """Интенсивность тренировки"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class CharacterGender(str, Enum):
    """Вариант аватара персонажа"""
    MALE = "Male"
    FEMALE = "Female"


class ActivityLevel(str, Enum):
    SEDENTARY = "Sedentary (little or no exercise)"
    LIGHTLY_ACTIVE = "Lightly active (light exercise/sports 1-3 days/week)"
    MODERATELY_ACTIVE = "Moderately active (moderate exercise/sports 3-5 days/week)"
    VERY_ACTIVE = "Very active (hard exercise/sports 6-7 days a week)"
    SUPER_ACTIVE = "Super active (very hard exercise/physical job & exercise two times a day)"


class FitnessGoal(str, Enum):
    LOSE_WEIGHT = "Lose Weight"
    GAIN_MUSCLE = "Gain Muscle"
    MAINTAIN_WEIGHT = "Maintain Weight"


class Language(str, Enum):
    """Язык содержимого сгенерированного плана"""
    ENGLISH = "English"
    GERMAN = "German"
    SPANISH = "Spanish"
    FRENCH = "French"
    ITALIAN = "Italian"
    PORTUGUESE = "Portuguese"
    DUTCH = "Dutch"
    RUSSIAN = "Russian"
    CHINESE_SIMPLIFIED = "Chinese (Simplified)"
    JAPANESE = "Japanese"


def _number(value: Any, name: str) -> float:
    """Число из JSON (bool числом не считается)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name}: ожидалось число, получено {value!r}")
    return value


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name}: ожидалась строка, получено {value!r}")
    return value


@dataclass
class ActivityEntryInput:
    """Данные новой записи активности (без id и даты)"""
    kind: ActivityKind
    type: Optional[str] = None  # свободная подпись, например "Running"
    duration_minutes: Optional[int] = None
    intensity: Optional[Intensity] = None
    notes: Optional[str] = None
    amount_ml: Optional[int] = None


@dataclass(frozen=True)
class ActivityEntry:
    """Запись в журнале активности (тренировка или вода)"""
    id: str
    date: date
    kind: ActivityKind
    type: str
    duration_minutes: Optional[int] = None
    intensity: Optional[Intensity] = None
    notes: Optional[str] = None
    amount_ml: Optional[int] = None

    @property
    def is_workout(self) -> bool:
        return self.kind == ActivityKind.WORKOUT

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "kind": self.kind.value,
            "type": self.type,
            "duration_minutes": self.duration_minutes,
            "intensity": self.intensity.value if self.intensity else None,
            "notes": self.notes,
            "amount_ml": self.amount_ml
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ActivityEntry":
        intensity = data.get("intensity")
        return cls(
            id=_text(data["id"], "id"),
            date=date.fromisoformat(data["date"]),
            kind=ActivityKind(data["kind"]),
            type=_text(data["type"], "type"),
            duration_minutes=data.get("duration_minutes"),
            intensity=Intensity(intensity) if intensity else None,
            notes=data.get("notes"),
            amount_ml=data.get("amount_ml")
        )


@dataclass(frozen=True)
class UserProfile:
    """Снимок данных пользователя на момент генерации плана"""
    age: int
    gender: Gender
    weight: float  # кг
    height: float  # см
    activity_level: ActivityLevel
    goal: FitnessGoal
    timeframe: int  # недель
    language: Language
    water_intake: float  # литров в день
    preferred_foods: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "age": self.age,
            "gender": self.gender.value,
            "weight": self.weight,
            "height": self.height,
            "activity_level": self.activity_level.value,
            "goal": self.goal.value,
            "timeframe": self.timeframe,
            "language": self.language.value,
            "water_intake": self.water_intake,
            "preferred_foods": self.preferred_foods
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "UserProfile":
        return cls(
            age=int(_number(data["age"], "age")),
            gender=Gender(data["gender"]),
            weight=_number(data["weight"], "weight"),
            height=_number(data["height"], "height"),
            activity_level=ActivityLevel(data["activity_level"]),
            goal=FitnessGoal(data["goal"]),
            timeframe=int(_number(data["timeframe"], "timeframe")),
            language=Language(data["language"]),
            water_intake=_number(data["water_intake"], "water_intake"),
            preferred_foods=data.get("preferred_foods")
        )


@dataclass(frozen=True)
class Meal:
    """Блюдо в плане питания"""
    description: str
    calories: float
    protein: float  # грамм

    def to_dict(self) -> Dict:
        return {"description": self.description, "calories": self.calories, "protein": self.protein}

    @classmethod
    def from_dict(cls, data: Dict) -> "Meal":
        return cls(
            description=_text(data["description"], "description"),
            calories=_number(data["calories"], "calories"),
            protein=_number(data["protein"], "protein")
        )


@dataclass(frozen=True)
class GeneratedPlan:
    """
    Недельный план тренировок и питания от AI

    workout_plan: день недели -> список упражнений (пустой список = день отдыха)
    diet_plan: день недели -> прием пищи (Breakfast/Lunch/Dinner/Snacks) -> блюда
    """
    summary: str
    workout_plan: Dict[str, List[str]]
    diet_plan: Dict[str, Dict[str, List[Meal]]]
    recommended_water_intake: float  # литров

    def to_dict(self) -> Dict:
        return {
            "summary": self.summary,
            "workout_plan": {day: list(items) for day, items in self.workout_plan.items()},
            "diet_plan": {
                day: {slot: [meal.to_dict() for meal in meals] for slot, meals in slots.items()}
                for day, slots in self.diet_plan.items()
            },
            "recommended_water_intake": self.recommended_water_intake
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "GeneratedPlan":
        """
        Разбор плана из JSON

        Все 7 дней недели обязательны в обоих расписаниях.
        Отсутствующий прием пищи считается пустым.

        Raises:
            ValueError: если структура не соответствует схеме
        """
        if not isinstance(data, dict):
            raise ValueError("План должен быть JSON-объектом")

        workout_raw = data.get("workout_plan")
        diet_raw = data.get("diet_plan")
        if not isinstance(workout_raw, dict) or not isinstance(diet_raw, dict):
            raise ValueError("Отсутствует workout_plan или diet_plan")

        workout_plan = {}
        diet_plan = {}
        for day in WEEKDAYS:
            exercises = workout_raw.get(day)
            if not isinstance(exercises, list):
                raise ValueError(f"workout_plan.{day}: ожидался список упражнений")
            workout_plan[day] = [_text(item, f"workout_plan.{day}") for item in exercises]

            slots = diet_raw.get(day)
            if not isinstance(slots, dict):
                raise ValueError(f"diet_plan.{day}: ожидался объект с приемами пищи")
            day_meals = {}
            for slot in MEAL_SLOTS:
                meals = slots.get(slot) or []
                if not isinstance(meals, list):
                    raise ValueError(f"diet_plan.{day}.{slot}: ожидался список блюд")
                day_meals[slot] = [Meal.from_dict(meal) for meal in meals]
            diet_plan[day] = day_meals

        water = _number(data.get("recommended_water_intake"), "recommended_water_intake")
        if water <= 0:
            raise ValueError("recommended_water_intake должен быть положительным")

        return cls(
            summary=_text(data.get("summary"), "summary"),
            workout_plan=workout_plan,
            diet_plan=diet_plan,
            recommended_water_intake=water
        )

    def is_rest_day(self, day: str) -> bool:
        return not self.workout_plan.get(day)


@dataclass
class SavedPlanRecord:
    """Сохраненный план с отметками выполнения по дням"""
    id: str
    date: date
    profile: UserProfile
    plan: GeneratedPlan
    completion: Dict[str, bool] = field(default_factory=dict)

    def is_completed(self, day: str) -> bool:
        return self.completion.get(day, False)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "profile": self.profile.to_dict(),
            "plan": self.plan.to_dict(),
            "completion": dict(self.completion)
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "SavedPlanRecord":
        plan = GeneratedPlan.from_dict(data["plan"])
        completion = data.get("completion") or {}
        if not isinstance(completion, dict) or not set(completion) <= set(plan.workout_plan):
            raise ValueError("completion содержит неизвестные дни")
        return cls(
            id=_text(data["id"], "id"),
            date=date.fromisoformat(data["date"]),
            profile=UserProfile.from_dict(data["profile"]),
            plan=plan,
            completion={day: bool(done) for day, done in completion.items()}
        )


@dataclass(frozen=True)
class LevelInfo:
    """Уровень пользователя (вычисляется, не хранится)"""
    level: int
    progress: int
    active_days: int
    xp_for_next_level: int


@dataclass(frozen=True)
class QuickStats:
    """Краткая сводка прогресса"""
    active_days: int
    level: int
    progress: int
    current_streak: int
    total_workouts: int
    completed_plan_days: int


WeightPoint = Tuple[date, float]
