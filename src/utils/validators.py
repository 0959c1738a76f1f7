"""
Валидаторы для проверки данных пользователя
"""
from typing import Tuple, Optional, List

from src.database.models import (
    ActivityEntryInput,
    ActivityKind,
    ActivityLevel,
    FitnessGoal,
    Gender,
    Intensity,
    Language,
    UserProfile
)
from src.utils.errors import ValidationError


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class DataValidator:
    """Валидация пользовательских данных"""

    @staticmethod
    def parse_numeric(value_str: str) -> Tuple[bool, Optional[float], str]:
        """
        Разбор числового поля формы

        Можно указать несколько значений через запятую (например, замеры веса
        за несколько дней: "80, 80.6, 79.8") - берется среднее, округленное до 0.01.
        Дробная часть пишется через точку.
        """
        if not value_str or not value_str.strip():
            return False, None, "Значение обязательно"

        try:
            numbers: List[float] = [float(part.strip()) for part in value_str.split(',') if part.strip()]
        except ValueError:
            return False, None, "Неверный формат. Используй числа, запятые или точку для дробей"

        if not numbers:
            return False, None, "Неверный формат. Используй числа, запятые или точку для дробей"
        if any(n <= 0 for n in numbers):
            return False, None, "Значение должно быть положительным"

        return True, round(sum(numbers) / len(numbers), 2), ""

    @staticmethod
    def validate_age(age_str: str) -> Tuple[bool, Optional[int], str]:
        """Валидация возраста"""
        valid, value, error = DataValidator.parse_numeric(age_str)
        if not valid:
            return False, None, error
        age = round(value)
        if 10 <= age <= 120:
            return True, age, ""
        return False, None, "Возраст должен быть от 10 до 120 лет"

    @staticmethod
    def validate_weight(weight_str: str) -> Tuple[bool, Optional[float], str]:
        """Валидация веса"""
        valid, weight, error = DataValidator.parse_numeric(weight_str)
        if not valid:
            return False, None, error
        if 30 <= weight <= 300:
            return True, weight, ""
        return False, None, "Вес должен быть от 30 до 300 кг"

    @staticmethod
    def validate_height(height_str: str) -> Tuple[bool, Optional[float], str]:
        """Валидация роста"""
        valid, height, error = DataValidator.parse_numeric(height_str)
        if not valid:
            return False, None, error
        if 100 <= height <= 250:
            return True, height, ""
        return False, None, "Рост должен быть от 100 до 250 см"

    @staticmethod
    def validate_timeframe(weeks_str: str) -> Tuple[bool, Optional[int], str]:
        """Валидация срока (в неделях)"""
        valid, value, error = DataValidator.parse_numeric(weeks_str)
        if not valid:
            return False, None, error
        weeks = round(value)
        if 1 <= weeks <= 104:
            return True, weeks, ""
        return False, None, "Срок должен быть от 1 до 104 недель"

    @staticmethod
    def validate_water(liters_str: str) -> Tuple[bool, Optional[float], str]:
        """Валидация текущего потребления воды (литров в день)"""
        valid, liters, error = DataValidator.parse_numeric(liters_str)
        if not valid:
            return False, None, error
        if liters <= 10:
            return True, liters, ""
        return False, None, "Укажи объем воды в литрах (не больше 10)"

    @staticmethod
    def validate_duration(duration_str: str) -> Tuple[bool, Optional[int], str]:
        """Валидация длительности тренировки (целые минуты)"""
        duration_str = (duration_str or "").strip()
        if not duration_str.isdigit():
            return False, None, "Укажи длительность целым числом минут"
        duration = int(duration_str)
        if 1 <= duration <= 1440:
            return True, duration, ""
        return False, None, "Длительность должна быть от 1 до 1440 минут"

    @staticmethod
    def validate_activity(entry: ActivityEntryInput) -> ActivityEntryInput:
        """
        Проверка записи активности перед добавлением в журнал

        Тренировка: подпись, длительность (целое > 0) и интенсивность, без объема воды.
        Вода: объем в мл (целое > 0), без длительности и интенсивности.

        Returns:
            Нормализованная запись (kind и intensity приведены к Enum)

        Raises:
            ValidationError: при несоответствии полей типу записи
        """
        try:
            kind = ActivityKind(entry.kind)
        except ValueError:
            raise ValidationError(f"Неизвестный тип записи: {entry.kind!r}")

        if kind == ActivityKind.WORKOUT:
            if not isinstance(entry.type, str) or not entry.type.strip():
                raise ValidationError("Для тренировки нужно указать ее вид")
            if not _is_positive_int(entry.duration_minutes):
                raise ValidationError("Длительность тренировки должна быть целым положительным числом")
            if entry.intensity is None:
                raise ValidationError("Для тренировки нужно указать интенсивность")
            try:
                intensity = Intensity(entry.intensity)
            except ValueError:
                raise ValidationError(f"Неизвестная интенсивность: {entry.intensity!r}")
            if entry.amount_ml is not None:
                raise ValidationError("У тренировки не может быть объема воды")
            return ActivityEntryInput(
                kind=kind,
                type=entry.type.strip(),
                duration_minutes=entry.duration_minutes,
                intensity=intensity,
                notes=entry.notes or None
            )

        if not _is_positive_int(entry.amount_ml):
            raise ValidationError("Объем воды должен быть целым положительным числом (мл)")
        if entry.duration_minutes is not None or entry.intensity is not None:
            raise ValidationError("У записи о воде не может быть длительности или интенсивности")
        return ActivityEntryInput(
            kind=kind,
            type=entry.type or None,
            notes=entry.notes or None,
            amount_ml=entry.amount_ml
        )

    @staticmethod
    def validate_profile(profile: UserProfile) -> UserProfile:
        """
        Проверка профиля перед генерацией плана

        Raises:
            ValidationError: если числовые поля не положительные или значения вне списков
        """
        if not _is_positive_int(profile.age):
            raise ValidationError("Возраст должен быть целым положительным числом")
        if not _is_positive_int(profile.timeframe):
            raise ValidationError("Срок должен быть целым положительным числом недель")
        for name in ("weight", "height", "water_intake"):
            if not _is_positive_number(getattr(profile, name)):
                raise ValidationError(f"Поле {name} должно быть положительным числом")

        try:
            Gender(profile.gender)
            ActivityLevel(profile.activity_level)
            FitnessGoal(profile.goal)
            Language(profile.language)
        except ValueError as e:
            raise ValidationError(f"Некорректное значение в профиле: {e}")

        if profile.preferred_foods is not None and not isinstance(profile.preferred_foods, str):
            raise ValidationError("Предпочитаемые продукты должны быть текстом")
        return profile
