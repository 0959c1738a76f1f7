"""
Состояния для FSM (Finite State Machine) бота
"""
from enum import Enum

class BotState(str, Enum):
    """Состояния бота"""
    # Основные состояния
    IDLE = "idle"

    # Анкета для генерации плана
    PROFILE_AGE = "profile_age"
    PROFILE_GENDER = "profile_gender"
    PROFILE_WEIGHT = "profile_weight"
    PROFILE_HEIGHT = "profile_height"
    PROFILE_ACTIVITY = "profile_activity"
    PROFILE_GOAL = "profile_goal"
    PROFILE_TIMEFRAME = "profile_timeframe"
    PROFILE_WATER = "profile_water"
    PROFILE_FOODS = "profile_foods"
    PROFILE_LANGUAGE = "profile_language"

    # Ожидание ответа от AI (повторная отправка анкеты запрещена)
    GENERATING = "generating"

    # Запись тренировки
    WORKOUT_TYPE = "workout_type"
    WORKOUT_DURATION = "workout_duration"
    WORKOUT_INTENSITY = "workout_intensity"
    WORKOUT_NOTES = "workout_notes"
