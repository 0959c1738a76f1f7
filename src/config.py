"""
Конфигурация приложения
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Supabase настройки
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Хранилище: supabase или memory (для локального запуска без БД)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "supabase")
STORAGE_TABLE = os.getenv("STORAGE_TABLE", "kv_store")

# OpenAI настройки
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "120"))

# Ключи хранилища
PLANS_KEY = "fitness_plans"
ACTIVITY_LOG_KEY = "activity_log"
CHARACTER_KEY = "character_gender"

# Прогресс и уровни
DAYS_PER_LEVEL = 5
AVATAR_MILESTONES = (3, 5, 7, 10)

# Вода
DEFAULT_WATER_GOAL_ML = 3000
WATER_PORTIONS_ML = (250, 500, 750)

# Автоматическая запись выполненного дня плана
DEFAULT_WORKOUT_DURATION = 60
PLANNED_WORKOUT_LABEL = "Planned Workout"
WATER_INTAKE_LABEL = "Water Intake"

# Дни недели в каноническом порядке
WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday"
)

WEEKDAY_NAMES = {
    "Monday": "Понедельник",
    "Tuesday": "Вторник",
    "Wednesday": "Среда",
    "Thursday": "Четверг",
    "Friday": "Пятница",
    "Saturday": "Суббота",
    "Sunday": "Воскресенье"
}

MEAL_SLOTS = ("Breakfast", "Lunch", "Dinner", "Snacks")

MEAL_SLOT_NAMES = {
    "Breakfast": "Завтрак",
    "Lunch": "Обед",
    "Dinner": "Ужин",
    "Snacks": "Перекусы"
}
