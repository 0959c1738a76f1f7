"""
Inline клавиатуры для навигации в боте
"""
from typing import List
from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from src.config import WEEKDAYS, WEEKDAY_NAMES, WATER_PORTIONS_ML
from src.database.models import (
    ActivityLevel,
    CharacterGender,
    FitnessGoal,
    Gender,
    Intensity,
    Language,
    SavedPlanRecord
)

class InlineKeyboards:
    """Класс для создания inline клавиатур"""

    @staticmethod
    def main_menu() -> InlineKeyboardMarkup:
        """Главное меню бота"""
        keyboard = [
            [
                InlineKeyboardButton("✨ Новый план", callback_data="new_plan"),
                InlineKeyboardButton("📋 Мои планы", callback_data="my_plans")
            ],
            [
                InlineKeyboardButton("🏋️ Записать тренировку", callback_data="log_workout"),
                InlineKeyboardButton("💧 Вода", callback_data="water")
            ],
            [
                InlineKeyboardButton("📈 Прогресс", callback_data="progress")
            ],
            [
                InlineKeyboardButton("⚙️ Настройки", callback_data="settings"),
                InlineKeyboardButton("ℹ️ Помощь", callback_data="help")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def gender_selection() -> InlineKeyboardMarkup:
        """Выбор пола"""
        keyboard = [
            [
                InlineKeyboardButton("👨 Мужской", callback_data=f"gender_{Gender.MALE.name}"),
                InlineKeyboardButton("👩 Женский", callback_data=f"gender_{Gender.FEMALE.name}"),
                InlineKeyboardButton("🧑 Другой", callback_data=f"gender_{Gender.OTHER.name}")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def activity_level() -> InlineKeyboardMarkup:
        """Выбор уровня активности"""
        labels = {
            ActivityLevel.SEDENTARY: "🪑 Сидячий образ жизни",
            ActivityLevel.LIGHTLY_ACTIVE: "🚶 Легкая активность (1-3 раза/неделю)",
            ActivityLevel.MODERATELY_ACTIVE: "🏃 Умеренная активность (3-5 раз/неделю)",
            ActivityLevel.VERY_ACTIVE: "💪 Высокая активность (6-7 раз/неделю)",
            ActivityLevel.SUPER_ACTIVE: "🔥 Очень высокая (2 раза/день)"
        }
        keyboard = [
            [InlineKeyboardButton(label, callback_data=f"activity_{level.name}")]
            for level, label in labels.items()
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def goal_selection() -> InlineKeyboardMarkup:
        """Выбор цели"""
        keyboard = [
            [InlineKeyboardButton("📉 Похудение", callback_data=f"goal_{FitnessGoal.LOSE_WEIGHT.name}")],
            [InlineKeyboardButton("📈 Набор мышечной массы", callback_data=f"goal_{FitnessGoal.GAIN_MUSCLE.name}")],
            [InlineKeyboardButton("⚖️ Поддержание веса", callback_data=f"goal_{FitnessGoal.MAINTAIN_WEIGHT.name}")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def language_selection() -> InlineKeyboardMarkup:
        """Выбор языка плана (по два в ряд)"""
        buttons = [
            InlineKeyboardButton(language.value, callback_data=f"language_{language.name}")
            for language in Language
        ]
        keyboard = [buttons[i:i + 2] for i in range(0, len(buttons), 2)]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def skip(action: str) -> InlineKeyboardMarkup:
        """Кнопка пропуска необязательного шага"""
        keyboard = [[InlineKeyboardButton("⏭ Пропустить", callback_data=f"skip_{action}")]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def plan_history(plans: List[SavedPlanRecord]) -> InlineKeyboardMarkup:
        """Список сохраненных планов"""
        keyboard = [
            [InlineKeyboardButton(
                f"📅 {record.date.isoformat()} · ⚖️ {record.profile.weight} кг · 🎯 {record.profile.goal.value}",
                callback_data=f"plan_{record.id}"
            )]
            for record in plans
        ]
        keyboard.append([InlineKeyboardButton("🏠 Главное меню", callback_data="main_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def plan_days(record: SavedPlanRecord) -> InlineKeyboardMarkup:
        """Дни недели плана с отметками выполнения"""
        keyboard = []
        for day in WEEKDAYS:
            if record.is_completed(day):
                icon = "✅"
            elif record.plan.is_rest_day(day):
                icon = "😴"
            else:
                icon = "🏋️"
            keyboard.append([InlineKeyboardButton(
                f"{icon} {WEEKDAY_NAMES[day]}",
                callback_data=f"day_{record.id}_{day}"
            )])
        keyboard.append([
            InlineKeyboardButton("📋 Мои планы", callback_data="my_plans"),
            InlineKeyboardButton("🏠 Главное меню", callback_data="main_menu")
        ])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def day_actions(record: SavedPlanRecord, day: str) -> InlineKeyboardMarkup:
        """Действия с днем плана"""
        keyboard = []
        if not record.is_completed(day):
            keyboard.append([InlineKeyboardButton("✅ Отметить выполненным", callback_data=f"done_{record.id}_{day}")])
        keyboard.append([InlineKeyboardButton("🔙 К плану", callback_data=f"plan_{record.id}")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def intensity_selection() -> InlineKeyboardMarkup:
        """Выбор интенсивности тренировки"""
        keyboard = [
            [
                InlineKeyboardButton("🟢 Низкая", callback_data=f"intensity_{Intensity.LOW.name}"),
                InlineKeyboardButton("🟡 Средняя", callback_data=f"intensity_{Intensity.MEDIUM.name}"),
                InlineKeyboardButton("🔴 Высокая", callback_data=f"intensity_{Intensity.HIGH.name}")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def water_portions() -> InlineKeyboardMarkup:
        """Быстрое добавление воды"""
        keyboard = [
            [
                InlineKeyboardButton(f"💧 +{amount} мл", callback_data=f"water_{amount}")
                for amount in WATER_PORTIONS_ML
            ],
            [
                InlineKeyboardButton("🏠 Главное меню", callback_data="main_menu")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def progress_actions() -> InlineKeyboardMarkup:
        """Действия на экране прогресса"""
        keyboard = [
            [
                InlineKeyboardButton("🏋️ Записать тренировку", callback_data="log_workout"),
                InlineKeyboardButton("💧 Вода", callback_data="water")
            ],
            [
                InlineKeyboardButton("🏠 Главное меню", callback_data="main_menu")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def character_selection() -> InlineKeyboardMarkup:
        """Выбор персонажа"""
        keyboard = [
            [
                InlineKeyboardButton("🏋️‍♂️ Мужской", callback_data=f"character_{CharacterGender.MALE.name}"),
                InlineKeyboardButton("🏋️‍♀️ Женский", callback_data=f"character_{CharacterGender.FEMALE.name}")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def settings_actions() -> InlineKeyboardMarkup:
        """Действия в настройках"""
        keyboard = [
            [InlineKeyboardButton("🧍 Сменить персонажа", callback_data="change_character")],
            [InlineKeyboardButton("🗑 Удалить все данные", callback_data="clear_history")],
            [InlineKeyboardButton("🏠 Главное меню", callback_data="main_menu")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def back_to_menu() -> InlineKeyboardMarkup:
        """Кнопка возврата в главное меню"""
        keyboard = [[InlineKeyboardButton("🏠 Главное меню", callback_data="main_menu")]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def yes_no(action: str) -> InlineKeyboardMarkup:
        """Кнопки Да/Нет"""
        keyboard = [
            [
                InlineKeyboardButton("✅ Да", callback_data=f"yes_{action}"),
                InlineKeyboardButton("❌ Нет", callback_data=f"no_{action}")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)
