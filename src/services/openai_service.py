"""
Сервис для работы с OpenAI API
"""
from openai import AsyncOpenAI
from typing import Dict
import logging
import json

from src.config import OPENAI_MODEL, OPENAI_TIMEOUT
from src.database.models import GeneratedPlan, UserProfile
from src.utils.errors import GenerationFailure

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = (
    "Не удалось сгенерировать план. Модель недоступна или запрос некорректен. Попробуй еще раз."
)

PLAN_SCHEMA_HINT = """{
    "summary": "краткое мотивирующее описание плана, не больше 2 предложений",
    "workout_plan": {
        "Monday": ["упражнение", ...],
        "Tuesday": [...], "Wednesday": [...], "Thursday": [...],
        "Friday": [...], "Saturday": [...], "Sunday": []
    },
    "diet_plan": {
        "Monday": {
            "Breakfast": [{"description": "блюдо", "calories": число, "protein": число}],
            "Lunch": [...], "Dinner": [...], "Snacks": [...]
        },
        "Tuesday": {...}, "Wednesday": {...}, "Thursday": {...},
        "Friday": {...}, "Saturday": {...}, "Sunday": {...}
    },
    "recommended_water_intake": число
}"""


class OpenAIService:
    """Сервис генерации фитнес-планов через OpenAI ChatGPT"""

    def __init__(self, api_key: str, model: str = OPENAI_MODEL, timeout: float = OPENAI_TIMEOUT):
        """Инициализация клиента OpenAI"""
        # Одна попытка без повторов: пользователь сам решает, повторять ли запрос
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model
        logger.info("OpenAI клиент инициализирован")

    @staticmethod
    def build_prompt(profile: UserProfile) -> str:
        """Промпт для генерации недельного плана"""
        language = profile.language.value
        return f"""Ты - опытный фитнес-тренер и нутрициолог. Составь персональный план тренировок и питания на 7 дней.

ВАЖНО: весь текст плана (описание, упражнения, блюда) пиши на языке: {language}.
Ключи JSON оставь на английском строго как в схеме.

Данные клиента:
- Возраст: {profile.age}
- Пол: {profile.gender.value}
- Вес: {profile.weight} кг
- Рост: {profile.height} см
- Уровень активности: {profile.activity_level.value}
- Цель: {profile.goal.value}
- Срок: {profile.timeframe} недель
- Текущее потребление воды: {profile.water_intake} л в день
- Любимые продукты: {profile.preferred_foods or 'не указаны'}

Требования:
1. Для цели 'Gain Muscle' - упор на силовые, для 'Lose Weight' - кардио и силовые, для 'Maintain Weight' - смешанная нагрузка. Минимум один день отдыха (пустой список упражнений).
2. Для каждого дня - Breakfast, Lunch, Dinner и Snacks.
3. Используй любимые продукты клиента, но не злоупотребляй ими - рацион должен быть разнообразным и сбалансированным.
4. Для КАЖДОГО блюда укажи calories (число) и protein в граммах (число).
5. Рассчитай recommended_water_intake в литрах.
6. План должен быть безопасным, мотивирующим и учитывать профиль клиента.

Верни результат СТРОГО в формате JSON:
{PLAN_SCHEMA_HINT}"""

    async def generate_fitness_plan(self, profile: UserProfile) -> GeneratedPlan:
        """
        Генерация недельного плана тренировок и питания

        Raises:
            GenerationFailure: если запрос не удался или ответ не соответствует схеме
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "Ты опытный фитнес-тренер и нутрициолог. Всегда отвечай в формате JSON."},
                    {"role": "user", "content": self.build_prompt(profile)}
                ],
                temperature=0.7,
                response_format={"type": "json_object"}
            )

            result: Dict = json.loads(response.choices[0].message.content)
            plan = GeneratedPlan.from_dict(result)
            logger.info(f"Фитнес-план успешно сгенерирован для параметров: {profile.gender.value}, {profile.age} лет")
            return plan

        except Exception as e:
            logger.error(f"Ошибка генерации фитнес-плана: {e}")
            raise GenerationFailure(GENERATION_ERROR_MESSAGE) from e
