"""
Калькулятор уровня и прогресса
"""
from typing import Iterable, List
import logging

from src.config import DAYS_PER_LEVEL, AVATAR_MILESTONES
from src.database.models import ActivityEntry, LevelInfo

logger = logging.getLogger(__name__)


class LevelCalculator:
    """Расчет уровня по журналу активности"""

    @staticmethod
    def count_active_days(activity_log: Iterable[ActivityEntry]) -> int:
        """
        Количество различных дат, в которые была хотя бы одна тренировка

        Записи о воде не учитываются. Порядок журнала не важен.
        """
        return len({entry.date for entry in activity_log if entry.is_workout})

    @staticmethod
    def calculate_level(activity_log: Iterable[ActivityEntry], days_per_level: int = DAYS_PER_LEVEL) -> LevelInfo:
        """
        Расчет уровня пользователя

        Уровень начинается с 1 и растет на 1 за каждые days_per_level активных дней.
        Значение всегда пересчитывается из журнала и нигде не хранится.

        Args:
            activity_log: записи журнала активности
            days_per_level: сколько активных дней нужно на один уровень

        Returns:
            LevelInfo с уровнем, прогрессом внутри уровня и числом активных дней
        """
        active_days = LevelCalculator.count_active_days(activity_log)
        level = active_days // days_per_level + 1
        progress = active_days % days_per_level

        logger.debug(f"Уровень {level}: {active_days} активных дней, прогресс {progress}/{days_per_level}")
        return LevelInfo(
            level=level,
            progress=progress,
            active_days=active_days,
            xp_for_next_level=days_per_level
        )

    @staticmethod
    def avatar_milestones(level: int) -> List[int]:
        """Открытые детали аватара (уровни 3, 5, 7, 10)"""
        return [milestone for milestone in AVATAR_MILESTONES if level >= milestone]

    @staticmethod
    def progress_bar(progress: int, total: int, width: int = 10) -> str:
        """Текстовая шкала прогресса, например ▓▓▓▓░░░░░░"""
        filled = round(width * progress / total) if total else 0
        return "▓" * filled + "░" * (width - filled)
