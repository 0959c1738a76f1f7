"""
Состояние пользователя: планы, журнал активности, персонаж и уровни
"""
from typing import Optional, List, Callable
from datetime import date
import logging

from src.config import DEFAULT_WORKOUT_DURATION, PLANNED_WORKOUT_LABEL
from src.database.models import (
    ActivityEntry,
    ActivityEntryInput,
    ActivityKind,
    CharacterGender,
    GeneratedPlan,
    Intensity,
    LevelInfo,
    QuickStats,
    SavedPlanRecord,
    UserProfile,
    WeightPoint
)
from src.database.storage import KeyValueStorage
from src.database.stores import ActivityLogStore, PlanStore, CharacterStore, new_id
from src.utils.calculators import LevelCalculator
from src.utils.errors import CorruptPersistedState, GenerationFailure
from src.utils.stats import ProgressStats
from src.utils.validators import DataValidator

logger = logging.getLogger(__name__)


def planned_workout_label(plan: Optional[GeneratedPlan], day: str) -> str:
    """
    Подпись для автоматической записи выполненного дня плана

    Первое упражнение дня без пояснения в скобках: "Squats (3x10)" -> "Squats".
    Для дня отдыха или пустых данных - "Planned Workout".
    """
    exercises = plan.workout_plan.get(day) if plan else None
    if not exercises:
        return PLANNED_WORKOUT_LABEL
    label = exercises[0].split('(')[0].strip()
    return label or PLANNED_WORKOUT_LABEL


class TrackerService:
    """
    Состояние одного пользователя

    Владеет тремя хранилищами (журнал активности, история планов, персонаж).
    Все изменения идут только через методы этого класса.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        plan_generator=None,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = new_id
    ):
        self.plan_generator = plan_generator
        self.today = today
        self.activity_log = ActivityLogStore(storage, today=today, id_factory=id_factory)
        self.plans = PlanStore(storage, today=today, id_factory=id_factory)
        self.characters = CharacterStore(storage)
        self.storage_reset = False
        self._level_up_listeners: List[Callable[[int], None]] = []

    def load(self) -> bool:
        """
        Загрузить состояние из хранилища

        Если хоть один ключ поврежден, удаляются все три и состояние начинается с нуля.

        Returns:
            False если данные пришлось сбросить
        """
        try:
            self.activity_log.load_all()
            self.plans.load_all()
            self.characters.load_all()
        except CorruptPersistedState as e:
            logger.error(f"Сохраненные данные повреждены, состояние сброшено: {e}")
            self._clear_stores()
            self.storage_reset = True
            return False

        self.storage_reset = False
        return True

    def add_level_up_listener(self, listener: Callable[[int], None]) -> None:
        """Подписка на повышение уровня (получает новый уровень)"""
        self._level_up_listeners.append(listener)

    # ===== PLANS =====
    async def generate_and_save(self, profile: UserProfile) -> SavedPlanRecord:
        """
        Сгенерировать план через AI и сохранить его в истории

        Raises:
            ValidationError: некорректный профиль
            GenerationFailure: AI не вернул план; история не меняется
        """
        DataValidator.validate_profile(profile)
        if self.plan_generator is None:
            raise GenerationFailure("Сервис генерации планов не настроен")

        plan = await self.plan_generator.generate_fitness_plan(profile)
        return self.plans.save(profile, plan)

    def plan_history(self) -> List[SavedPlanRecord]:
        """Планы от новых к старым"""
        return list(self.plans.plans)

    def get_plan(self, plan_id: str) -> Optional[SavedPlanRecord]:
        return self.plans.get(plan_id)

    def mark_day_complete(self, plan_id: str, day: str) -> Optional[ActivityEntry]:
        """
        Отметить день плана выполненным и записать тренировку в журнал

        Повторный вызов, неизвестный план или день ничего не меняют.
        Сначала сохраняется отметка, затем запись в журнал: при сбое между
        ними день останется отмеченным без записи активности.

        Returns:
            Добавленная запись или None, если ничего не изменилось
        """
        record = self.plans.get(plan_id)
        if record is None or not self.plans.mark_complete(plan_id, day):
            return None

        # Реальные длительность и интенсивность не отслеживаются, пишем значения по умолчанию
        return self.log_activity(ActivityEntryInput(
            kind=ActivityKind.WORKOUT,
            type=planned_workout_label(record.plan, day),
            duration_minutes=DEFAULT_WORKOUT_DURATION,
            intensity=Intensity.MEDIUM,
            notes=f"Completed planned workout for {day}."
        ))

    # ===== ACTIVITY LOG =====
    def log_activity(self, entry_input: ActivityEntryInput) -> ActivityEntry:
        """
        Добавить запись в журнал

        Повышение уровня сообщается подписчикам только для тренировок.

        Raises:
            ValidationError: поля не соответствуют типу записи
        """
        old_level = LevelCalculator.calculate_level(self.activity_log.entries).level
        entry = self.activity_log.append(entry_input)

        if entry.kind == ActivityKind.WORKOUT:
            new_level = LevelCalculator.calculate_level(self.activity_log.entries).level
            if new_level > old_level:
                logger.info(f"Новый уровень: {new_level}")
                for listener in self._level_up_listeners:
                    listener(new_level)

        return entry

    def log_workout(
        self,
        workout_type: str,
        duration_minutes: int,
        intensity: Intensity = Intensity.MEDIUM,
        notes: Optional[str] = None
    ) -> ActivityEntry:
        return self.log_activity(ActivityEntryInput(
            kind=ActivityKind.WORKOUT,
            type=workout_type,
            duration_minutes=duration_minutes,
            intensity=intensity,
            notes=notes
        ))

    def log_water(self, amount_ml: int) -> ActivityEntry:
        return self.log_activity(ActivityEntryInput(kind=ActivityKind.WATER_INTAKE, amount_ml=amount_ml))

    # ===== CHARACTER =====
    @property
    def character(self) -> Optional[CharacterGender]:
        return self.characters.gender

    def select_character(self, gender: CharacterGender) -> CharacterGender:
        return self.characters.select(gender)

    def clear_all_history(self) -> None:
        """Удалить планы, журнал и персонажа"""
        self._clear_stores()
        logger.info("История пользователя очищена")

    def _clear_stores(self) -> None:
        self.plans.clear()
        self.activity_log.clear()
        self.characters.clear()

    # ===== QUERIES =====
    def current_level_info(self) -> LevelInfo:
        return LevelCalculator.calculate_level(self.activity_log.entries)

    def todays_water(self) -> int:
        return ProgressStats.todays_water_intake_ml(self.activity_log.entries, self.today())

    def water_goal(self) -> int:
        return ProgressStats.daily_water_goal_ml(self.plans.plans)

    def weight_series(self) -> List[WeightPoint]:
        return ProgressStats.weight_series(self.plans.plans)

    def recent_workouts(self) -> List[ActivityEntry]:
        return ProgressStats.recent_workouts(self.activity_log.entries)

    def quick_stats(self) -> QuickStats:
        return ProgressStats.quick_stats(self.activity_log.entries, self.plans.plans, self.today())
