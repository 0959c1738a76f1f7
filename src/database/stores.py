"""
Хранилища состояния пользователя: журнал активности, история планов, персонаж
"""
from typing import Optional, List, Callable
from datetime import date
import json
import logging
import uuid

from src.config import ACTIVITY_LOG_KEY, PLANS_KEY, CHARACTER_KEY, WATER_INTAKE_LABEL
from src.database.models import (
    ActivityEntry,
    ActivityEntryInput,
    ActivityKind,
    CharacterGender,
    GeneratedPlan,
    SavedPlanRecord,
    UserProfile
)
from src.database.storage import KeyValueStorage
from src.utils.errors import CorruptPersistedState
from src.utils.validators import DataValidator

logger = logging.getLogger(__name__)

# Ошибки разбора сохраненных данных
_PARSE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


def new_id() -> str:
    return str(uuid.uuid4())


def _load_list(storage: KeyValueStorage, key: str) -> Optional[list]:
    raw = storage.get(key)
    if raw is None:
        return None
    try:
        items = json.loads(raw)
    except ValueError as e:
        raise CorruptPersistedState(key, str(e)) from e
    if not isinstance(items, list):
        raise CorruptPersistedState(key, "ожидался список")
    return items


class ActivityLogStore:
    """Журнал активности: только добавление, новые записи в начале"""

    def __init__(
        self,
        storage: KeyValueStorage,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = new_id
    ):
        self.storage = storage
        self.today = today
        self.id_factory = id_factory
        self.entries: List[ActivityEntry] = []

    def load_all(self) -> List[ActivityEntry]:
        """
        Загрузить журнал из хранилища

        Raises:
            CorruptPersistedState: если данные не удалось разобрать
        """
        items = _load_list(self.storage, ACTIVITY_LOG_KEY)
        if items is None:
            self.entries = []
            return []

        try:
            entries = [ActivityEntry.from_dict(item) for item in items]
            for entry in entries:
                DataValidator.validate_activity(ActivityEntryInput(
                    kind=entry.kind,
                    type=entry.type,
                    duration_minutes=entry.duration_minutes,
                    intensity=entry.intensity,
                    notes=entry.notes,
                    amount_ml=entry.amount_ml
                ))
        except _PARSE_ERRORS as e:
            raise CorruptPersistedState(ACTIVITY_LOG_KEY, str(e)) from e

        self.entries = entries
        return list(entries)

    def append(self, entry_input: ActivityEntryInput) -> ActivityEntry:
        """
        Добавить запись с текущей датой

        Raises:
            ValidationError: если поля не соответствуют типу записи
        """
        data = DataValidator.validate_activity(entry_input)

        if data.kind == ActivityKind.WATER_INTAKE:
            label = data.type or WATER_INTAKE_LABEL
        else:
            label = data.type

        entry = ActivityEntry(
            id=self.id_factory(),
            date=self.today(),
            kind=data.kind,
            type=label,
            duration_minutes=data.duration_minutes,
            intensity=data.intensity,
            notes=data.notes,
            amount_ml=data.amount_ml
        )

        # Сначала запись в хранилище: при ошибке журнал в памяти не меняется
        entries = [entry] + self.entries
        self._persist([item.to_dict() for item in entries])
        self.entries = entries
        logger.info(f"Добавлена запись активности: {entry.kind.value} '{entry.type}' за {entry.date}")
        return entry

    def clear(self) -> None:
        self.storage.remove(ACTIVITY_LOG_KEY)
        self.entries = []

    def _persist(self, items: List[dict]) -> None:
        self.storage.set(ACTIVITY_LOG_KEY, json.dumps(items, ensure_ascii=False))


class PlanStore:
    """История сгенерированных планов, новые в начале"""

    def __init__(
        self,
        storage: KeyValueStorage,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = new_id
    ):
        self.storage = storage
        self.today = today
        self.id_factory = id_factory
        self.plans: List[SavedPlanRecord] = []

    def load_all(self) -> List[SavedPlanRecord]:
        """
        Загрузить историю планов из хранилища

        Raises:
            CorruptPersistedState: если данные не удалось разобрать
        """
        items = _load_list(self.storage, PLANS_KEY)
        if items is None:
            self.plans = []
            return []

        try:
            plans = [SavedPlanRecord.from_dict(item) for item in items]
        except _PARSE_ERRORS as e:
            raise CorruptPersistedState(PLANS_KEY, str(e)) from e

        self.plans = plans
        return list(plans)

    def save(self, profile: UserProfile, plan: GeneratedPlan) -> SavedPlanRecord:
        """Сохранить новый план с пустыми отметками выполнения"""
        record = SavedPlanRecord(
            id=self.id_factory(),
            date=self.today(),
            profile=profile,
            plan=plan
        )
        plans = [record] + self.plans
        self._persist([item.to_dict() for item in plans])
        self.plans = plans
        logger.info(f"Сохранен план {record.id} от {record.date}")
        return record

    def get(self, plan_id: str) -> Optional[SavedPlanRecord]:
        for record in self.plans:
            if record.id == plan_id:
                return record
        return None

    def mark_complete(self, plan_id: str, day: str) -> bool:
        """
        Отметить день плана выполненным

        Returns:
            True если отметка изменилась; False для неизвестного плана,
            неизвестного дня или уже выполненного дня
        """
        record = self.get(plan_id)
        if record is None or day not in record.plan.workout_plan or record.is_completed(day):
            return False

        items = [item.to_dict() for item in self.plans]
        items[self.plans.index(record)]["completion"][day] = True
        self._persist(items)
        record.completion[day] = True
        logger.info(f"План {plan_id}: день {day} выполнен")
        return True

    def clear(self) -> None:
        self.storage.remove(PLANS_KEY)
        self.plans = []

    def _persist(self, items: List[dict]) -> None:
        self.storage.set(PLANS_KEY, json.dumps(items, ensure_ascii=False))


class CharacterStore:
    """Выбранный вариант аватара"""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.gender: Optional[CharacterGender] = None

    def load_all(self) -> Optional[CharacterGender]:
        raw = self.storage.get(CHARACTER_KEY)
        if raw is None:
            self.gender = None
            return None
        try:
            self.gender = CharacterGender(raw)
        except ValueError as e:
            raise CorruptPersistedState(CHARACTER_KEY, str(e)) from e
        return self.gender

    def select(self, gender: CharacterGender) -> CharacterGender:
        gender = CharacterGender(gender)
        self.storage.set(CHARACTER_KEY, gender.value)
        self.gender = gender
        return self.gender

    def clear(self) -> None:
        self.storage.remove(CHARACTER_KEY)
        self.gender = None
