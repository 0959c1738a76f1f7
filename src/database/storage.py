"""
Ключ-значение хранилище для состояния пользователя
"""
from typing import Optional, Dict
import logging

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """
    Базовый интерфейс хранилища

    Значения - сериализованные снимки целиком (запись заменяет значение полностью).
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """Хранилище в памяти (тесты и локальный запуск)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class SupabaseStorage(KeyValueStorage):
    """
    Хранилище в таблице Supabase

    Таблица: namespace (text), key (text), value (text),
    уникальный индекс по (namespace, key).
    namespace - Telegram ID пользователя, чтобы данные разных людей не смешивались.
    """

    def __init__(self, supabase_client, namespace: str, table: str = "kv_store"):
        self.client = supabase_client
        self.namespace = namespace
        self.table = table

    def get(self, key: str) -> Optional[str]:
        result = self.client.table(self.table).select("value")\
            .eq("namespace", self.namespace)\
            .eq("key", key)\
            .execute()
        return result.data[0]["value"] if result.data else None

    def set(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert(
            {"namespace": self.namespace, "key": key, "value": value},
            on_conflict="namespace,key"
        ).execute()
        logger.info(f"Сохранен ключ {key} для {self.namespace}")

    def remove(self, key: str) -> None:
        self.client.table(self.table).delete()\
            .eq("namespace", self.namespace)\
            .eq("key", key)\
            .execute()
        logger.info(f"Удален ключ {key} для {self.namespace}")
