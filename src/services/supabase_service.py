"""
Сервис для работы с Supabase
"""
from supabase import create_client, Client
from typing import Optional
import logging

from src.config import STORAGE_TABLE
from src.database.storage import SupabaseStorage

logger = logging.getLogger(__name__)


class SupabaseService:
    """Сервис для работы с Supabase"""

    def __init__(self, url: str, key: str):
        """Инициализация клиента Supabase"""
        self.client: Client = create_client(url, key)
        logger.info("Supabase клиент инициализирован")

    def get_secret(self, secret_name: str) -> Optional[str]:
        """
        Получить секрет из таблицы настроек app_settings (key, value)

        Используется, если секрет не задан в переменных окружения.
        """
        try:
            result = self.client.table("app_settings").select("value").eq("key", secret_name).execute()
            if result.data:
                return result.data[0]["value"]
            return None
        except Exception as e:
            logger.error(f"Ошибка получения секрета {secret_name}: {e}")
            return None

    def get_storage(self, namespace: str) -> SupabaseStorage:
        """Хранилище состояния одного пользователя"""
        return SupabaseStorage(self.client, namespace, table=STORAGE_TABLE)
