"""
Ошибки предметной области
"""


class ValidationError(ValueError):
    """Некорректные входные данные (запись активности или профиль)"""


class GenerationFailure(RuntimeError):
    """Не удалось получить или разобрать план от AI"""


class CorruptPersistedState(ValueError):
    """Сохраненные данные не удалось прочитать"""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Повреждены данные по ключу '{key}': {reason}")
        self.key = key
        self.reason = reason
