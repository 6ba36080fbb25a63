"""
Ошибки генерации адаптера
"""

from typing import Iterable, Optional, Tuple


class GenerationError(Exception):
    """Базовая ошибка генерации"""


class UnsupportedTypeError(GenerationError):
    """Тип, который невозможно представить в сгенерированном коде"""

    def __init__(self, message: str, path: Iterable[str] = ()):
        self.message = message
        self.path: Tuple[str, ...] = tuple(path)
        super().__init__(self._format())

    def within(self, location: str) -> "UnsupportedTypeError":
        """Та же ошибка с добавленным внешним контекстом"""
        return UnsupportedTypeError(self.message, (location,) + self.path)

    def _format(self) -> str:
        if not self.path:
            return self.message
        return f"{' -> '.join(self.path)}: {self.message}"


class NamingCollisionError(GenerationError):
    """Два разных типа получили одно каноническое имя"""

    def __init__(self, name: str, existing: str, incoming: str):
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(f"Имя {name} уже занято: {existing}, конфликт с {incoming}")


class RegistryAccessError(GenerationError):
    """Ошибка чтения реестра обработчиков"""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)
