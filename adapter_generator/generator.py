"""
Главный модуль генератора - чистый интерфейс
"""

from typing import Optional

from .config import GeneratorConfig
from .internal.generator.client_generator import (
    ClientGenerator,
    build_project,
    render_source,
)
from .internal.types.models import GenerationResult, HandlerRegistry, Project


class AdapterGenerator:
    """Чистый интерфейс для генерации Go-адаптеров"""

    def __init__(
        self, registry: HandlerRegistry, config: Optional[GeneratorConfig] = None
    ):
        self.registry = registry
        self.config = config or GeneratorConfig()

    def generate(self) -> GenerationResult:
        """Генерация блоков кода, каждый вызов - отдельный прогон"""
        return ClientGenerator(self.registry, self.config).generate()

    def render(self) -> str:
        """Готовый исходник Go-адаптера"""
        return render_source(self.generate(), self.config)

    def build_project(self) -> Project:
        return build_project(self.generate(), self.config)


def generate(
    registry: HandlerRegistry, config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """Генерация блоков кода адаптера по реестру обработчиков"""
    return AdapterGenerator(registry, config).generate()


def generate_adapter(
    registry: HandlerRegistry, config: Optional[GeneratorConfig] = None
) -> Project:
    """Создание проекта Go-адаптера по реестру обработчиков"""
    return AdapterGenerator(registry, config).build_project()
