import logging
from typing import Dict, Tuple

from ...config import (
    CONFIG_FILE_NAME,
    DEFAULT_PACKAGE,
    DEFAULT_SERVICE_NAME,
    GeneratorConfig,
)
from ...exceptions import NamingCollisionError, UnsupportedTypeError
from ..types.models import (
    CodeBlock,
    GenerationResult,
    HandlerRegistry,
    Project,
    RouteMetadata,
)
from ..types.name_resolver import NameResolver, VisitedSet
from ..utils.field_utils import sanitize_identifier
from .declarations import DeclarationEmitter
from .graph_walker import GraphWalker
from .methods import ErrorEmitter, MethodEmitter, method_name
from .templates import fill, templates

logger = logging.getLogger(__name__)


class ClientGenerator:
    """
    Генератор Go-адаптера по реестру обработчиков.

    Один экземпляр = один прогон генерации: резолвер и множество уже
    объявленных типов живут только внутри него.
    """

    def __init__(self, registry: HandlerRegistry, config: GeneratorConfig):
        self.registry = registry
        self.config = config
        self.package, self.service_name = target_names(config)

        self.visited = VisitedSet()
        self.resolver = NameResolver(config.internal_packages, self.visited)
        self.walker = GraphWalker(
            self.resolver, DeclarationEmitter(), tag_keys=config.tag_keys
        )
        self.method_emitter = MethodEmitter(self.service_name)
        self.error_emitter = ErrorEmitter()

        self.routes: Dict[str, RouteMetadata] = {}
        self._method_owners: Dict[str, str] = {}

    def generate(self) -> GenerationResult:
        """Основная генерация"""
        self._collect_routes()

        routes = list(self.routes.values())
        result = GenerationResult(
            declarations_block="".join(self.walker.declarations),
            methods_block=self.method_emitter.emit_all(routes),
            errors_block=self.error_emitter.emit_all(routes),
            required_imports=set(self.visited.imports),
            routes=routes,
            degraded=list(self.visited.degraded),
        )
        logger.info(
            f"Сгенерировано {len(self.walker.declarations)} объявлений "
            f"для {len(routes)} маршрутов"
        )
        return result

    def _collect_routes(self):
        """Обход всех маршрутов и версий реестра"""
        for path in self.registry.list_routes():
            for version in self.registry.get_route_versions(path):
                where = f"{path} v{version.version}"
                try:
                    output_name = self.walker.expand(
                        version.output_type, f"{where} output"
                    )
                    input_name = self.walker.expand(version.input_type, f"{where} input")
                except UnsupportedTypeError as exc:
                    raise exc.within(where) from exc

                route = RouteMetadata(
                    route=path,
                    version=version.version,
                    method_name=self._method_name(path, version.version),
                    input_type_name=input_name,
                    output_type_name=output_name,
                    errors=tuple(version.errors),
                )
                self.routes[route.key] = route

    def _method_name(self, path: str, version: str) -> str:
        name = method_name(path, version)
        owner = self._method_owners.setdefault(name, f"{path}/{version}")
        if owner != f"{path}/{version}":
            raise NamingCollisionError(name, owner, f"{path}/{version}")
        return name


def target_names(config: GeneratorConfig) -> Tuple[str, str]:
    """Имя пакета и сервиса, пригодные для Go"""
    return (
        sanitize_identifier(config.package.strip()) or DEFAULT_PACKAGE,
        sanitize_identifier(config.service_name.strip()) or DEFAULT_SERVICE_NAME,
    )


def render_source(result: GenerationResult, config: GeneratorConfig) -> str:
    """Сборка итогового Go-файла из блоков"""
    package, service_name = target_names(config)
    imports = sorted(set(templates.static_imports) | set(result.required_imports))

    return fill(
        templates.main,
        pkg_name=package,
        imports="\n".join(f'\t"{path}"' for path in imports),
        dynamic_logic=result.methods_block,
        static_logic=fill(templates.caller, service_name=service_name),
        errors=result.errors_block,
        structs=result.declarations_block,
    )


def build_project(result: GenerationResult, config: GeneratorConfig) -> Project:
    """Проект адаптера: Go-файл и конфиг, из которого он получен"""
    package, _ = target_names(config)

    project = Project(name=package)
    project.add_file(f"{package}.go").add_code_block(
        CodeBlock(code=render_source(result, config))
    )
    if config.url:
        project.add_file(CONFIG_FILE_NAME).add_code_block(
            CodeBlock(code=config.dumps())
        )
    return project
