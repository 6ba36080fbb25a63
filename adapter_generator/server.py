"""
HTTP-ручка генерации адаптера
"""

import logging

from aiohttp import web

from .config import GeneratorConfig
from .exceptions import GenerationError
from .generator import AdapterGenerator
from .internal.generator.templates import fill, templates
from .internal.types.models import HandlerRegistry

logger = logging.getLogger(__name__)


class GeneratorHandler:
    """Отдает исходник адаптера, параметры берутся из query"""

    def __init__(self, registry: HandlerRegistry, config: GeneratorConfig):
        self.registry = registry
        self.config = config

    def usage_info(self) -> str:
        return fill(
            templates.usage,
            pkg_name=self.config.package,
            service_name=self.config.service_name,
        )

    async def handle(self, request: web.Request) -> web.Response:
        query = request.query
        if query.get("help"):
            return web.Response(text=self.usage_info(), content_type="text/plain")

        # Каждый запрос работает со своей копией конфигурации
        config = self.config.with_overrides(
            package=query.get("package"),
            service_name=query.get("service_name"),
            internal_packages=query.getall("internal_pkg", None),
        )

        try:
            source = AdapterGenerator(self.registry, config).render()
        except GenerationError as exc:
            logger.error(f"Ошибка генерации адаптера: {exc}")
            return web.Response(status=500, text=str(exc), content_type="text/plain")

        return web.Response(text=source, content_type="text/plain", charset="utf-8")


def create_app(
    registry: HandlerRegistry, config: GeneratorConfig, path: str = "/"
) -> web.Application:
    handler = GeneratorHandler(registry, config)

    app = web.Application()
    app.router.add_get(path, handler.handle)
    return app


def serve(
    registry: HandlerRegistry,
    config: GeneratorConfig,
    host: str = "127.0.0.1",
    port: int = 8080,
) -> None:
    web.run_app(create_app(registry, config), host=host, port=port)
