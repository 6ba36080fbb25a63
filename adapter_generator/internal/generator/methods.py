from typing import List, Sequence

from ..types.models import RouteMetadata
from ..utils.field_utils import pascal_case, sanitize_identifier
from .templates import fill, templates


def method_name(route: str, version: str) -> str:
    """
    Имя метода адаптера для версии маршрута.

    Examples:
        >>> method_name("/users/get", "1")
        'UsersGetV1'
    """
    return sanitize_identifier(f"{pascal_case(route) or 'Root'}V{version}")


class MethodEmitter:
    """Генерация методов-оберток для вызова маршрутов"""

    def __init__(self, service_name: str):
        self.service_name = service_name

    def emit(self, route: RouteMetadata) -> str:
        return fill(
            templates.method,
            service_name=self.service_name,
            method=route.method_name,
            route=route.route,
            version=route.version,
            input=route.input_type_name,
            output=route.output_type_name,
            url=route.url,
        )

    def emit_all(self, routes: Sequence[RouteMetadata]) -> str:
        return "".join(self.emit(route) for route in routes)


class ErrorEmitter:
    """Генерация констант с кодами ошибок маршрутов"""

    def emit(self, route: RouteMetadata) -> str:
        if not route.errors:
            return ""

        constants: List[str] = []
        seen = set()
        for error in route.errors:
            const_name = sanitize_identifier(
                f"{route.method_name}Err{pascal_case(error.code)}"
            )
            # Один код может быть объявлен несколько раз
            if const_name in seen:
                continue
            seen.add(const_name)

            line = f"\t{const_name} = {self._quote(error.code)}"
            if error.description:
                line += f" // {' '.join(error.description.split())}"
            constants.append(line)

        return fill(
            templates.errors,
            route=route.route,
            version=route.version,
            constants="\n".join(constants),
        )

    def emit_all(self, routes: Sequence[RouteMetadata]) -> str:
        return "".join(self.emit(route) for route in routes)

    @staticmethod
    def _quote(value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
