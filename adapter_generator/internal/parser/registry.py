import os
from typing import Any, Dict, List, Optional, Sequence

import httpx
import jsonref

from ...exceptions import RegistryAccessError
from ..types.models import DeclaredError, RouteVersion, TypeDescriptor, TypeKind
from ..utils.field_utils import parse_struct_tag


class InMemoryRegistry:
    """Реестр обработчиков, собранный в памяти"""

    def __init__(self):
        self._routes: Dict[str, List[RouteVersion]] = {}

    def add_route(
        self,
        path: str,
        version: str,
        input_type: TypeDescriptor,
        output_type: TypeDescriptor,
        errors: Optional[Sequence[DeclaredError]] = None,
    ) -> RouteVersion:
        route_version = RouteVersion(
            version=str(version),
            input_type=input_type,
            output_type=output_type,
            errors=list(errors or []),
        )
        self._routes.setdefault(path, []).append(route_version)
        return route_version

    def list_routes(self) -> List[str]:
        return list(self._routes)

    def get_route_versions(self, route: str) -> List[RouteVersion]:
        if route not in self._routes:
            raise RegistryAccessError(f"Маршрут {route} не найден в реестре")
        return list(self._routes[route])


class RegistryParser:
    """
    Парсер JSON-описания реестра обработчиков.

    Общие и рекурсивные типы описываются ссылками {"$ref": "#/types/<id>"},
    которые разрешает jsonref. Каждой ссылке соответствует ровно один
    TypeDescriptor, поэтому общие подграфы и циклы сохраняются.
    """

    def __init__(self, document: Dict[str, Any], source: str = None):
        self.document = document
        self.source = source
        self._descriptors: Dict[str, TypeDescriptor] = {}

    @classmethod
    def from_json(cls, text: str, source: str = None) -> "RegistryParser":
        try:
            document = jsonref.loads(text)
        except ValueError as exc:
            raise RegistryAccessError(f"Некорректный JSON: {exc}", source) from exc
        return cls(document, source)

    def parse(self) -> InMemoryRegistry:
        """Парсинг описания в реестр"""
        if not isinstance(self.document, dict):
            self._fail("описание реестра должно быть объектом")

        routes = self.document.get("routes")
        if not isinstance(routes, list):
            self._fail("нет списка routes")

        registry = InMemoryRegistry()
        for route_spec in routes:
            if not isinstance(route_spec, dict):
                self._fail("маршрут должен быть объектом")
            path = route_spec.get("path")
            if not path:
                self._fail("маршрут без path")

            for version_spec in route_spec.get("versions", []):
                version = str(version_spec.get("version", ""))
                if not version:
                    self._fail(f"{path}: версия без номера")

                where = f"{path} v{version}"
                input_type = self._descriptor(version_spec.get("input"), where)
                output_type = self._descriptor(version_spec.get("output"), where)
                if input_type is None or output_type is None:
                    self._fail(f"{where}: не указан тип input или output")

                registry.add_route(
                    path,
                    version,
                    input_type=input_type,
                    output_type=output_type,
                    errors=self._errors(version_spec.get("errors", []), where),
                )

        return registry

    def _descriptor(self, node: Any, where: str) -> Optional[TypeDescriptor]:
        if node is None:
            return None

        ref = None
        try:
            while isinstance(node, jsonref.JsonRef):
                ref = ref or node.__reference__["$ref"]
                node = node.__subject__
        except jsonref.JsonRefError as exc:
            self._fail(f"{where}: не удалось разрешить ссылку: {exc}", exc)

        if ref is not None and ref in self._descriptors:
            return self._descriptors[ref]

        if not isinstance(node, dict):
            self._fail(f"{where}: ожидалось описание типа")

        raw_kind = node.get("kind", "")
        try:
            kind = TypeKind(raw_kind)
        except ValueError:
            kind = TypeKind.UNKNOWN

        descriptor = TypeDescriptor(
            kind=kind,
            name=node.get("name", ""),
            namespace=node.get("package", ""),
            underlying=node.get("underlying", ""),
            raw_kind=raw_kind,
        )
        # Регистрируем до обхода вложенных типов, чтобы циклы замыкались
        if ref is not None:
            self._descriptors[ref] = descriptor

        label = descriptor.describe()
        for field_spec in node.get("fields", []):
            field_name = field_spec.get("name", "")
            tags = field_spec.get("tags") or {}
            if isinstance(tags, str):
                tags = parse_struct_tag(tags)
            descriptor.add_field(
                field_name,
                self._descriptor(field_spec.get("type"), f"{label}.{field_name}"),
                tags=dict(tags),
                embedded=bool(field_spec.get("embedded", False)),
            )

        descriptor.elem = self._descriptor(node.get("elem"), f"{label} elem")
        descriptor.key = self._descriptor(node.get("key"), f"{label} key")

        if descriptor.kind not in (TypeKind.STRUCT, TypeKind.UNKNOWN) and descriptor.fields:
            self._fail(f"{where}: поля допустимы только у struct")

        return descriptor

    def _errors(self, errors_spec: Any, where: str) -> List[DeclaredError]:
        errors = []
        for error_spec in errors_spec or []:
            if isinstance(error_spec, str):
                error_spec = {"code": error_spec}
            if not error_spec.get("code"):
                self._fail(f"{where}: ошибка без кода")
            errors.append(
                DeclaredError(
                    code=str(error_spec["code"]),
                    description=error_spec.get("description", ""),
                )
            )
        return errors

    def _fail(self, message: str, cause: Exception = None):
        raise RegistryAccessError(message, self.source) from cause


def load_registry(source: str, timeout: float = 30.0) -> InMemoryRegistry:
    """Загрузка реестра по URL или из локального файла"""
    if source.startswith(("http://", "https://")):
        try:
            response = httpx.get(source, timeout=timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RegistryAccessError(f"Не удалось загрузить реестр: {exc}", source) from exc
        text = response.text
    elif os.path.exists(source):
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        raise RegistryAccessError("Файл или URL реестра не найден", source)

    return RegistryParser.from_json(text, source).parse()
