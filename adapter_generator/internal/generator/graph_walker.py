from collections import deque
from typing import Deque, List, Sequence

from ...exceptions import UnsupportedTypeError
from ..types.models import TypeDescriptor, TypeKind
from ..types.name_resolver import ANY_TYPE, GO_PRIMITIVES, NameResolver
from ..utils.field_utils import pick_tag
from .declarations import DeclarationEmitter, StructField


class GraphWalker:
    """
    Обход графа типов с объявлением каждого внутреннего типа ровно один раз.

    Резолвер отдает впервые встреченные внутренние типы, они ставятся в
    очередь и объявляются по порядку. Тип регистрируется до обхода своих
    полей, поэтому циклы в графе замыкаются на уже известное имя.
    """

    def __init__(
        self,
        resolver: NameResolver,
        emitter: DeclarationEmitter,
        tag_keys: Sequence[str] = ("json",),
    ):
        self.resolver = resolver
        self.emitter = emitter
        self.tag_keys = tuple(tag_keys)
        self.declarations: List[str] = []
        self.declared_names: List[str] = []
        self._queue: Deque[TypeDescriptor] = deque()

    def expand(self, t: TypeDescriptor, location: str = "") -> str:
        """Разрешение типа с объявлением всех новых внутренних типов"""
        name = self._resolve_child(t, location)
        while self._queue:
            self._declare(self._queue.popleft())
        return name

    def _resolve_child(self, t: TypeDescriptor, location: str) -> str:
        resolved, to_expand = self.resolver.resolve(t, location)
        self._queue.extend(to_expand)
        return resolved.name

    def _declare(self, t: TypeDescriptor) -> None:
        name = self.resolver.resolve(t)[0].name

        if t.kind is TypeKind.STRUCT:
            self._declare_struct(name, t)
        elif t.kind is TypeKind.SLICE:
            self._declare_slice(name, t)
        elif t.kind is TypeKind.MAP:
            self._declare_map(name, t)
        elif t.kind in (TypeKind.NAMED_PRIMITIVE, TypeKind.PRIMITIVE):
            self._declare_named_primitive(name, t)
        elif t.kind is TypeKind.INTERFACE:
            self.resolver.report_degraded(
                t.describe(), name, "методы интерфейса не переносятся"
            )
            self._emit(name, self.emitter.emit_alias(name, ANY_TYPE))
        else:
            raise UnsupportedTypeError(
                f"неподдерживаемый вид типа {t.raw_kind or t.kind.value}", (name,)
            )

    def _declare_struct(self, name: str, t: TypeDescriptor) -> None:
        fields = []
        for field in t.fields:
            location = f"{name}.{field.name}" if field.name else name
            if field.type is None:
                raise UnsupportedTypeError("поле без типа", (location,))

            try:
                type_name = self._resolve_child(field.type, location)
            except UnsupportedTypeError as exc:
                raise exc.within(location) from exc

            fields.append(
                StructField(
                    name=field.name,
                    type_name=type_name,
                    tag=None if field.embedded else pick_tag(field.tags, self.tag_keys),
                    embedded=field.embedded,
                )
            )

        self._emit(name, self.emitter.emit_struct(name, fields))

    def _declare_slice(self, name: str, t: TypeDescriptor) -> None:
        if t.elem is None:
            raise UnsupportedTypeError("срез без типа элемента", (name,))
        try:
            elem = self._resolve_child(t.elem, name)
        except UnsupportedTypeError as exc:
            raise exc.within(name) from exc

        structural = "[]" + elem
        if name != structural:
            self._emit(name, self.emitter.emit_alias(name, structural))

    def _declare_map(self, name: str, t: TypeDescriptor) -> None:
        if t.elem is None:
            raise UnsupportedTypeError("словарь без типа значения", (name,))
        try:
            key, key_expand = self.resolver.resolve_map_key(t.key, name)
            self._queue.extend(key_expand)
            value = self._resolve_child(t.elem, name)
        except UnsupportedTypeError as exc:
            raise exc.within(name) from exc

        structural = f"map[{key.name}]{value}"
        if name != structural:
            self._emit(name, self.emitter.emit_alias(name, structural))

    def _declare_named_primitive(self, name: str, t: TypeDescriptor) -> None:
        if t.underlying not in GO_PRIMITIVES:
            raise UnsupportedTypeError(
                f"неизвестный базовый тип {t.underlying or '<пусто>'}", (name,)
            )
        if name != t.underlying:
            self._emit(name, self.emitter.emit_alias(name, t.underlying))

    def _emit(self, name: str, declaration: str) -> None:
        self.declared_names.append(name)
        self.declarations.append(declaration)
