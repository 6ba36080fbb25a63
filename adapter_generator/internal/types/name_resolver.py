import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ...exceptions import UnsupportedTypeError
from ..utils.field_utils import canonical_type_name, qualified_type_name
from .models import DegradedType, NameClass, ResolvedName, TypeDescriptor, TypeKind

logger = logging.getLogger(__name__)

ANY_TYPE = "interface{}"

GO_PRIMITIVES = frozenset(
    {
        "bool",
        "string",
        "byte",
        "rune",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "float32",
        "float64",
        "complex64",
        "complex128",
    }
)

MAP_KEY_KINDS = (TypeKind.PRIMITIVE, TypeKind.NAMED_PRIMITIVE)


class VisitedSet:
    """Состояние одного прогона генерации. Не разделяется между прогонами"""

    def __init__(self):
        # выданное имя -> (пакет, объявленное имя) владельца
        self.names: Dict[str, Tuple[str, str]] = {}
        # (пакет, объявленное имя) -> выданное имя
        self.owners: Dict[Tuple[str, str], str] = {}
        # имя внешнего типа -> пакет, из которого оно импортировано
        self.external: Dict[str, str] = {}
        # узел графа -> уже вычисленное имя
        self.resolved: Dict[TypeDescriptor, ResolvedName] = {}
        self.imports: Set[str] = set()
        self.degraded: List[DegradedType] = []
        self.in_progress: Set[TypeDescriptor] = set()

    def register(self, canonical: str, namespace: str, name: str) -> Tuple[str, bool]:
        """
        Уникальное имя внутреннего типа и признак первого появления.

        Если каноническое имя уже выдано другому типу, к нему добавляется
        суффикс _2, _3 и т.д. в порядке появления типов.
        """
        owner = (namespace, name)
        known = self.owners.get(owner)
        if known is not None:
            return known, False

        unique = canonical
        suffix = 2
        while unique in self.names:
            unique = f"{canonical}_{suffix}"
            suffix += 1

        if unique != canonical:
            first = self.names[canonical]
            logger.info(
                f"Имя {canonical} уже выдано {first[0]}.{first[1]}, "
                f"тип {namespace}.{name} получает имя {unique}"
            )

        self.names[unique] = owner
        self.owners[owner] = unique
        return unique, True


class NameResolver:
    """Резолвер имен типов: внешние, внутренние и структурные"""

    def __init__(
        self, internal_packages: Sequence[str], visited: Optional[VisitedSet] = None
    ):
        self.internal_packages = tuple(p for p in internal_packages if p)
        self.visited = visited if visited is not None else VisitedSet()

    def is_internal(self, namespace: str) -> bool:
        return any(namespace.startswith(prefix) for prefix in self.internal_packages)

    def resolve(
        self, t: TypeDescriptor, location: str = ""
    ) -> Tuple[ResolvedName, List[TypeDescriptor]]:
        """
        Имя типа и список внутренних типов, впервые встреченных при разрешении.

        Повторное разрешение того же узла берется из кэша и ничего
        не добавляет к обходу. Узлы, замененные на interface{}, не кэшируются,
        чтобы замена попадала в отчет для каждого места использования.
        """
        cached = self.visited.resolved.get(t)
        if cached is not None:
            return cached, []

        if t in self.visited.in_progress:
            raise UnsupportedTypeError(f"рекурсивный анонимный тип {t.describe()}")

        degraded_before = len(self.visited.degraded)
        self.visited.in_progress.add(t)
        try:
            resolved, to_expand = self._resolve(t, location)
        finally:
            self.visited.in_progress.discard(t)

        if len(self.visited.degraded) == degraded_before:
            self.visited.resolved[t] = resolved
        return resolved, to_expand

    def resolve_map_key(
        self, key: Optional[TypeDescriptor], location: str = ""
    ) -> Tuple[ResolvedName, List[TypeDescriptor]]:
        """Ключ словаря: только примитив или именованный примитив"""
        if key is None:
            raise UnsupportedTypeError("словарь без типа ключа")
        if key.kind not in MAP_KEY_KINDS:
            raise UnsupportedTypeError(
                f"составной ключ словаря {key.describe()} не поддерживается"
            )
        return self.resolve(key, location)

    def report_degraded(self, spelling: str, location: str, reason: str) -> None:
        logger.warning(
            f"Тип {spelling} ({location or 'верхний уровень'}) заменен на {ANY_TYPE}: {reason}"
        )
        self.visited.degraded.append(
            DegradedType(location=location, spelling=spelling, reason=reason)
        )

    def _resolve(
        self, t: TypeDescriptor, location: str
    ) -> Tuple[ResolvedName, List[TypeDescriptor]]:
        # Указатель не получает собственного объявления, имя берется у значения
        if t.kind is TypeKind.POINTER:
            if t.elem is None:
                raise UnsupportedTypeError("указатель без типа значения")
            elem, to_expand = self.resolve(t.elem, location)
            if elem.name == ANY_TYPE:
                return elem, to_expand
            return ResolvedName("*" + elem.name, NameClass.INLINE), to_expand

        if not t.name:
            return self._resolve_structural(t, location)

        # Встроенные типы (int, string, error) без пакета
        if not t.namespace:
            if t.kind is TypeKind.PRIMITIVE and t.name not in GO_PRIMITIVES:
                raise UnsupportedTypeError(f"неизвестный примитив {t.name}")
            return ResolvedName(t.name, NameClass.INLINE), []

        if not self.is_internal(t.namespace):
            # Внешние типы импортируются и не переобъявляются
            self.visited.imports.add(t.namespace)
            spelling = qualified_type_name(t.namespace, t.name)
            owner = self.visited.external.setdefault(spelling, t.namespace)
            if owner != t.namespace:
                logger.warning(
                    f"Типы из {owner} и {t.namespace} записываются одинаково: {spelling}"
                )
            return ResolvedName(spelling, NameClass.EXTERNAL), []

        unique, first_sighting = self.visited.register(
            canonical_type_name(t.namespace, t.name), t.namespace, t.name
        )
        return (
            ResolvedName(unique, NameClass.INTERNAL),
            [t] if first_sighting else [],
        )

    def _resolve_structural(
        self, t: TypeDescriptor, location: str
    ) -> Tuple[ResolvedName, List[TypeDescriptor]]:
        if t.kind is TypeKind.SLICE:
            if t.elem is None:
                raise UnsupportedTypeError("срез без типа элемента")
            elem, to_expand = self.resolve(t.elem, location)
            return ResolvedName("[]" + elem.name, NameClass.INLINE), to_expand

        if t.kind is TypeKind.MAP:
            if t.elem is None:
                raise UnsupportedTypeError("словарь без типа значения")
            key, key_expand = self.resolve_map_key(t.key, location)
            value, value_expand = self.resolve(t.elem, location)
            return (
                ResolvedName(f"map[{key.name}]{value.name}", NameClass.INLINE),
                key_expand + value_expand,
            )

        if t.kind in (TypeKind.PRIMITIVE, TypeKind.NAMED_PRIMITIVE):
            raise UnsupportedTypeError(f"примитив без имени ({t.describe()})")

        # interface{}, анонимные структуры и неизвестные виды теряют тип
        self.report_degraded(t.describe(), location, "тип без имени не описывается")
        return ResolvedName(ANY_TYPE, NameClass.INLINE), []
