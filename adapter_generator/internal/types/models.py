from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator


class TypeKind(str, Enum):
    STRUCT = "struct"
    SLICE = "slice"
    MAP = "map"
    POINTER = "pointer"
    NAMED_PRIMITIVE = "named_primitive"
    PRIMITIVE = "primitive"
    INTERFACE = "interface"
    UNKNOWN = "unknown"


class NameClass(str, Enum):
    EXTERNAL = "external"
    INTERNAL = "internal"
    INLINE = "inline"


@dataclass(eq=False)
class FieldDescriptor:
    """Поле структуры"""

    name: str
    type: Optional["TypeDescriptor"]
    tags: Dict[str, str] = field(default_factory=dict)
    embedded: bool = False


@dataclass(eq=False, repr=False)
class TypeDescriptor:
    """
    Узел графа типов.

    Сравнивается по идентичности: один и тот же узел может встречаться
    в графе много раз, в том числе циклически.
    """

    kind: TypeKind
    name: str = ""
    namespace: str = ""
    fields: List[FieldDescriptor] = field(default_factory=list)
    elem: Optional["TypeDescriptor"] = None
    key: Optional["TypeDescriptor"] = None
    underlying: str = ""
    raw_kind: str = ""

    @classmethod
    def primitive(cls, name: str) -> "TypeDescriptor":
        return cls(kind=TypeKind.PRIMITIVE, name=name)

    @classmethod
    def slice_of(cls, elem: "TypeDescriptor", **kwargs) -> "TypeDescriptor":
        return cls(kind=TypeKind.SLICE, elem=elem, **kwargs)

    @classmethod
    def map_of(
        cls, key: "TypeDescriptor", elem: "TypeDescriptor", **kwargs
    ) -> "TypeDescriptor":
        return cls(kind=TypeKind.MAP, key=key, elem=elem, **kwargs)

    @classmethod
    def pointer_to(cls, elem: "TypeDescriptor") -> "TypeDescriptor":
        return cls(kind=TypeKind.POINTER, elem=elem)

    def add_field(
        self,
        name: str,
        type: Optional["TypeDescriptor"],
        tags: Optional[Dict[str, str]] = None,
        embedded: bool = False,
    ) -> "TypeDescriptor":
        self.fields.append(
            FieldDescriptor(name=name, type=type, tags=tags or {}, embedded=embedded)
        )
        return self

    def describe(self) -> str:
        if self.name:
            return f"{self.namespace}.{self.name}" if self.namespace else self.name
        return f"<{self.raw_kind or self.kind.value}>"

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.kind.value}, {self.describe()})"


@dataclass(frozen=True)
class ResolvedName:
    name: str
    kind: NameClass


class DeclaredError(BaseModel):
    """Код ошибки, объявленный обработчиком"""

    code: str
    description: str = ""


@dataclass
class RouteVersion:
    """Одна версия маршрута в реестре обработчиков"""

    version: str
    input_type: TypeDescriptor
    output_type: TypeDescriptor
    errors: List[DeclaredError] = field(default_factory=list)


class HandlerRegistry(Protocol):
    """Интерфейс реестра обработчиков, нужный генератору"""

    def list_routes(self) -> Sequence[str]: ...

    def get_route_versions(self, route: str) -> Sequence[RouteVersion]: ...


class RouteMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    route: str
    version: str
    method_name: str
    input_type_name: str
    output_type_name: str
    errors: Tuple[DeclaredError, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.route}/{self.version}"

    @property
    def url(self) -> str:
        return f"{self.route.rstrip('/')}/v{self.version}/"


class DegradedType(BaseModel):
    """Тип, замененный на interface{} с потерей точности"""

    location: str
    spelling: str
    reason: str


class GenerationResult(BaseModel):
    declarations_block: str = ""
    methods_block: str = ""
    errors_block: str = ""
    required_imports: Set[str] = set()

    routes: List[RouteMetadata] = []
    degraded: List[DegradedType] = []


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code


class CodeFile(BaseModel):
    file_name: str

    code_blocks: list[CodeBlock] = []

    @field_validator("file_name")
    def file_name_check(cls, value):
        if not value or value.startswith("/"):
            raise ValueError(f"Некорректное имя файла: {value!r}")
        return value

    def __str__(self):
        return "\n".join(
            map(
                str,
                sorted(self.code_blocks, key=lambda x: x.order, reverse=True),
            )
        )

    def add_code_block(self, code_block: Union["CodeBlock", str], **kwargs) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: str, **kwargs) -> CodeFile:
        code_file = CodeFile(file_name=file_name, **kwargs)
        self.files.append(code_file)

        return code_file

    def get_file(self, file_name: str) -> Optional[CodeFile]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None
