from .config import GeneratorConfig
from .exceptions import (
    GenerationError,
    NamingCollisionError,
    RegistryAccessError,
    UnsupportedTypeError,
)
from .generator import AdapterGenerator, generate, generate_adapter
from .internal.parser.registry import InMemoryRegistry, RegistryParser, load_registry
from .internal.types.models import (
    DeclaredError,
    GenerationResult,
    RouteMetadata,
    TypeDescriptor,
    TypeKind,
)

__all__ = [
    "AdapterGenerator",
    "DeclaredError",
    "GenerationError",
    "GenerationResult",
    "GeneratorConfig",
    "InMemoryRegistry",
    "NamingCollisionError",
    "RegistryAccessError",
    "RegistryParser",
    "RouteMetadata",
    "TypeDescriptor",
    "TypeKind",
    "UnsupportedTypeError",
    "generate",
    "generate_adapter",
    "load_registry",
]
