"""
Тесты обхода графа типов и объявлений
"""

import pytest

from adapter_generator.exceptions import UnsupportedTypeError
from adapter_generator.internal.generator.declarations import (
    DeclarationEmitter,
    StructField,
)
from adapter_generator.internal.generator.graph_walker import GraphWalker
from adapter_generator.internal.types.models import TypeDescriptor, TypeKind
from adapter_generator.internal.types.name_resolver import NameResolver

MODELS = "lazada_api/models"


def struct(name, namespace=MODELS):
    return TypeDescriptor(kind=TypeKind.STRUCT, name=name, namespace=namespace)


def make_walker(tag_keys=("json", "key")):
    return GraphWalker(NameResolver(["lazada_api"]), DeclarationEmitter(), tag_keys)


class TestDeclarationEmitter:
    """Тесты рендера объявлений"""

    def test_emit_struct(self):
        code = DeclarationEmitter().emit_struct(
            "User",
            [
                StructField(name="ID", type_name="int64", tag="id"),
                StructField(name="Base", type_name="Base", embedded=True),
                StructField(name="Raw", type_name="string"),
            ],
        )

        assert code == (
            "type User struct {\n"
            '\tID int64 `json:"id"`\n'
            "\tBase\n"
            "\tRaw string\n"
            "}\n\n"
        )

    def test_emit_alias(self):
        assert DeclarationEmitter().emit_alias("Ids", "[]int") == "type Ids []int\n\n"


class TestGraphWalker:
    """Тесты обхода графа"""

    def test_cycle_terminates(self):
        """Тест циклического графа: каждый тип объявлен один раз"""
        user = struct("User")
        profile = struct("Profile")
        user.add_field(
            "Friends",
            TypeDescriptor.slice_of(TypeDescriptor.pointer_to(user)),
            tags={"json": "friends"},
        )
        user.add_field("Profile", profile, tags={"json": "profile"})
        profile.add_field("Owner", TypeDescriptor.pointer_to(user), tags={"json": "owner"})

        walker = make_walker()
        name = walker.expand(user)

        assert name == "Lazada_api_models_User"
        assert walker.declared_names == [
            "Lazada_api_models_User",
            "Lazada_api_models_Profile",
        ]
        assert walker.declarations[0] == (
            "type Lazada_api_models_User struct {\n"
            '\tFriends []*Lazada_api_models_User `json:"friends"`\n'
            '\tProfile Lazada_api_models_Profile `json:"profile"`\n'
            "}\n\n"
        )
        assert '\tOwner *Lazada_api_models_User `json:"owner"`' in walker.declarations[1]

    def test_shared_type_declared_once(self):
        """Тест типа, встреченного из нескольких корней"""
        address = struct("Address").add_field("City", TypeDescriptor.primitive("string"))
        order = struct("Order").add_field("Address", address)
        customer = struct("Customer").add_field("Address", address)

        walker = make_walker()
        walker.expand(order)
        walker.expand(customer)

        assert walker.declared_names.count("Lazada_api_models_Address") == 1
        assert len(walker.declarations) == 3

    def test_embedded_field(self):
        """Тест встроенной структуры"""
        base = struct("Base").add_field("ID", TypeDescriptor.primitive("int64"))
        user = struct("User").add_field("Base", base, tags={"json": "base"}, embedded=True)

        walker = make_walker()
        walker.expand(user)

        assert "\tLazada_api_models_Base\n" in walker.declarations[0]
        assert "json" not in walker.declarations[0]

    def test_tag_fallback(self):
        """Тест запасного ключа тега"""
        user = struct("User")
        user.add_field("ID", TypeDescriptor.primitive("int64"), tags={"key": "user_id"})
        user.add_field("Name", TypeDescriptor.primitive("string"))

        walker = make_walker()
        walker.expand(user)

        assert '\tID int64 `json:"user_id"`\n' in walker.declarations[0]
        assert "\tName string\n" in walker.declarations[0]

    def test_tag_fallback_disabled(self):
        user = struct("User")
        user.add_field("ID", TypeDescriptor.primitive("int64"), tags={"key": "user_id"})

        walker = make_walker(tag_keys=("json",))
        walker.expand(user)

        assert "\tID int64\n" in walker.declarations[0]

    def test_external_field_not_declared(self):
        """Тест внешнего типа в поле"""
        user = struct("User").add_field("Created", struct("Time", namespace="time"))

        walker = make_walker()
        walker.expand(user)

        assert walker.declared_names == ["Lazada_api_models_User"]
        assert "\tCreated time.Time\n" in walker.declarations[0]
        assert walker.resolver.visited.imports == {"time"}


class TestNamedTypes:
    """Тесты именованных срезов, словарей и примитивов"""

    def test_named_slice(self):
        users = TypeDescriptor.slice_of(struct("User"), name="Users", namespace=MODELS)

        walker = make_walker()
        walker.expand(users)

        assert walker.declarations[0] == (
            "type Lazada_api_models_Users []Lazada_api_models_User\n\n"
        )
        assert walker.declared_names[1] == "Lazada_api_models_User"

    def test_named_map(self):
        index = TypeDescriptor.map_of(
            TypeDescriptor.primitive("string"),
            TypeDescriptor.primitive("int"),
            name="Index",
            namespace=MODELS,
        )

        walker = make_walker()
        walker.expand(index)

        assert walker.declarations == ["type Lazada_api_models_Index map[string]int\n\n"]

    def test_named_primitive(self):
        status = TypeDescriptor(
            kind=TypeKind.NAMED_PRIMITIVE,
            name="Status",
            namespace=MODELS,
            underlying="string",
        )

        walker = make_walker()
        walker.expand(status)

        assert walker.declarations == ["type Lazada_api_models_Status string\n\n"]

    def test_named_primitive_unknown_underlying(self):
        amount = TypeDescriptor(
            kind=TypeKind.NAMED_PRIMITIVE,
            name="Amount",
            namespace=MODELS,
            underlying="decimal",
        )

        with pytest.raises(UnsupportedTypeError, match="decimal"):
            make_walker().expand(amount)

    def test_named_interface_degraded(self):
        """Тест именованного интерфейса"""
        handler = TypeDescriptor(kind=TypeKind.INTERFACE, name="Handler", namespace=MODELS)

        walker = make_walker()
        walker.expand(handler)

        assert walker.declarations == ["type Lazada_api_models_Handler interface{}\n\n"]
        assert len(walker.resolver.visited.degraded) == 1

    def test_named_unknown_kind(self):
        channel = TypeDescriptor(
            kind=TypeKind.UNKNOWN, name="Events", namespace=MODELS, raw_kind="chan"
        )

        with pytest.raises(UnsupportedTypeError, match="chan"):
            make_walker().expand(channel)


class TestUnsupportedFields:
    """Тесты ошибок с путем до поля"""

    def test_composite_key_path(self):
        key = struct("Key")
        user = struct("User").add_field(
            "Meta", TypeDescriptor.map_of(key, TypeDescriptor.primitive("int"))
        )

        with pytest.raises(UnsupportedTypeError) as exc_info:
            make_walker().expand(user)

        assert exc_info.value.path == ("Lazada_api_models_User.Meta",)
        assert str(exc_info.value).startswith("Lazada_api_models_User.Meta: ")

    def test_nested_path(self):
        """Тест ошибки во вложенной структуре"""
        inner = struct("Inner").add_field("Broken", TypeDescriptor.primitive("int128"))
        outer = struct("Outer").add_field("Inner", inner)

        with pytest.raises(UnsupportedTypeError) as exc_info:
            make_walker().expand(outer)

        assert exc_info.value.path == ("Lazada_api_models_Inner.Broken",)

    def test_field_without_type(self):
        user = struct("User").add_field("Ghost", None)

        with pytest.raises(UnsupportedTypeError, match="поле без типа"):
            make_walker().expand(user)
