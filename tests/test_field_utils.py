"""
Тесты утилит имен и тегов
"""

from adapter_generator.internal.utils import (
    canonical_type_name,
    go_title,
    parse_struct_tag,
    pascal_case,
    pick_tag,
    qualified_type_name,
    sanitize_identifier,
)


class TestNames:
    """Тесты построения имен"""

    def test_canonical_type_name(self):
        """Тест канонического имени внутреннего типа"""
        assert canonical_type_name("lazada_api/models", "User") == "Lazada_api_models_User"
        assert canonical_type_name("mobapi", "order") == "Mobapi_Order"

    def test_canonical_name_sanitized(self):
        """Тест замены недопустимых символов"""
        assert canonical_type_name("github.com/x/go-bar", "Item") == "Github_Com_x_go_Bar_Item"

    def test_go_title(self):
        """Тест заглавных букв после разделителей"""
        assert go_title("lazada_api") == "Lazada_api"
        assert go_title("x-y.z") == "X-Y.Z"
        assert go_title("") == ""

    def test_qualified_type_name(self):
        """Тест имени внешнего типа"""
        assert qualified_type_name("time", "Time") == "time.Time"
        assert (
            qualified_type_name("github.com/shopspring/decimal", "Decimal")
            == "decimal.Decimal"
        )

    def test_sanitize_identifier(self):
        """Тест очистки идентификатора"""
        assert sanitize_identifier("go-bar") == "go_bar"
        assert sanitize_identifier("1abc") == "_1abc"
        assert sanitize_identifier("") == ""

    def test_pascal_case(self):
        """Тест PascalCase для маршрутов и кодов"""
        assert pascal_case("/users/get-by_id") == "UsersGetById"
        assert pascal_case("USER_NOT_FOUND") == "UserNotFound"
        assert pascal_case("getUser") == "GetUser"
        assert pascal_case("/") == ""


class TestTags:
    """Тесты тегов полей"""

    def test_parse_struct_tag(self):
        """Тест разбора тега в формате Go"""
        tags = parse_struct_tag('json:"id,omitempty" key:"user_id"')
        assert tags == {"json": "id,omitempty", "key": "user_id"}

    def test_parse_empty_tag(self):
        assert parse_struct_tag("") == {}
        assert parse_struct_tag(None) == {}

    def test_pick_tag_primary(self):
        """Тест выбора основного ключа"""
        assert pick_tag({"json": "id", "key": "k"}, ("json", "key")) == "id"

    def test_pick_tag_fallback(self):
        """Тест запасного ключа при пустом основном"""
        assert pick_tag({"key": "k"}, ("json", "key")) == "k"
        assert pick_tag({"json": "", "key": "k"}, ("json", "key")) == "k"

    def test_pick_tag_missing(self):
        assert pick_tag({}, ("json", "key")) is None
