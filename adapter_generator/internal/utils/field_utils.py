"""Утилиты для работы с именами типов, полей и тегами"""

import re
from typing import Dict, Optional, Sequence

_TAG_PATTERN = re.compile(r'(\w+):"((?:[^"\\]|\\.)*)"')


def sanitize_identifier(name: str) -> str:
    """
    Заменяет символы, недопустимые в идентификаторах Go, на подчеркивания.

    Examples:
        >>> sanitize_identifier("go-bar")
        'go_bar'
        >>> sanitize_identifier("A.B_c_User")
        'A_B_c_User'
    """
    name = re.sub(r"\W", "_", name)
    if name and name[0].isdigit():
        name = "_" + name
    return name


def go_title(value: str) -> str:
    """
    Делает заглавной каждую букву, стоящую после разделителя.

    Разделителем считается все, кроме букв, цифр и подчеркивания,
    поэтому "lazada_api" остается "Lazada_api", а "x-y" становится "X-Y".
    """
    result = []
    after_separator = True
    for char in value:
        if after_separator:
            char = char.upper()
        result.append(char)
        after_separator = not (char.isalnum() or char == "_")
    return "".join(result)


def canonical_type_name(namespace: str, name: str) -> str:
    """
    Каноническое имя внутреннего типа: путь пакета + имя типа.

    Examples:
        >>> canonical_type_name("lazada_api/models", "User")
        'Lazada_api_models_User'
    """
    path = go_title(namespace.replace("/", "_"))
    return sanitize_identifier(f"{path}_{go_title(name)}")


def qualified_type_name(namespace: str, name: str) -> str:
    """Имя внешнего типа в виде <пакет>.<Тип>"""
    package = namespace.rstrip("/").rsplit("/", 1)[-1]
    return f"{sanitize_identifier(package)}.{sanitize_identifier(name)}"


def pascal_case(value: str) -> str:
    """
    PascalCase из пути маршрута или кода ошибки.

    Examples:
        >>> pascal_case("/users/get-by_id")
        'UsersGetById'
        >>> pascal_case("USER_NOT_FOUND")
        'UserNotFound'
    """
    parts = []
    for part in re.split(r"[^0-9A-Za-z]+", value):
        if not part:
            continue
        # Коды ошибок обычно в верхнем регистре
        if part.isupper():
            part = part.lower()
        parts.append(part[0].upper() + part[1:])
    return "".join(parts)


def parse_struct_tag(tag: str) -> Dict[str, str]:
    """
    Разбор тега поля в формате Go (`json:"id,omitempty" key:"id"`).

    Examples:
        >>> parse_struct_tag('json:"id,omitempty" key:"user_id"')
        {'json': 'id,omitempty', 'key': 'user_id'}
    """
    return {key: value for key, value in _TAG_PATTERN.findall(tag or "")}


def pick_tag(tags: Dict[str, str], tag_keys: Sequence[str]) -> Optional[str]:
    """Значение первого найденного ключа тега (основной, затем запасные)"""
    for key in tag_keys:
        value = tags.get(key)
        if value:
            return value
    return None
