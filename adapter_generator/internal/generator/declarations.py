from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass
class StructField:
    """Поле объявляемой структуры с уже разрешенным типом"""

    name: str
    type_name: str
    tag: Optional[str] = None
    embedded: bool = False


class DeclarationEmitter:
    """Рендер объявлений типов Go"""

    def emit_struct(self, name: str, fields: Sequence[StructField]) -> str:
        lines = [f"type {name} struct {{"]
        for field in fields:
            if field.embedded:
                # Встраивание без имени и тега, чтобы поля продвигались как в исходнике
                lines.append(f"\t{field.type_name}")
                continue

            line = f"\t{field.name} {field.type_name}"
            if field.tag:
                line += f' `json:"{field.tag}"`'
            lines.append(line)
        lines.append("}")

        return "\n".join(lines) + "\n\n"

    def emit_alias(self, name: str, underlying: str) -> str:
        return f"type {name} {underlying}\n\n"
