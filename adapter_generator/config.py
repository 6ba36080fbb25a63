"""
Конфигурация для генерации Go-адаптера
"""

import os
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

import toml

CONFIG_FILE_NAME = "adapter.toml"

DEFAULT_PACKAGE = "adapter"
DEFAULT_SERVICE_NAME = "ExternalAPI"
DEFAULT_TAG_KEYS = ("json", "key")


@dataclass
class GeneratorConfig:
    """Конфигурация генератора адаптера"""

    url: Optional[str] = None
    dirname: Optional[str] = None
    package: str = DEFAULT_PACKAGE
    service_name: str = DEFAULT_SERVICE_NAME
    internal_packages: List[str] = field(default_factory=list)
    tag_keys: List[str] = field(default_factory=lambda: list(DEFAULT_TAG_KEYS))

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["GeneratorConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (toml.TomlDecodeError, OSError):
            return None

        return cls(
            url=config_data.get("url"),
            dirname=config_data.get("dirname", DEFAULT_PACKAGE),
            package=config_data.get("package", DEFAULT_PACKAGE),
            service_name=config_data.get("service_name", DEFAULT_SERVICE_NAME),
            internal_packages=list(config_data.get("internal_packages", [])),
            tag_keys=list(config_data.get("tag_keys", DEFAULT_TAG_KEYS)),
        )

    def to_dict(self) -> dict:
        config_data = {
            "package": self.package,
            "service_name": self.service_name,
            "internal_packages": list(self.internal_packages),
            "tag_keys": list(self.tag_keys),
        }
        # toml не хранит None
        if self.url is not None:
            config_data["url"] = self.url
        if self.dirname is not None:
            config_data["dirname"] = self.dirname
        return config_data

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        with open(config_path, "w") as f:
            toml.dump(self.to_dict(), f)

    def dumps(self) -> str:
        return toml.dumps(self.to_dict())

    def merge_with_args(self, args) -> "GeneratorConfig":
        """Объединение с аргументами командной строки"""
        return self.with_overrides(
            url=args.url,
            dirname=args.dirname,
            package=getattr(args, "package", None),
            service_name=getattr(args, "service_name", None),
            internal_packages=getattr(args, "internal_pkg", None),
        )

    def with_overrides(
        self,
        url: Optional[str] = None,
        dirname: Optional[str] = None,
        package: Optional[str] = None,
        service_name: Optional[str] = None,
        internal_packages: Optional[Sequence[str]] = None,
    ) -> "GeneratorConfig":
        """Копия конфигурации, пустые значения не переопределяют исходные"""
        return replace(
            self,
            url=url or self.url,
            dirname=dirname or self.dirname,
            package=package or self.package,
            service_name=service_name or self.service_name,
            internal_packages=list(internal_packages or self.internal_packages),
            tag_keys=list(self.tag_keys),
        )
