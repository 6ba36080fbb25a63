"""
Тесты для системы конфигурации
"""

import os
import tempfile

from adapter_generator.config import (
    CONFIG_FILE_NAME,
    DEFAULT_PACKAGE,
    DEFAULT_SERVICE_NAME,
    GeneratorConfig,
)


class TestGeneratorConfig:
    """Тесты конфигурации генератора"""

    def test_config_creation(self):
        """Тест создания конфигурации"""
        config = GeneratorConfig(url="http://localhost:8000/registry", dirname="adapter")

        assert config.url == "http://localhost:8000/registry"
        assert config.dirname == "adapter"

    def test_default_values(self):
        """Тест значений по умолчанию"""
        config = GeneratorConfig()

        assert config.url is None
        assert config.dirname is None
        assert config.package == DEFAULT_PACKAGE
        assert config.service_name == DEFAULT_SERVICE_NAME
        assert config.internal_packages == []
        assert config.tag_keys == ["json", "key"]

    def test_config_save_and_load(self):
        """Тест сохранения и загрузки конфигурации"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, "test_adapter.toml")

            original_config = GeneratorConfig(
                url="http://api.example.com/registry",
                dirname="example_adapter",
                package="example",
                internal_packages=["lazada_api", "mobapi"],
            )
            original_config.save_to_file(config_path)

            loaded_config = GeneratorConfig.from_file(config_path)

            assert loaded_config is not None
            assert loaded_config.url == "http://api.example.com/registry"
            assert loaded_config.dirname == "example_adapter"
            assert loaded_config.package == "example"
            assert loaded_config.internal_packages == ["lazada_api", "mobapi"]

    def test_config_in_search_dir(self):
        """Тест поиска конфига в директории"""
        with tempfile.TemporaryDirectory() as temp_dir:
            GeneratorConfig(url="registry.json").save_to_file(
                os.path.join(temp_dir, CONFIG_FILE_NAME)
            )

            config = GeneratorConfig.from_file(search_dir=temp_dir)

            assert config is not None
            assert config.url == "registry.json"

    def test_config_file_not_exists(self):
        """Тест загрузки несуществующего конфига"""
        config = GeneratorConfig.from_file("nonexistent.toml")
        assert config is None

    def test_broken_config_file(self):
        """Тест конфига с ошибкой синтаксиса"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, CONFIG_FILE_NAME)
            with open(config_path, "w") as f:
                f.write("not a toml file\n")

            assert GeneratorConfig.from_file(config_path) is None

    def test_dumps_skips_none(self):
        dumped = GeneratorConfig(package="client").dumps()

        assert 'package = "client"' in dumped
        assert "url" not in dumped

    def test_config_merge_with_args(self):
        """Тест объединения конфига с аргументами"""
        config = GeneratorConfig(url="http://localhost:8000", dirname="original_adapter")

        # Мокаем args
        class MockArgs:
            def __init__(self):
                self.url = "http://api.new.com"
                self.dirname = None
                self.package = "client"
                self.service_name = None
                self.internal_pkg = ["mobapi"]

        merged = config.merge_with_args(MockArgs())

        assert merged.url == "http://api.new.com"  # Переписан из args
        assert merged.dirname == "original_adapter"  # Остался из config
        assert merged.package == "client"
        assert merged.service_name == DEFAULT_SERVICE_NAME
        assert merged.internal_packages == ["mobapi"]
        assert config.url == "http://localhost:8000"

    def test_with_overrides_copies(self):
        """Тест независимости копии конфигурации"""
        config = GeneratorConfig(internal_packages=["lazada_api"])

        copy = config.with_overrides(package="other")
        copy.internal_packages.append("mobapi")

        assert config.package == DEFAULT_PACKAGE
        assert config.internal_packages == ["lazada_api"]
