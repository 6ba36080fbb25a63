import argparse
import glob
import logging
import os
import sys
from typing import List, Tuple

from adapter_generator.config import CONFIG_FILE_NAME, GeneratorConfig
from adapter_generator.exceptions import GenerationError
from adapter_generator.generator import AdapterGenerator
from adapter_generator.internal.generator.client_generator import build_project
from adapter_generator.internal.parser.registry import load_registry
from adapter_generator.internal.types.models import Project


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def find_adapter_packages() -> List[Tuple[str, GeneratorConfig]]:
    """Поиск пакетов адаптеров по adapter.toml файлам"""
    packages = []

    for config_file in sorted(glob.glob(f"**/{CONFIG_FILE_NAME}", recursive=True)):
        config_dir = os.path.dirname(config_file)
        config = GeneratorConfig.from_file(config_file)

        if config:
            packages.append((config_dir, config))

    return packages


def select_from_menu(options: List[str], title: str) -> int:
    """Выбор пункта из меню"""
    print(f"\n{title}")
    for i, option in enumerate(options, 1):
        print(f"[{i}] {option}")

    while True:
        try:
            choice = int(input("\nВыберите пункт: "))
            if 1 <= choice <= len(options):
                return choice - 1
            print(f"Введите число от 1 до {len(options)}")
        except ValueError:
            print("Введите корректное число")


def interactive_find_packages():
    """Интерактивный поиск и обновление пакетов адаптеров"""
    print("🔍 Поиск пакетов адаптеров...")
    packages = find_adapter_packages()

    if not packages:
        print("❌ Пакеты адаптеров не найдены")
        return

    print(f"✅ Найдено {len(packages)} пакетов:")

    package_options = [
        f"{config_dir or '.'} ({config.url})" for config_dir, config in packages
    ]
    selected_idx = select_from_menu(package_options, "📦 Найденные пакеты:")
    selected_dir, selected_config = packages[selected_idx]

    print(f"\n📍 Выбран пакет: {selected_dir or '.'}")
    print(f"   Реестр: {selected_config.url}")
    print(f"   Go-пакет: {selected_config.package}")
    print(f"   Внутренние пакеты: {', '.join(selected_config.internal_packages) or '-'}")

    action_options = [
        "Обновить генерацию",
        "Изменить ссылку на реестр и обновить",
    ]
    action = select_from_menu(action_options, "\n⚙️ Что сделать с пакетом?")

    if action == 1:
        new_url = input(f"\n🔗 Введите новый URL (текущий: {selected_config.url}): ")
        if new_url.strip():
            selected_config.url = new_url.strip()
            config_path = os.path.join(selected_dir, CONFIG_FILE_NAME)
            selected_config.save_to_file(config_path)
            print(f"💾 URL обновлен в {config_path}")

    _generate_adapter_in_existing(selected_config, selected_dir)


def _generate_adapter_core(config: GeneratorConfig) -> Project:
    """Ядро генерации адаптера - только генерация без сохранения"""
    if not config.url:
        raise ValueError("URL реестра не указан в конфигурации")

    print(f"🚀 Генерация адаптера из {config.url}")
    print("📥 Загрузка реестра обработчиков...")
    registry = load_registry(config.url)

    print("⚙️ Генерация кода...")
    result = AdapterGenerator(registry, config).generate()
    for degraded in result.degraded:
        print(f"⚠️ {degraded.location or degraded.spelling}: тип заменен на interface{{}}")

    return build_project(result, config)


def _save_project_files(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    print(f"💾 Сохранение {len(project.files)} файлов...")

    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_file))

    print("✅ Генерация завершена успешно!")
    print(f"📦 Адаптер создан в: {os.path.abspath(target_path)}")


def _generate_adapter(config: GeneratorConfig, work_dir: str):
    """Генерация адаптера в новую директорию"""
    if not config.dirname:
        raise ValueError("Директория не указана в конфигурации")

    project = _generate_adapter_core(config)
    _save_project_files(project, os.path.join(work_dir, config.dirname))


def _generate_adapter_in_existing(config: GeneratorConfig, existing_package_dir: str):
    """Генерация адаптера в существующую директорию пакета"""
    project = _generate_adapter_core(config)
    _save_project_files(project, existing_package_dir or ".")


def _serve(config: GeneratorConfig, port: int):
    """Запуск HTTP-ручки генерации"""
    from adapter_generator.server import serve

    if not config.url:
        raise ValueError("URL реестра не указан в конфигурации")

    registry = load_registry(config.url)
    print(f"🌐 Ручка генерации доступна на http://127.0.0.1:{port}/")
    serve(registry, config, port=port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация Go-адаптера по реестру обработчиков"
    )
    parser.add_argument("--url", type=str, help="URL или путь к описанию реестра")
    parser.add_argument("--dirname", type=str, help="Директория для генерации")
    parser.add_argument("--package", type=str, help="Имя Go-пакета")
    parser.add_argument("--service-name", type=str, help="Имя сервиса")
    parser.add_argument(
        "--internal-pkg",
        action="append",
        help="Префикс внутренних пакетов, типы из которых копируются в адаптер",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help=f"Создать конфиг файл {CONFIG_FILE_NAME}",
    )
    parser.add_argument(
        "--force", action="store_true", help="Генерировать без подтверждения"
    )
    parser.add_argument(
        "--serve", action="store_true", help="Запустить HTTP-ручку генерации"
    )
    parser.add_argument("--port", type=int, default=8080, help="Порт HTTP-ручки")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    return parser


def generate(argv: List[str] = None):
    """Универсальная команда генерации Go-адаптера"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Интерактивный режим, если не передано ничего значимого
    meaningful = {k: v for k, v in vars(args).items() if k not in ("port", "verbose")}
    if not any(meaningful.values()):
        interactive_find_packages()
        return

    if args.init_config:
        config = GeneratorConfig(dirname=args.dirname or "adapter").merge_with_args(args)
        config.save_to_file()
        print(f"✅ Создан конфиг файл {CONFIG_FILE_NAME}")
        return

    file_config = GeneratorConfig.from_file(search_dir=args.dirname)
    overrides = any(
        [args.url, args.package, args.service_name, args.internal_pkg]
    )

    if file_config and overrides:
        print(f"🔧 Найден конфиг файл {CONFIG_FILE_NAME}:")
        print(f"   Реестр: {file_config.url}")
        print(f"   Go-пакет: {file_config.package}")
        print()

        if args.force or not confirm_choice("Использовать конфиг из файла?"):
            final_config = file_config.merge_with_args(args)
        else:
            final_config = file_config
    elif file_config:
        print(f"📋 Используется конфиг {CONFIG_FILE_NAME}")
        final_config = file_config
    elif args.url:
        final_config = GeneratorConfig(dirname=args.dirname or "adapter").merge_with_args(
            args
        )
    else:
        print("❌ Ошибка: Укажите --url или создайте конфиг с --init-config")
        sys.exit(1)

    if not final_config.url:
        print("❌ Ошибка: URL реестра не указан ни в конфиге, ни в аргументах")
        sys.exit(1)

    try:
        if args.serve:
            _serve(final_config, args.port)
            return

        if args.dirname and file_config:
            print(f"📁 Генерация в существующую папку: {args.dirname}")
            _generate_adapter_in_existing(final_config, args.dirname)
        else:
            print(f"📁 Создание новой папки: {final_config.dirname}")
            _generate_adapter(final_config, ".")

    except (GenerationError, ValueError, OSError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()
