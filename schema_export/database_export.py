#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Модуль для экспорта схемы баз данных PostgreSQL и MySQL.
Использует pg_dump и mysqldump соответственно, выгружает только структуру.
"""
import os
import subprocess
import tarfile
from datetime import datetime

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from .database_url import parse_database_url, to_sqlalchemy_url
from .dump_check import check_dump
from .dump_commands import dump_command, get_dialect
from .export_layout import (
    dialect_dir,
    ensure_gitignore,
    prepare_dialect_dir,
    schema_path,
    table_path,
    tables_dir,
)

TABLES_QUERIES = {
    'postgresql': """
        SELECT table_name
        FROM information_schema.tables
        WHERE table_schema = :schema
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """,
    'mysql': """
        SELECT TABLE_NAME
        FROM INFORMATION_SCHEMA.TABLES
        WHERE TABLE_SCHEMA = DATABASE()
          AND TABLE_TYPE = 'BASE TABLE'
        ORDER BY TABLE_NAME
    """,
}


def list_tables(database_url, schema='public'):
    """Возвращает отсортированный список таблиц базы данных."""
    dialect = parse_database_url(database_url)['dialect']
    engine = create_engine(to_sqlalchemy_url(database_url))
    try:
        with engine.connect() as conn:
            params = {'schema': schema} if dialect == 'postgresql' else {}
            result = conn.execute(text(TABLES_QUERIES[dialect]), params)
            return sorted(row[0] for row in result)
    finally:
        engine.dispose()


def _size_mb(path):
    return os.path.getsize(path) / (1024 * 1024)


def run_dump(cmd, dump_path):
    """
    Запускает утилиту дампа, направляя stdout в dump_path.

    При ненулевом коде возврата печатает stderr и удаляет недописанный файл.
    FileNotFoundError (утилита не установлена) пробрасывается вызывающему.
    """
    try:
        with open(dump_path, 'w', encoding='utf-8') as f:
            result = subprocess.run(
                cmd,
                stdout=f,
                stderr=subprocess.PIPE,
                text=True
            )
    except FileNotFoundError:
        if os.path.exists(dump_path):
            os.remove(dump_path)
        raise

    if result.returncode == 0:
        return True

    print(f"✗ {cmd[0]} завершился с кодом {result.returncode}:")
    print(result.stderr)
    # Удаляем пустой файл при ошибке
    if os.path.exists(dump_path):
        os.remove(dump_path)
    return False


def _dump_and_check(dialect, cmd, dump_path):
    if not run_dump(cmd, dump_path):
        return False
    try:
        check_dump(dump_path, dialect)
    except ValueError:
        if os.path.exists(dump_path):
            os.remove(dump_path)
        raise
    return True


def create_archive(export_root, dialect):
    """Упаковывает schema.sql и tables/ диалекта в архив с датой и временем."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    target_dir = dialect_dir(export_root, dialect)
    archive_path = target_dir / f"{dialect}_schema_{timestamp}.tar.gz"

    with tarfile.open(archive_path, 'w:gz') as tar:
        schema_file = schema_path(export_root, dialect)
        if schema_file.exists():
            tar.add(schema_file, arcname=f"{dialect}/{schema_file.name}")
        tables = tables_dir(export_root, dialect)
        for path in sorted(tables.glob('*.sql')):
            tar.add(path, arcname=f"{dialect}/{tables.name}/{path.name}")

    return archive_path


def export_schema(dialect, database_url, export_root, per_table=True, compress=False):
    """Экспортирует схему одной базы данных в <export_root>/<dialect>/."""
    try:
        info = get_dialect(dialect)
        db_params = parse_database_url(database_url)
        # Проверка диалекта до подключения к базе и очистки каталога
        schema_cmd = dump_command(dialect, database_url)

        print(f"[{info['title']}] Подключение к базе данных: "
              f"{db_params['database']} на {db_params['host']}")

        tables = list_tables(database_url) if per_table else []
        table_paths = [(table, table_path(export_root, dialect, table)) for table in tables]
        removed = prepare_dialect_dir(
            export_root, dialect, keep_tables=tables if per_table else None
        )
        for path in removed:
            print(f"  Удален устаревший файл: {path.name}")

        dump_path = schema_path(export_root, dialect)
        print(f"  Экспорт схемы ({info['dump_tool']}) в файл: {dump_path}")
        if not _dump_and_check(dialect, schema_cmd, dump_path):
            return False
        print(f"✓ {dump_path.name}: {_size_mb(dump_path):.2f} MB")

        for table, path in table_paths:
            cmd = dump_command(dialect, database_url, table=table)
            if not _dump_and_check(dialect, cmd, path):
                print(f"✗ Не удалось выгрузить таблицу {table}")
                return False
        if tables:
            print(f"✓ Выгружено таблиц: {len(tables)}")

        if compress:
            archive_path = create_archive(export_root, dialect)
            print(f"✓ Архив: {archive_path.name} ({_size_mb(archive_path):.2f} MB)")

        return True

    except ValueError as e:
        print(f"✗ Ошибка экспорта {dialect}: {e}")
        return False
    except FileNotFoundError:
        info = get_dialect(dialect)
        print(f"✗ Ошибка: {info['dump_tool']} не найден в системе")
        print(f"Установите клиент: {info['package_hint']}")
        return False
    except SQLAlchemyError as e:
        print(f"✗ Ошибка подключения к базе данных {dialect}: {e}")
        return False


def export_all(targets, export_root, per_table=True, compress=False):
    """
    Экспортирует все диалекты из targets ({dialect: url}).

    Ошибка одного диалекта не останавливает остальные.
    Возвращает словарь {dialect: успех}.
    """
    if ensure_gitignore(export_root):
        print(f"Обновлен {os.path.join(str(export_root), '.gitignore')}")

    results = {}
    for dialect, database_url in targets.items():
        results[dialect] = export_schema(
            dialect,
            database_url,
            export_root,
            per_table=per_table,
            compress=compress,
        )
        print()
    return results
