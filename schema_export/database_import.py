# -*- coding: utf-8 -*-
"""
Модуль для импорта выгруженной схемы обратно в базу данных.
Используется для проверки, что schema.sql действительно загружается
в СУБД своего диалекта (psql для PostgreSQL, mysql для MySQL).
"""
import os
import subprocess

from .database_url import parse_database_url, to_libpq_url
from .dump_check import check_dump
from .dump_commands import get_dialect
from .export_layout import schema_path, tables_dir


def import_command(dialect, database_url, sql_file=None):
    """Формирует команду загрузки SQL-файла для диалекта."""
    get_dialect(dialect)
    db_params = parse_database_url(database_url)
    if db_params['dialect'] != dialect:
        raise ValueError(
            f"Диалект URL ({db_params['dialect']}) не совпадает с диалектом файла ({dialect})"
        )

    if dialect == 'postgresql':
        cmd = [
            'psql',
            f"--dbname={to_libpq_url(database_url)}",
            '-v', 'ON_ERROR_STOP=1',
            '--quiet',
        ]
        if sql_file:
            cmd.append(f"--file={sql_file}")
        return cmd

    cmd = ['mysql']
    if db_params['user']:
        cmd.append(f"-u{db_params['user']}")
    if db_params['password']:
        cmd.append(f"-p{db_params['password']}")
    cmd += [
        f"-h{db_params['host']}",
        f"-P{db_params['port']}",
        db_params['database'],
    ]
    return cmd


def list_export_files(export_root, dialect):
    """Возвращает schema.sql и файлы таблиц диалекта, если они есть."""
    files = []
    schema_file = schema_path(export_root, dialect)
    if schema_file.exists():
        files.append(schema_file)
    tables = tables_dir(export_root, dialect)
    if tables.is_dir():
        files.extend(sorted(tables.glob('*.sql')))
    return files


def import_schema(dialect, database_url, sql_file):
    """Загружает SQL-файл в базу данных. Возвращает True при успехе."""
    try:
        info = get_dialect(dialect)
        sql_file = os.path.abspath(sql_file)
        check_dump(sql_file, dialect)

        if dialect == 'postgresql':
            cmd = import_command(dialect, database_url, sql_file=sql_file)
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True
            )
        else:
            cmd = import_command(dialect, database_url)
            # Читаем SQL файл и передаем в mysql
            with open(sql_file, 'r', encoding='utf-8') as f:
                result = subprocess.run(
                    cmd,
                    stdin=f,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    text=True
                )

        if result.returncode == 0:
            print(f"✓ Файл {os.path.basename(sql_file)} загружен в {info['title']}")
            return True

        print(f"✗ Ошибка при импорте {os.path.basename(sql_file)}:")
        print(result.stderr)
        return False

    except ValueError as e:
        print(f"✗ Ошибка импорта: {e}")
        return False
    except FileNotFoundError:
        info = get_dialect(dialect)
        print(f"✗ Ошибка: {info['import_tool']} не найден в системе")
        print(f"Установите клиент: {info['package_hint']}")
        return False
