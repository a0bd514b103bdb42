#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Скрипт для выгрузки схемы баз данных в каталог exports/.

Примеры:
    python export_schemas.py
    python export_schemas.py --dialect postgresql --compress
    python export_schemas.py --output-dir build/exports --no-tables
"""
import argparse
import sys

from schema_export.config import get_export_dir, get_export_options, get_export_targets
from schema_export.database_export import export_all
from schema_export.dump_commands import DIALECTS


def build_parser():
    parser = argparse.ArgumentParser(
        prog='schema-export',
        description='Выгрузка схемы (без данных) через pg_dump и mysqldump',
    )
    parser.add_argument(
        '--dialect',
        action='append',
        choices=sorted(DIALECTS),
        help='Выгрузить только указанный диалект (можно повторять)',
    )
    parser.add_argument(
        '--output-dir',
        help='Корневой каталог выгрузки (по умолчанию EXPORT_DIR или exports)',
    )
    parser.add_argument(
        '--no-tables',
        action='store_true',
        help='Не создавать отдельные файлы для каждой таблицы',
    )
    parser.add_argument(
        '--compress',
        action='store_true',
        help='Создать архив .tar.gz для каждого диалекта',
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print("=" * 60)
    print("Экспорт схемы баз данных")
    print("=" * 60)
    print()

    try:
        targets = get_export_targets()
    except ValueError as e:
        print(f"✗ Ошибка конфигурации: {e}")
        return 1

    if args.dialect:
        missing = [d for d in args.dialect if d not in targets]
        if missing:
            print(f"✗ Не настроен URL для: {', '.join(missing)}")
            return 1
        targets = {d: targets[d] for d in args.dialect}

    if not targets:
        print("Ошибка: не найдено ни одного URL базы данных")
        print("Задайте POSTGRES_DATABASE_URL, MYSQL_DATABASE_URL или DATABASE_URL в .env")
        return 1

    per_table, compress = get_export_options()
    if args.no_tables:
        per_table = False
    if args.compress:
        compress = True

    export_root = args.output_dir or get_export_dir()
    results = export_all(targets, export_root, per_table=per_table, compress=compress)

    for dialect, ok in results.items():
        mark = '✓' if ok else '✗'
        print(f"{mark} {DIALECTS[dialect]['title']}")

    if all(results.values()):
        print("Экспорт завершен успешно!")
        return 0
    print("Экспорт завершен с ошибками.")
    return 1


if __name__ == '__main__':
    sys.exit(main())
