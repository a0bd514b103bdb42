# -*- coding: utf-8 -*-
"""
Структура каталога выгрузки:

    <export_root>/
        .gitignore
        postgresql/schema.sql
        postgresql/tables/<table>.sql
        mysql/schema.sql
        mysql/tables/<table>.sql

Архивы (*.tar.gz, *.sql.gz) в git не попадают.
"""
from pathlib import Path

SCHEMA_FILENAME = 'schema.sql'
TABLES_DIRNAME = 'tables'

GITIGNORE_RULES = [
    '*.tar.gz',
    '*.sql.gz',
]


def dialect_dir(export_root, dialect):
    return Path(export_root) / dialect


def tables_dir(export_root, dialect):
    return dialect_dir(export_root, dialect) / TABLES_DIRNAME


def schema_path(export_root, dialect):
    return dialect_dir(export_root, dialect) / SCHEMA_FILENAME


def table_path(export_root, dialect, table):
    """Путь к файлу таблицы; имена с разделителями пути отклоняются."""
    if not table or table in ('.', '..') or any(sep in table for sep in ('/', '\\', '\0')):
        raise ValueError(f"Недопустимое имя таблицы для файла: {table!r}")
    return tables_dir(export_root, dialect) / f"{table}.sql"


def prepare_dialect_dir(export_root, dialect, keep_tables=None):
    """
    Создает каталоги диалекта и удаляет устаревшие файлы таблиц.

    Удаляются только tables/*.sql, для которых нет таблицы в keep_tables.
    При keep_tables=None файлы таблиц не удаляются.
    schema.sql и архивы не трогаются. Возвращает список удаленных путей.
    """
    tables = tables_dir(export_root, dialect)
    tables.mkdir(parents=True, exist_ok=True)

    removed = []
    if keep_tables is None:
        return removed

    keep = set(keep_tables)
    for path in sorted(tables.glob('*.sql')):
        if path.stem not in keep:
            path.unlink()
            removed.append(path)
    return removed


def ensure_gitignore(export_root):
    """Дописывает недостающие правила в <export_root>/.gitignore."""
    root = Path(export_root)
    root.mkdir(parents=True, exist_ok=True)
    gitignore = root / '.gitignore'

    existing = []
    if gitignore.exists():
        existing = gitignore.read_text(encoding='utf-8').splitlines()

    missing = [rule for rule in GITIGNORE_RULES if rule not in {line.strip() for line in existing}]
    if not missing:
        return False

    lines = existing + missing
    gitignore.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    return True
