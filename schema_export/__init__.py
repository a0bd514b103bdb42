# -*- coding: utf-8 -*-
"""
Модуль для выгрузки схемы баз данных PostgreSQL и MySQL.

Содержит функции для:
- Экспорта схемы через pg_dump / mysqldump
- Проверки, что дамп создан утилитой своего диалекта
- Импорта выгруженной схемы для проверки
"""

from .database_export import export_all, export_schema, list_tables
from .database_import import import_schema, list_export_files
from .database_url import parse_database_url
from .dump_check import check_dump, detect_dump_dialect
from .dump_commands import DIALECTS, dump_command

__all__ = [
    'DIALECTS',
    'check_dump',
    'detect_dump_dialect',
    'dump_command',
    'export_all',
    'export_schema',
    'import_schema',
    'list_export_files',
    'list_tables',
    'parse_database_url',
]
