# -*- coding: utf-8 -*-
"""
Формирование команд pg_dump и mysqldump для выгрузки схемы (без данных).

Каждый диалект выгружается только своей утилитой: каталог PostgreSQL
заполняется исключительно через pg_dump, каталог MySQL - через mysqldump.
"""
from .database_url import detect_dialect, parse_database_url, to_libpq_url

# Диалект -> утилиты и параметры по умолчанию
DIALECTS = {
    'postgresql': {
        'title': 'PostgreSQL',
        'dump_tool': 'pg_dump',
        'import_tool': 'psql',
        'package_hint': 'sudo apt-get install postgresql-client',
    },
    'mysql': {
        'title': 'MySQL',
        'dump_tool': 'mysqldump',
        'import_tool': 'mysql',
        'package_hint': 'sudo apt-get install mysql-client',
    },
}


def get_dialect(dialect):
    """Возвращает описание диалекта из DIALECTS или ValueError."""
    try:
        return DIALECTS[dialect]
    except KeyError:
        raise ValueError(f"Неизвестный диалект: {dialect}") from None


def pg_dump_command(database_url, table=None, schema='public'):
    """Команда pg_dump: только схема, plain-формат, без владельцев и прав."""
    cmd = [
        'pg_dump',
        f"--dbname={to_libpq_url(database_url)}",
        '-Fp',
        '--schema-only',
        '--clean',
        '--if-exists',
        '--no-owner',
        '--no-acl',
    ]
    if table:
        cmd.append(f'--table={schema}."{table}"')
    return cmd


def mysqldump_command(database_url, table=None):
    """Команда mysqldump: только схема, с DROP TABLE перед каждой таблицей."""
    db_params = parse_database_url(database_url)
    if db_params['dialect'] != 'mysql':
        raise ValueError(f"URL не относится к MySQL: {database_url}")

    cmd = ['mysqldump']
    if db_params['user']:
        cmd.append(f"-u{db_params['user']}")
    if db_params['password']:
        cmd.append(f"-p{db_params['password']}")
    cmd += [
        f"-h{db_params['host']}",
        f"-P{db_params['port']}",
        '--no-data',
        '--single-transaction',
        '--add-drop-table',
        db_params['database'],
    ]
    if table:
        cmd.append(table)
    return cmd


def dump_command(dialect, database_url, table=None):
    """
    Возвращает команду выгрузки схемы для указанного диалекта.

    Диалект URL обязан совпадать с запрошенным: выгрузка каталога postgresql
    из MySQL-базы (или наоборот) считается ошибкой конфигурации.
    """
    get_dialect(dialect)
    url_dialect = detect_dialect(database_url)
    if url_dialect != dialect:
        raise ValueError(
            f"Диалект URL ({url_dialect}) не совпадает с каталогом выгрузки ({dialect})"
        )

    if dialect == 'postgresql':
        return pg_dump_command(database_url, table=table)
    return mysqldump_command(database_url, table=table)
