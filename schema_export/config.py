# -*- coding: utf-8 -*-
"""
Настройки выгрузки из переменных окружения (.env загружается через dotenv).

    POSTGRES_DATABASE_URL  - база PostgreSQL
    MYSQL_DATABASE_URL     - база MySQL
    DATABASE_URL           - запасной вариант, диалект по схеме URL
    EXPORT_DIR             - корень выгрузки (по умолчанию exports)
    EXPORT_PER_TABLE       - выгружать файлы по таблицам (true)
    EXPORT_COMPRESS        - создавать архив .tar.gz (false)
"""
import os

from dotenv import load_dotenv

from .database_url import detect_dialect

DIALECT_ENV_VARS = {
    'postgresql': 'POSTGRES_DATABASE_URL',
    'mysql': 'MYSQL_DATABASE_URL',
}

DEFAULT_EXPORT_DIR = 'exports'


def env_flag(name, default=False):
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def get_export_targets():
    """
    Возвращает {dialect: url} для всех настроенных баз.

    Если URL в переменной диалекта относится к другой СУБД - ValueError.
    """
    load_dotenv()

    targets = {}
    for dialect, env_var in DIALECT_ENV_VARS.items():
        database_url = os.getenv(env_var)
        if not database_url:
            continue
        url_dialect = detect_dialect(database_url)
        if url_dialect != dialect:
            raise ValueError(
                f"{env_var} указывает на {url_dialect}, ожидался {dialect}"
            )
        targets[dialect] = database_url

    database_url = os.getenv('DATABASE_URL')
    if database_url:
        dialect = detect_dialect(database_url)
        targets.setdefault(dialect, database_url)

    return targets


def get_export_dir():
    load_dotenv()
    return os.getenv('EXPORT_DIR') or DEFAULT_EXPORT_DIR


def get_export_options():
    """Возвращает (per_table, compress) из окружения."""
    load_dotenv()
    return env_flag('EXPORT_PER_TABLE', True), env_flag('EXPORT_COMPRESS', False)
