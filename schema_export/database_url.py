# -*- coding: utf-8 -*-
"""
Разбор строк подключения к базам данных (DATABASE_URL).

Поддерживаются PostgreSQL и MySQL. Кроме разбора, модуль приводит URL к виду,
который понимают pg_dump/psql (libpq) и SQLAlchemy.
"""
from urllib.parse import urlparse, unquote

# Схема URL -> диалект
SCHEME_DIALECTS = {
    'postgresql': 'postgresql',
    'postgres': 'postgresql',
    'postgresql+psycopg2': 'postgresql',
    'mysql': 'mysql',
    'mysql+pymysql': 'mysql',
}

DEFAULT_PORTS = {
    'postgresql': 5432,
    'mysql': 3306,
}

SQLALCHEMY_DRIVERS = {
    'postgresql': 'postgresql+psycopg2',
    'mysql': 'mysql+pymysql',
}


def _split_scheme(database_url):
    if not database_url or '://' not in database_url:
        raise ValueError(f"Неподдерживаемый формат DATABASE_URL: {database_url}")
    scheme, rest = database_url.split('://', 1)
    return scheme.lower(), rest


def detect_dialect(database_url):
    """Определяет диалект ('postgresql' или 'mysql') по схеме URL."""
    scheme, _ = _split_scheme(database_url)
    dialect = SCHEME_DIALECTS.get(scheme)
    if dialect is None:
        raise ValueError(f"Неподдерживаемый формат DATABASE_URL: {database_url}")
    return dialect


def parse_database_url(database_url):
    """Парсит DATABASE_URL и извлекает параметры подключения."""
    dialect = detect_dialect(database_url)
    _, rest = _split_scheme(database_url)

    # urlparse не знает схем с драйвером, поэтому разбираем без него
    parsed = urlparse(f"{dialect}://{rest}")
    database = parsed.path.lstrip('/')
    if not database:
        raise ValueError(f"В DATABASE_URL не указано имя базы данных: {database_url}")

    return {
        'dialect': dialect,
        'user': unquote(parsed.username) if parsed.username else None,
        'password': unquote(parsed.password) if parsed.password else None,
        'host': parsed.hostname or 'localhost',
        'port': parsed.port or DEFAULT_PORTS[dialect],
        'database': database,
    }


def to_libpq_url(database_url):
    """
    Возвращает URL в виде, который принимают pg_dump --dbname и psql --dbname.

    libpq не понимает суффикс драйвера (postgresql+psycopg2://),
    а схема postgres:// приводится к postgresql://.
    """
    if detect_dialect(database_url) != 'postgresql':
        raise ValueError(f"URL не относится к PostgreSQL: {database_url}")
    _, rest = _split_scheme(database_url)
    return f"postgresql://{rest}"


def to_sqlalchemy_url(database_url):
    """Возвращает URL для create_engine с драйверами psycopg2 / pymysql."""
    dialect = detect_dialect(database_url)
    _, rest = _split_scheme(database_url)
    return f"{SQLALCHEMY_DRIVERS[dialect]}://{rest}"
