# -*- coding: utf-8 -*-
"""
Проверка, что файл дампа создан утилитой нужного диалекта.

pg_dump и mysqldump пишут в начало файла узнаваемый заголовок. По нему
ловится ситуация, когда каталог postgresql заполнен выводом mysqldump.
"""
import gzip
from pathlib import Path

HEAD_LINES = 40

HEADER_MARKERS = [
    ('-- PostgreSQL database dump', 'postgresql'),
    ('-- MySQL dump', 'mysql'),
    ('-- MariaDB dump', 'mysql'),
]

# Если заголовка нет (например, файл обрезан) - смотрим на типичные конструкции
FALLBACK_MARKERS = [
    ('SET statement_timeout', 'postgresql'),
    ('pg_catalog.', 'postgresql'),
    ('/*!40101 SET', 'mysql'),
    ('ENGINE=', 'mysql'),
]


def _read_head(path, limit=HEAD_LINES):
    opener = gzip.open if str(path).endswith('.gz') else open
    lines = []
    with opener(path, 'rt', encoding='utf-8', errors='replace') as f:
        for line in f:
            lines.append(line)
            if len(lines) >= limit:
                break
    return lines


def detect_dump_dialect(path):
    """Возвращает 'postgresql', 'mysql' или None, если диалект не распознан."""
    head = _read_head(path)

    for line in head:
        for marker, dialect in HEADER_MARKERS:
            if line.startswith(marker):
                return dialect

    text = ''.join(head)
    for marker, dialect in FALLBACK_MARKERS:
        if marker in text:
            return dialect
    return None


def check_dump(path, expected_dialect):
    """Проверяет файл дампа; при любой проблеме выбрасывает ValueError."""
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Файл дампа не найден: {path}")
    if path.stat().st_size == 0:
        raise ValueError(f"Файл дампа пуст: {path}")

    detected = detect_dump_dialect(path)
    if detected is None:
        raise ValueError(f"Не удалось определить диалект дампа: {path}")
    if detected != expected_dialect:
        raise ValueError(
            f"Файл {path.name} создан для {detected}, а ожидался {expected_dialect}"
        )
    return detected
