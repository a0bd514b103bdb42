"""Общие фикстуры: подмена subprocess.run и окружения."""
import subprocess

import pytest

from schema_export import config

PG_DUMP_OUTPUT = """--
-- PostgreSQL database dump
--

SET statement_timeout = 0;
DROP TABLE IF EXISTS public.users;
CREATE TABLE public.users (
    id integer NOT NULL
);
"""

MYSQL_DUMP_OUTPUT = """-- MySQL dump 10.13  Distrib 8.0.36, for Linux (x86_64)
--
-- Host: 127.0.0.1    Database: app
/*!40101 SET @OLD_CHARACTER_SET_CLIENT=@@CHARACTER_SET_CLIENT */;
DROP TABLE IF EXISTS `users`;
CREATE TABLE `users` (
  `id` int NOT NULL
) ENGINE=InnoDB;
"""

TOOL_OUTPUTS = {
    'pg_dump': PG_DUMP_OUTPUT,
    'mysqldump': MYSQL_DUMP_OUTPUT,
}


class FakeRun:
    """Заменяет subprocess.run: пишет заготовленный дамп в stdout-файл."""

    def __init__(self, outputs=None, returncode=0, stderr='', missing=(),
                 table_output=None, table_returncode=None):
        self.outputs = dict(TOOL_OUTPUTS)
        self.outputs.update(outputs or {})
        self.returncode = returncode
        self.stderr = stderr
        self.missing = set(missing)
        # Для вызовов pg_dump с --table=
        self.table_output = table_output
        self.table_returncode = table_returncode
        self.calls = []
        self.stdin_data = []

    def __call__(self, cmd, stdin=None, stdout=None, stderr=None, text=None):
        self.calls.append(list(cmd))
        if cmd[0] in self.missing:
            raise FileNotFoundError(cmd[0])
        if stdin is not None:
            self.stdin_data.append(stdin.read())
        returncode = self.returncode
        output = self.outputs.get(cmd[0], '')
        if any(arg.startswith('--table=') for arg in cmd):
            if self.table_output is not None:
                output = self.table_output
            if self.table_returncode is not None:
                returncode = self.table_returncode
        if hasattr(stdout, 'write'):
            stdout.write(output)
            output = None
        return subprocess.CompletedProcess(cmd, returncode, stdout=output, stderr=self.stderr)

    def tools(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(subprocess, 'run', fake)
    return fake


@pytest.fixture
def clean_env(monkeypatch):
    """Окружение без URL баз и без чтения .env."""
    for name in (
        'DATABASE_URL',
        'POSTGRES_DATABASE_URL',
        'MYSQL_DATABASE_URL',
        'EXPORT_DIR',
        'EXPORT_PER_TABLE',
        'EXPORT_COMPRESS',
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, 'load_dotenv', lambda *args, **kwargs: False)
    return monkeypatch
