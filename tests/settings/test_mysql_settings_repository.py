from __future__ import annotations

import mysql.connector
import pytest

from src.office_gate.office_gate.container import build_container
from src.office_gate.office_gate.core.exceptions import ConfigurationError, UpstreamUnavailableError
from src.office_gate.office_gate.settings.model import SettingRow
from src.office_gate.office_gate.settings.mysql_settings_repository import MySQLSettingsRepository
from src.office_gate.office_gate.settings.rest_settings_repository import RestSettingsRepository


class FakeCursor:
    def __init__(self, rows, error=None):
        self.rows = rows
        self.error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        if self.error:
            raise self.error
        self.executed.append(sql)

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        assert dictionary is True
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor):
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


def test_reads_rows_and_decodes_json_bytes():
    cursor = FakeCursor(
        [
            {"setting_key": "allowed_cidrs", "setting_value": bytearray(b'["203.0.113.0/24"]')},
            {"setting_key": "allowed_ips", "setting_value": '["*"]'},
        ]
    )
    factory = FakeConnFactory(cursor)

    rows = MySQLSettingsRepository(factory).fetch_rows()

    assert rows == [
        SettingRow("allowed_cidrs", '["203.0.113.0/24"]'),
        SettingRow("allowed_ips", '["*"]'),
    ]
    assert "FROM office_settings" in cursor.executed[0]
    assert cursor.closed and factory.conn.closed


def test_driver_errors_are_upstream_unavailable():
    factory = FakeConnFactory(FakeCursor([], error=mysql.connector.Error("gone away")))

    with pytest.raises(UpstreamUnavailableError):
        MySQLSettingsRepository(factory).fetch_rows()
    assert factory.conn.rolled_back is True


def test_container_selects_backend():
    mysql_container = build_container(config={"SETTINGS_BACKEND": "mysql", "DB_CONFIG": {"database": "office_gate"}})
    rest_container = build_container(config={"SUPABASE_URL": "https://db.example.co", "SUPABASE_ANON_KEY": "anon"})

    assert isinstance(mysql_container.settings_repo, MySQLSettingsRepository)
    assert isinstance(rest_container.settings_repo, RestSettingsRepository)

    with pytest.raises(ConfigurationError):
        build_container(config={"SETTINGS_BACKEND": "sqlite"})
