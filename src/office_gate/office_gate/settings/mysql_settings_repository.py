from __future__ import annotations

from typing import Sequence

import mysql.connector

from ..core.exceptions import UpstreamUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SettingRow
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_rows(self) -> Sequence[SettingRow]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT setting_key, setting_value
                    FROM office_settings
                    ORDER BY setting_key
                    """
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise UpstreamUnavailableError(f"Settings fetch failed: {e}") from e

        return [
            SettingRow(setting_key=str(r["setting_key"]), setting_value=_decode(r.get("setting_value")))
            for r in rows
        ]


def _decode(value):
    # JSON columns come back as str or bytearray depending on connector version.
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return value
