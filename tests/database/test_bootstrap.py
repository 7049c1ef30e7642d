from __future__ import annotations

from pathlib import Path

from src.office_gate.office_gate.database.bootstrap import iter_sql_statements

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\n-- comment; here\nSELECT \"x;y\";"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"']


def test_schema_creates_settings_table_and_default_rows():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS office_settings")
    assert statements[1].startswith("INSERT IGNORE INTO office_settings")
    for key in ("allowed_ips", "allowed_asns", "allowed_cidrs", "office_location"):
        assert f"'{key}'" in statements[1]
