from __future__ import annotations

from pathlib import Path

from src.school_attendance.school_attendance.database.bootstrap import iter_sql_statements

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");\nSELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_drops_line_comments():
    sql = "-- header; with a semicolon\nCREATE TABLE x (id INT); -- trailing\n"
    assert list(iter_sql_statements(sql)) == ["CREATE TABLE x (id INT)"]


def test_schema_declares_daily_unique_key():
    schema = (REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(schema))

    attendance = next(s for s in statements if "CREATE TABLE IF NOT EXISTS attendance" in s)
    assert "UNIQUE KEY uq_attendance_user_type_day (user_id, type, work_date)" in attendance
    assert any("CREATE TABLE IF NOT EXISTS permissions" in s for s in statements)
