"""Schema/seed helpers used on startup (AUTO_INIT_DB / AUTO_SEED_DB) and by scripts/."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # username, password, name, role, nip
    ("admin", "admin123", "Administrator", "admin", None),
    ("guru", "guru123", "Guru Contoh", "guru", "198001012005011001"),
)
DEMO_ZONE = ("Sekolah", -6.2000, 106.8166, 100)


@contextmanager
def _server_conn(db_config: dict, *, database: Optional[str] = None) -> Iterator:
    cfg = DBConfig.from_dict(db_config)
    conn = mysql.connector.connect(
        host=cfg.host,
        port=cfg.port,
        user=cfg.user,
        password=cfg.password,
        database=database,
        use_pure=True,
    )
    try:
        yield conn
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql may pin a database name; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes. Line comments ('-- ...') are dropped."""

    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False
    in_comment = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            continue

        if escape:
            buf.append(ch)
            escape = False
            prev = ch
            continue

        if ch == "\\" and (in_single or in_double):
            buf.append(ch)
            escape = True
            continue

        if ch == "-" and prev == "-" and not in_single and not in_double:
            buf.pop()
            in_comment = True
            prev = ""
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            prev = ""
            if stmt:
                yield stmt
            continue

        buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    database = DBConfig.from_dict(db_config).database
    with _server_conn(db_config, database=database) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_dict(db_config).database
    with _server_conn(db_config) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, Path(schema_path))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, Path(seed_path))


def ensure_demo_users(db_config: dict) -> None:
    """Upsert the demo accounts with real password hashes and make sure one zone exists.

    seed.sql cannot carry werkzeug hashes, so the accounts are written here.
    """

    database = DBConfig.from_dict(db_config).database
    with _server_conn(db_config, database=database) as conn:
        cur = conn.cursor(dictionary=True)

        for username, password, name, role, nip in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password_hash=%s, role=%s, nip=%s
                    WHERE username=%s
                    """,
                    (name, password_hash, role, nip, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (username, password_hash, name, role, nip)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (username, password_hash, name, role, nip),
                )

        cur.execute("SELECT COUNT(*) AS count FROM geolocations")
        if int(cur.fetchone()["count"]) == 0:
            cur.execute(
                "INSERT INTO geolocations (name, latitude, longitude, radius) VALUES (%s, %s, %s, %s)",
                DEMO_ZONE,
            )
            logger.info("Default zone %r created", DEMO_ZONE[0])

        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    database = DBConfig.from_dict(db_config).database
    with _server_conn(db_config, database=database) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
