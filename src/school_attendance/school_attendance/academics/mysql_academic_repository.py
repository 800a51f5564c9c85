from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import SchoolClass, Subject
from .repository import ClassRepository, SubjectRepository


def _insert_name(conn_factory: DatabaseConnection, table: str, name: str) -> Optional[int]:
    try:
        with db_cursor(conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO {table}(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)
    except IntegrityError as e:
        if is_duplicate_key(e):
            return None
        raise


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM classes ORDER BY name")
            return [SchoolClass(class_id=int(r["id"]), name=r["name"]) for r in fetchall(cur)]

    def create(self, name: str) -> Optional[int]:
        return _insert_name(self._conn_factory, "classes", name)


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM subjects ORDER BY name")
            return [Subject(subject_id=int(r["id"]), name=r["name"]) for r in fetchall(cur)]

    def create(self, name: str) -> Optional[int]:
        return _insert_name(self._conn_factory, "subjects", name)
