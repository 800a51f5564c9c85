from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, username, password_hash, name, role, nip, class_id"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        name=row["name"],
        role=Role(row["role"]),
        nip=row.get("nip"),
        class_id=row.get("class_id"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY id")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        name: str,
        role: Role,
        nip: Optional[str],
        class_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, name, role, nip, class_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (username, password_hash, name, role.value, nip, class_id),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        *,
        user_id: int,
        username: str,
        name: str,
        role: Role,
        nip: Optional[str],
        password_hash: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if password_hash:
                cur.execute(
                    """
                    UPDATE users
                    SET username=%s, password_hash=%s, name=%s, role=%s, nip=%s
                    WHERE id=%s
                    """,
                    (username, password_hash, name, role.value, nip, int(user_id)),
                )
            else:
                cur.execute(
                    """
                    UPDATE users
                    SET username=%s, name=%s, role=%s, nip=%s
                    WHERE id=%s
                    """,
                    (username, name, role.value, nip, int(user_id)),
                )
            # rowcount is 0 when nothing changed, so check existence instead
            cur.execute("SELECT 1 AS ok FROM users WHERE id=%s", (int(user_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS count FROM users")
            row = fetchone(cur)
            return int(row["count"]) if row else 0
