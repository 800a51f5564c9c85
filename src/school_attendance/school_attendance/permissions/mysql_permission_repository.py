from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PermissionStatus, PermissionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PermissionListRow, PermissionRequest
from .repository import PermissionRepository


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, type: PermissionType, reason: str, file_url: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO permissions(user_id, type, reason, file_url, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), type.value, reason, file_url, PermissionStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[PermissionRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, type, reason, file_url, status, timestamp,
                       decided_by, decided_at, admin_note
                FROM permissions
                WHERE id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PermissionRequest(
                request_id=int(r["id"]),
                user_id=int(r["user_id"]),
                type=PermissionType(r["type"]),
                reason=r["reason"],
                status=PermissionStatus(r["status"]),
                timestamp=r["timestamp"],
                file_url=r.get("file_url"),
                decided_by=r.get("decided_by"),
                decided_at=r.get("decided_at"),
                admin_note=r.get("admin_note"),
            )

    def decide(
        self,
        *,
        request_id: int,
        status: PermissionStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE permissions
                SET status=%s, decided_by=%s, decided_at=NOW(), admin_note=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, int(decided_by), admin_note, int(request_id), PermissionStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_rows(
        self,
        *,
        status: Optional[PermissionStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 1000,
    ) -> Sequence[PermissionListRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("p.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("p.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.id, p.user_id, u.name AS user_name, p.type, p.reason,
                       p.status, p.timestamp, p.file_url, p.admin_note
                FROM permissions p
                JOIN users u ON u.id = p.user_id
                WHERE {where}
                ORDER BY p.timestamp DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                PermissionListRow(
                    request_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    type=PermissionType(r["type"]),
                    reason=r["reason"],
                    status=PermissionStatus(r["status"]),
                    timestamp=r["timestamp"],
                    file_url=r.get("file_url"),
                    admin_note=r.get("admin_note"),
                )
                for r in fetchall(cur)
            ]

    def count_pending(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS count FROM permissions WHERE status=%s", (PermissionStatus.PENDING.value,))
            row = fetchone(cur)
            return int(row["count"]) if row else 0
