from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, opt_float
from .model import JournalListRow
from .repository import JournalRepository


class MySQLJournalRepository(JournalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        class_id: int,
        subject_id: int,
        content: str,
        selfie: Optional[str],
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO journals(user_id, class_id, subject_id, content, selfie, latitude, longitude)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), int(class_id), int(subject_id), content, selfie, latitude, longitude),
            )
            return int(cur.lastrowid)

    def list_rows(self, *, user_id: Optional[int] = None, limit: int = 1000) -> Sequence[JournalListRow]:
        clauses = ["1=1"]
        params: list[object] = []
        if user_id is not None:
            clauses.append("j.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT j.id, j.user_id, u.name AS user_name, c.name AS class_name, s.name AS subject_name,
                       j.content, j.timestamp, j.selfie, j.latitude, j.longitude
                FROM journals j
                JOIN users u ON u.id = j.user_id
                JOIN classes c ON c.id = j.class_id
                JOIN subjects s ON s.id = j.subject_id
                WHERE {where}
                ORDER BY j.timestamp DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                JournalListRow(
                    journal_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    class_name=r["class_name"],
                    subject_name=r["subject_name"],
                    content=r["content"],
                    timestamp=r["timestamp"],
                    selfie=r.get("selfie"),
                    latitude=opt_float(r.get("latitude")),
                    longitude=opt_float(r.get("longitude")),
                )
                for r in fetchall(cur)
            ]
