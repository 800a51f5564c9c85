from __future__ import annotations

from typing import Optional, Sequence, Set

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, opt_float
from .model import AttendanceListRow, AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_if_absent(
        self,
        *,
        user_id: int,
        type: AttendanceType,
        latitude: float,
        longitude: float,
        address: Optional[str],
        selfie: str,
    ) -> Optional[int]:
        # uq_attendance_user_type_day (user_id, type, work_date) makes this the only check.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(user_id, type, timestamp, work_date, latitude, longitude, address, selfie)
                    VALUES(%s,%s,NOW(),CURDATE(),%s,%s,%s,%s)
                    """,
                    (int(user_id), type.value, latitude, longitude, address, selfie),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                return None
            raise

    def types_today(self, user_id: int) -> Set[AttendanceType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT type FROM attendance WHERE user_id=%s AND work_date=CURDATE()",
                (int(user_id),),
            )
            return {AttendanceType(r["type"]) for r in fetchall(cur)}

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, type, timestamp, work_date, latitude, longitude, address, selfie
                FROM attendance
                WHERE user_id=%s
                ORDER BY timestamp DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                AttendanceRecord(
                    attendance_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    type=AttendanceType(r["type"]),
                    timestamp=r["timestamp"],
                    work_date=r["work_date"],
                    latitude=opt_float(r.get("latitude")),
                    longitude=opt_float(r.get("longitude")),
                    address=r.get("address"),
                    selfie=r.get("selfie"),
                )
                for r in fetchall(cur)
            ]

    def list_admin(self, limit: int) -> Sequence[AttendanceListRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.user_id, u.name AS user_name, a.type, a.timestamp,
                       a.latitude, a.longitude, a.address, a.selfie
                FROM attendance a
                JOIN users u ON u.id = a.user_id
                ORDER BY a.timestamp DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                AttendanceListRow(
                    attendance_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    type=AttendanceType(r["type"]),
                    timestamp=r["timestamp"],
                    latitude=opt_float(r.get("latitude")),
                    longitude=opt_float(r.get("longitude")),
                    address=r.get("address"),
                    selfie=r.get("selfie"),
                )
                for r in fetchall(cur)
            ]

    def count_users_today(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(DISTINCT user_id) AS count FROM attendance WHERE work_date=CURDATE()")
            row = fetchone(cur)
            return int(row["count"]) if row else 0
