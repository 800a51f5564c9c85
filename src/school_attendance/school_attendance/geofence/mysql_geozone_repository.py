from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Coordinate, GeoZone
from .repository import GeoZoneRepository


def _to_zone(r: dict) -> GeoZone:
    return GeoZone(
        zone_id=int(r["id"]),
        name=r["name"],
        center=Coordinate(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
        radius_m=float(r["radius"]),
    )


class MySQLGeoZoneRepository(GeoZoneRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[GeoZone]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, latitude, longitude, radius FROM geolocations ORDER BY id")
            return [_to_zone(r) for r in fetchall(cur)]

    def get_by_id(self, zone_id: int) -> Optional[GeoZone]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, latitude, longitude, radius FROM geolocations WHERE id=%s",
                (int(zone_id),),
            )
            r = fetchone(cur)
            return _to_zone(r) if r else None

    def create(self, *, name: str, latitude: float, longitude: float, radius_m: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO geolocations(name, latitude, longitude, radius)
                VALUES(%s,%s,%s,%s)
                """,
                (name, latitude, longitude, radius_m),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, zone_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM geolocations WHERE id=%s", (int(zone_id),))
            return cur.rowcount > 0
