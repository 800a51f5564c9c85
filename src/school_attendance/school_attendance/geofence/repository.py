from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import GeoZone


class GeoZoneRepository(Protocol):
    def list_all(self) -> Sequence[GeoZone]:
        raise NotImplementedError

    def get_by_id(self, zone_id: int) -> Optional[GeoZone]:
        raise NotImplementedError

    def create(self, *, name: str, latitude: float, longitude: float, radius_m: float) -> int:
        raise NotImplementedError

    def delete_by_id(self, zone_id: int) -> bool:
        raise NotImplementedError
