from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    """(latitude, longitude) in degrees. Range is not validated."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoZone:
    """Circular attendance area: center + radius in meters."""

    zone_id: int
    name: str
    center: Coordinate
    radius_m: float


@dataclass(frozen=True)
class ProximityResult:
    """Derived on every location fix, never persisted.

    ``nearest_distance_m`` is None while it is unknown (no zones registered).
    """

    nearest_distance_m: Optional[float]
    within_any_zone: bool

    @property
    def distance_label(self) -> str:
        if self.nearest_distance_m is None or not math.isfinite(self.nearest_distance_m):
            return "..."
        return f"{round(self.nearest_distance_m)}m"

    @property
    def status_label(self) -> str:
        return "Dalam Area Sekolah" if self.within_any_zone else "Luar Area Sekolah"


UNKNOWN_PROXIMITY = ProximityResult(nearest_distance_m=None, within_any_zone=False)
