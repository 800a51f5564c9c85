"""Great-circle distance and geofence membership.

Pure functions: cheap enough to run on every location fix.
"""

from __future__ import annotations

import math
from typing import Iterable

from ..core.constants import EARTH_RADIUS_M
from .model import UNKNOWN_PROXIMITY, Coordinate, GeoZone, ProximityResult


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in meters between two points on a sphere of radius 6 371 000 m.

    Non-finite input yields NaN instead of raising (math.sin(inf) would raise).
    """

    if not all(math.isfinite(v) for v in (a.latitude, a.longitude, b.latitude, b.longitude)):
        return math.nan

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def is_within_radius(point: Coordinate, zone: GeoZone) -> bool:
    return haversine_distance(point, zone.center) <= zone.radius_m


def evaluate(point: Coordinate, zones: Iterable[GeoZone]) -> ProximityResult:
    """Nearest distance over all zones, and whether ANY zone contains the point.

    Each zone is checked against its own radius, so a large distant zone can
    admit a point that a nearer, smaller zone does not.
    """

    zones = list(zones)
    if not zones:
        return UNKNOWN_PROXIMITY

    nearest = math.inf
    within = False
    for zone in zones:
        d = haversine_distance(point, zone.center)
        if d < nearest:
            nearest = d
        if d <= zone.radius_m:
            within = True

    return ProximityResult(nearest_distance_m=nearest, within_any_zone=within)
