from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.validators import require_float, require_non_empty
from ..core.exceptions import ValidationError
from .evaluator import evaluate
from .model import Coordinate, GeoZone, ProximityResult
from .repository import GeoZoneRepository

logger = logging.getLogger(__name__)


class GeoZoneService:
    """Use case: manage attendance zones and check a live fix against them."""

    def __init__(self, zones: GeoZoneRepository):
        self._zones = zones

    def list_zones(self) -> Sequence[GeoZone]:
        return self._zones.list_all()

    def create_zone(self, *, name: str, latitude: Any, longitude: Any, radius_m: Any) -> int:
        name = require_non_empty(name, "Nama lokasi")
        lat = require_float(latitude, "Latitude")
        lng = require_float(longitude, "Longitude")
        radius = require_float(radius_m, "Radius")
        if radius <= 0:
            raise ValidationError("Radius harus lebih dari 0 meter")

        zone_id = self._zones.create(name=name, latitude=lat, longitude=lng, radius_m=radius)
        logger.info("Geozone %s created: %r (%.6f, %.6f) r=%.0fm", zone_id, name, lat, lng, radius)
        return zone_id

    def delete_zone(self, zone_id: int) -> None:
        if not self._zones.delete_by_id(int(zone_id)):
            raise ValidationError("Lokasi tidak ditemukan")
        logger.info("Geozone %s deleted", zone_id)

    def check(self, point: Coordinate) -> ProximityResult:
        return evaluate(point, self._zones.list_all())
