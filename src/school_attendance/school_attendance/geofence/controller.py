from __future__ import annotations

from flask import Flask

from ..common.validators import require_float
from ..common.web import admin_required, handles_domain_errors, json_body, login_required, ok
from ..container import Container
from .model import Coordinate, GeoZone


def _zone_json(zone: GeoZone) -> dict:
    # Flat shape the admin screen and the location watcher both read.
    return {
        "id": zone.zone_id,
        "name": zone.name,
        "latitude": zone.center.latitude,
        "longitude": zone.center.longitude,
        "radius": zone.radius_m,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/geolocations", methods=["GET"], endpoint="geolocations")
    @login_required
    @handles_domain_errors("memuat lokasi")
    def geolocations():
        return ok([_zone_json(z) for z in container.geozone_service.list_zones()])

    @app.route("/api/geolocations/check", methods=["POST"], endpoint="geolocations_check")
    @login_required
    @handles_domain_errors("memeriksa lokasi")
    def geolocations_check():
        data = json_body()
        point = Coordinate(
            latitude=require_float(data.get("latitude"), "Latitude"),
            longitude=require_float(data.get("longitude"), "Longitude"),
        )
        result = container.geozone_service.check(point)
        return ok(
            {
                "distance": result.nearest_distance_m,
                "withinAnyZone": result.within_any_zone,
                "distanceLabel": result.distance_label,
                "status": result.status_label,
            }
        )

    @app.route("/api/admin/geolocations", methods=["GET"], endpoint="admin_geolocations")
    @admin_required
    @handles_domain_errors("memuat lokasi")
    def admin_geolocations():
        return ok([_zone_json(z) for z in container.geozone_service.list_zones()])

    @app.route("/api/admin/geolocations", methods=["POST"], endpoint="admin_geolocations_create")
    @admin_required
    @handles_domain_errors("menyimpan lokasi")
    def admin_geolocations_create():
        data = json_body()
        zone_id = container.geozone_service.create_zone(
            name=data.get("name", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius_m=data.get("radius"),
        )
        return ok(id=zone_id)

    @app.route("/api/admin/geolocations/<int:zone_id>", methods=["DELETE"], endpoint="admin_geolocations_delete")
    @admin_required
    @handles_domain_errors("menghapus lokasi")
    def admin_geolocations_delete(zone_id: int):
        container.geozone_service.delete_zone(zone_id)
        return ok()
