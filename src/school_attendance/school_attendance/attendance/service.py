from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Set

from ..common.datetime_utils import format_timestamp
from ..common.validators import optional_str, require_choice, require_float, require_non_empty
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceType
from ..core.exceptions import ConflictError, OutOfZoneError, ValidationError
from ..geofence.evaluator import evaluate
from ..geofence.model import Coordinate, ProximityResult
from ..geofence.repository import GeoZoneRepository
from .model import AttendanceListRow, AttendanceRecord, AttendanceSubmission
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_TYPE_LABEL = {
    AttendanceType.CHECK_IN: "masuk",
    AttendanceType.CHECK_OUT: "pulang",
}

CSV_FIELDS = ["timestamp", "user_id", "user_name", "type", "latitude", "longitude", "address"]


def default_address(latitude: float, longitude: float) -> str:
    return f"Lat: {latitude:.4f}, Lng: {longitude:.4f}"


class AttendanceService:
    """Accepts check-in/check-out submissions.

    Rules, in order:
    - type, coordinates and selfie evidence are required;
    - when ``enforce_geofence`` is on, the point must be inside at least one
      registered zone (same evaluator the client runs);
    - at most one record per (user, type, calendar day), decided by the
      repository's atomic insert.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        zones: GeoZoneRepository,
        *,
        enforce_geofence: bool = True,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._attendance = attendance
        self._zones = zones
        self._enforce_geofence = bool(enforce_geofence)
        self._history_limit = int(history_limit)

    def parse_submission(self, user_id: int, data: dict) -> AttendanceSubmission:
        """Build a submission from a JSON body, rejecting missing fields."""

        return AttendanceSubmission(
            user_id=int(user_id),
            type=require_choice(data.get("type"), AttendanceType, "Jenis absen"),
            latitude=require_float(data.get("latitude"), "Latitude"),
            longitude=require_float(data.get("longitude"), "Longitude"),
            selfie=require_non_empty(data.get("selfie"), "Foto selfie"),
            address=optional_str(data.get("address")),
        )

    def submit(self, submission: AttendanceSubmission) -> int:
        proximity = self._check_zone(submission)

        address = submission.address or default_address(submission.latitude, submission.longitude)
        attendance_id = self._attendance.create_if_absent(
            user_id=submission.user_id,
            type=submission.type,
            latitude=submission.latitude,
            longitude=submission.longitude,
            address=address,
            selfie=submission.selfie,
        )
        if attendance_id is None:
            logger.warning("Duplicate attendance '%s' for user %s today", submission.type.value, submission.user_id)
            raise ConflictError(f"Anda sudah melakukan absen {_TYPE_LABEL[submission.type]} hari ini.")

        logger.info(
            "Attendance %s '%s' accepted for user %s (distance=%s)",
            attendance_id,
            submission.type.value,
            submission.user_id,
            proximity.distance_label,
        )
        return attendance_id

    def _check_zone(self, submission: AttendanceSubmission) -> ProximityResult:
        point = Coordinate(latitude=submission.latitude, longitude=submission.longitude)
        proximity = evaluate(point, self._zones.list_all())
        if self._enforce_geofence and not proximity.within_any_zone:
            logger.warning(
                "Out-of-zone attendance rejected for user %s at (%.6f, %.6f), nearest=%s",
                submission.user_id,
                submission.latitude,
                submission.longitude,
                proximity.distance_label,
            )
            if proximity.nearest_distance_m is None:
                raise OutOfZoneError("Lokasi presensi belum diatur oleh admin.")
            raise OutOfZoneError(
                f"Anda berada di luar area sekolah ({proximity.distance_label} dari titik presensi)."
            )
        return proximity

    def history(self, user_id: int, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Newest first. ``limit`` defaults to the configured history size and is capped."""

        if limit is None:
            limit = self._history_limit
        elif int(limit) < 1:
            raise ValidationError("Limit minimal 1")
        return self._attendance.get_recent_for_user(int(user_id), min(int(limit), DEFAULT_ADMIN_LIST_LIMIT))

    def today_types(self, user_id: int) -> Set[AttendanceType]:
        return self._attendance.types_today(int(user_id))

    def list_admin(self, limit: int = DEFAULT_ADMIN_LIST_LIMIT) -> Sequence[AttendanceListRow]:
        return self._attendance.list_admin(int(limit))

    def export_csv_rows(self, rows: Optional[Iterable[AttendanceListRow]] = None) -> list[dict[str, Any]]:
        """Flatten admin rows for CSV (selfie blobs are left out)."""

        if rows is None:
            rows = self.list_admin()
        return [
            {
                "timestamp": format_timestamp(r.timestamp),
                "user_id": r.user_id,
                "user_name": r.user_name,
                "type": r.type.value,
                "latitude": r.latitude,
                "longitude": r.longitude,
                "address": r.address or "",
            }
            for r in rows
        ]
