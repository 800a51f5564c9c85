from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..academics.repository import ClassRepository, SubjectRepository
from ..common.validators import optional_float, optional_str
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT
from ..core.exceptions import ValidationError
from ..geofence.evaluator import evaluate
from ..geofence.model import UNKNOWN_PROXIMITY, Coordinate, ProximityResult
from ..geofence.repository import GeoZoneRepository
from .model import JournalListRow
from .repository import JournalRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalReceipt:
    journal_id: int
    proximity: ProximityResult


class JournalService:
    """Use case: teachers record what they taught.

    Journals are not blocked by the geofence; the recorded location's
    proximity is only reported back so the client can warn.
    """

    def __init__(
        self,
        journals: JournalRepository,
        classes: ClassRepository,
        subjects: SubjectRepository,
        zones: GeoZoneRepository,
    ):
        self._journals = journals
        self._classes = classes
        self._subjects = subjects
        self._zones = zones

    def submit(
        self,
        *,
        user_id: int,
        class_id: Any,
        subject_id: Any,
        content: Optional[str],
        selfie: Optional[str] = None,
        latitude: Any = None,
        longitude: Any = None,
    ) -> JournalReceipt:
        content = optional_str(content) or ""
        if not class_id or not subject_id or not content:
            raise ValidationError("Lengkapi semua data jurnal")

        try:
            class_id = int(class_id)
            subject_id = int(subject_id)
        except (TypeError, ValueError):
            raise ValidationError("Kelas atau mata pelajaran tidak valid")

        if class_id not in {c.class_id for c in self._classes.list_all()}:
            raise ValidationError("Kelas tidak ditemukan")
        if subject_id not in {s.subject_id for s in self._subjects.list_all()}:
            raise ValidationError("Mata pelajaran tidak ditemukan")

        lat = optional_float(latitude, "Latitude")
        lng = optional_float(longitude, "Longitude")
        proximity = UNKNOWN_PROXIMITY
        if lat is not None and lng is not None:
            proximity = evaluate(Coordinate(latitude=lat, longitude=lng), self._zones.list_all())

        journal_id = self._journals.create(
            user_id=int(user_id),
            class_id=class_id,
            subject_id=subject_id,
            content=content,
            selfie=selfie or None,
            latitude=lat,
            longitude=lng,
        )
        if not proximity.within_any_zone:
            logger.info("Journal %s by user %s recorded outside the school area (%s)", journal_id, user_id, proximity.distance_label)
        return JournalReceipt(journal_id=journal_id, proximity=proximity)

    def list_admin(self, limit: int = DEFAULT_ADMIN_LIST_LIMIT) -> Sequence[JournalListRow]:
        return self._journals.list_rows(limit=int(limit))

    def list_for_user(self, user_id: int, limit: int = DEFAULT_ADMIN_LIST_LIMIT) -> Sequence[JournalListRow]:
        return self._journals.list_rows(user_id=int(user_id), limit=int(limit))
