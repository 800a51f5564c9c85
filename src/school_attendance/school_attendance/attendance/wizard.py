"""Check-in wizard: choose type -> verify location -> capture selfie -> submit.

Client-side flow only. The location gate here is advisory; the server
re-checks in ``AttendanceService``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from ..core.enums import AttendanceType
from ..core.exceptions import DomainError, ValidationError
from ..geofence.evaluator import evaluate
from ..geofence.model import UNKNOWN_PROXIMITY, Coordinate, GeoZone, ProximityResult
from .model import AttendanceSubmission

logger = logging.getLogger(__name__)


class WizardStep(str, Enum):
    CHOOSE_TYPE = "choose_type"
    VERIFY_LOCATION = "verify_location"
    CAPTURE_EVIDENCE = "capture_evidence"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class WizardMessage:
    text: str
    kind: str  # "success" | "error"
    retryable: bool = False


Sender = Callable[[AttendanceSubmission], object]


class CheckInWizard:
    def __init__(self, user_id: int, zones: Iterable[GeoZone]):
        self.user_id = int(user_id)
        self._zones = list(zones)
        self.step = WizardStep.CHOOSE_TYPE
        self.type: Optional[AttendanceType] = None
        self.location: Optional[Coordinate] = None
        self.proximity: ProximityResult = UNKNOWN_PROXIMITY
        self.evidence: Optional[str] = None
        self.message: Optional[WizardMessage] = None

    @property
    def can_proceed_to_evidence(self) -> bool:
        return self.step == WizardStep.VERIFY_LOCATION and self.proximity.within_any_zone

    def set_zones(self, zones: Iterable[GeoZone]) -> None:
        self._zones = list(zones)
        if self.location is not None:
            self.proximity = evaluate(self.location, self._zones)

    def update_location(self, point: Coordinate) -> ProximityResult:
        """Called on every fix from the location watch; the latest fix wins."""

        self.location = point
        self.proximity = evaluate(point, self._zones)
        return self.proximity

    def choose_type(self, type: AttendanceType) -> None:
        if self.step != WizardStep.CHOOSE_TYPE:
            raise ValidationError(f"Cannot choose type in step {self.step.value}")
        self.type = AttendanceType(type)
        self.step = WizardStep.VERIFY_LOCATION

    def proceed_to_evidence(self) -> bool:
        if self.step != WizardStep.VERIFY_LOCATION:
            return False
        if not self.proximity.within_any_zone:
            self.message = WizardMessage("Dekati area sekolah untuk melanjutkan", "error")
            return False
        self.step = WizardStep.CAPTURE_EVIDENCE
        return True

    def attach_evidence(self, blob: Optional[str]) -> None:
        if self.step != WizardStep.CAPTURE_EVIDENCE:
            raise ValidationError(f"Cannot attach evidence in step {self.step.value}")
        self.evidence = blob or None

    def submit(self, send: Sender) -> bool:
        """Send once. Any failure keeps the wizard in CAPTURE_EVIDENCE; no automatic retry."""

        if self.step != WizardStep.CAPTURE_EVIDENCE:
            return False
        if not self.evidence or self.location is None or self.type is None:
            self.message = WizardMessage("Ambil foto selfie terlebih dahulu", "error")
            return False

        submission = AttendanceSubmission(
            user_id=self.user_id,
            type=self.type,
            latitude=self.location.latitude,
            longitude=self.location.longitude,
            selfie=self.evidence,
        )
        try:
            send(submission)
        except DomainError as e:
            self.message = WizardMessage(str(e), "error")
            return False
        except (ConnectionError, TimeoutError, OSError):
            logger.warning("Attendance submission failed to reach the server", exc_info=True)
            self.message = WizardMessage("Gagal mengirim absensi", "error", retryable=True)
            return False

        self.step = WizardStep.SUBMITTED
        self.message = WizardMessage("Absensi berhasil dikirim!", "success")
        return True

    def back(self) -> None:
        if self.step == WizardStep.CAPTURE_EVIDENCE:
            self.evidence = None
            self.step = WizardStep.VERIFY_LOCATION
        elif self.step == WizardStep.VERIFY_LOCATION:
            self.type = None
            self.step = WizardStep.CHOOSE_TYPE

    def reset(self) -> None:
        self.step = WizardStep.CHOOSE_TYPE
        self.type = None
        self.evidence = None

    def dismiss_message(self) -> None:
        self.message = None
