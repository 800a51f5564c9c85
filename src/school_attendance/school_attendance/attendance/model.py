from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in or check-out. Written once, never updated."""

    attendance_id: int
    user_id: int
    type: AttendanceType
    timestamp: datetime
    work_date: date
    latitude: Optional[float]
    longitude: Optional[float]
    address: Optional[str] = None
    selfie: Optional[str] = None


@dataclass(frozen=True)
class AttendanceListRow:
    """Read-model for the admin list (joined with the user's name)."""

    attendance_id: int
    user_id: int
    user_name: str
    type: AttendanceType
    timestamp: datetime
    latitude: Optional[float]
    longitude: Optional[float]
    address: Optional[str] = None
    selfie: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSubmission:
    """What the check-in wizard sends to the server."""

    user_id: int
    type: AttendanceType
    latitude: float
    longitude: float
    selfie: str
    address: Optional[str] = None
