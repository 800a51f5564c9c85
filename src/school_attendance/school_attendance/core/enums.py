from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    TEACHER = "guru"
    EMPLOYEE = "pegawai"


class AttendanceType(str, Enum):
    """Attendance action: check-in (masuk) or check-out (pulang)."""

    CHECK_IN = "in"
    CHECK_OUT = "out"


class PermissionType(str, Enum):
    SICK = "sakit"
    LEAVE = "izin"


class PermissionStatus(str, Enum):
    """Approval workflow status of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
