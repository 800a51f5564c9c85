from __future__ import annotations

from dataclasses import dataclass

from ..attendance.repository import AttendanceRepository
from ..permissions.repository import PermissionRepository
from ..users.repository import UserRepository


@dataclass(frozen=True)
class DashboardStats:
    total_users: int
    today_attendance: int
    pending_permissions: int


class StatsService:
    """Headline numbers for the admin dashboard."""

    def __init__(self, users: UserRepository, attendance: AttendanceRepository, permissions: PermissionRepository):
        self._users = users
        self._attendance = attendance
        self._permissions = permissions

    def summary(self) -> DashboardStats:
        return DashboardStats(
            total_users=self._users.count(),
            # distinct users, so a check-in plus check-out counts once
            today_attendance=self._attendance.count_users_today(),
            pending_permissions=self._permissions.count_pending(),
        )
