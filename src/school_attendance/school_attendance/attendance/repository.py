from __future__ import annotations

from typing import Optional, Protocol, Sequence, Set

from ..core.enums import AttendanceType
from .model import AttendanceListRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def create_if_absent(
        self,
        *,
        user_id: int,
        type: AttendanceType,
        latitude: float,
        longitude: float,
        address: Optional[str],
        selfie: str,
    ) -> Optional[int]:
        """Insert stamped with the storage's current time and date.

        Returns None when (user, type, today) already exists. Must be a single
        atomic step backed by a uniqueness constraint, not read-then-write.
        """

        raise NotImplementedError

    def types_today(self, user_id: int) -> Set[AttendanceType]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_admin(self, limit: int) -> Sequence[AttendanceListRow]:
        raise NotImplementedError

    def count_users_today(self) -> int:
        raise NotImplementedError
