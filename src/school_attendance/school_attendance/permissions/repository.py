from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PermissionStatus, PermissionType
from .model import PermissionListRow, PermissionRequest


class PermissionRepository(Protocol):
    def create(self, *, user_id: int, type: PermissionType, reason: str, file_url: Optional[str]) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[PermissionRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: PermissionStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Only a PENDING request transitions.

        Returns False otherwise, including when a concurrent decision already moved it.
        """

        raise NotImplementedError

    def list_rows(
        self,
        *,
        status: Optional[PermissionStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 1000,
    ) -> Sequence[PermissionListRow]:
        raise NotImplementedError

    def count_pending(self) -> int:
        raise NotImplementedError
