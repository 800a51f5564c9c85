from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_str, require_choice, require_non_empty
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT
from ..core.enums import PermissionStatus, PermissionType
from ..core.exceptions import ValidationError
from .model import PermissionListRow
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class PermissionService:
    """Use case: staff ask for sick/leave days, admins decide."""

    def __init__(self, permissions: PermissionRepository):
        self._permissions = permissions

    def submit(self, *, user_id: int, type: Any, reason: Optional[str], file_url: Optional[str] = None) -> int:
        p_type = require_choice(type, PermissionType, "Jenis izin")
        reason = require_non_empty(reason, "Alasan")

        request_id = self._permissions.create(
            user_id=int(user_id),
            type=p_type,
            reason=reason,
            file_url=optional_str(file_url),
        )
        logger.info("Permission request %s (%s) submitted by user %s", request_id, p_type.value, user_id)
        return request_id

    def approve(self, *, admin_user_id: int, request_id: int, admin_note: str = "") -> None:
        self._decide(admin_user_id, request_id, PermissionStatus.APPROVED, admin_note)

    def reject(self, *, admin_user_id: int, request_id: int, admin_note: str = "") -> None:
        self._decide(admin_user_id, request_id, PermissionStatus.REJECTED, admin_note)

    def _decide(self, admin_user_id: int, request_id: int, status: PermissionStatus, admin_note: str) -> None:
        req = self._permissions.get(request_id=int(request_id))
        if not req:
            raise ValidationError("Pengajuan izin tidak ditemukan")
        if req.status != PermissionStatus.PENDING:
            raise ValidationError("Pengajuan izin sudah diproses")

        decided = self._permissions.decide(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_user_id),
            admin_note=optional_str(admin_note),
        )
        if not decided:
            raise ValidationError("Pengajuan izin sudah diproses")
        logger.info("Permission request %s %s by admin %s", request_id, status.value, admin_user_id)

    def list_admin(
        self,
        status: Optional[Any] = None,
        limit: int = DEFAULT_ADMIN_LIST_LIMIT,
    ) -> Sequence[PermissionListRow]:
        p_status = require_choice(status, PermissionStatus, "Status") if status else None
        return self._permissions.list_rows(status=p_status, limit=int(limit))

    def list_for_user(self, user_id: int, limit: int = DEFAULT_ADMIN_LIST_LIMIT) -> Sequence[PermissionListRow]:
        return self._permissions.list_rows(user_id=int(user_id), limit=int(limit))

    def count_pending(self) -> int:
        return self._permissions.count_pending()
