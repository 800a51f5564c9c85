from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PermissionStatus, PermissionType


@dataclass(frozen=True)
class PermissionRequest:
    request_id: int
    user_id: int
    type: PermissionType
    reason: str
    status: PermissionStatus
    timestamp: datetime
    file_url: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None


@dataclass(frozen=True)
class PermissionListRow:
    request_id: int
    user_id: int
    user_name: str
    type: PermissionType
    reason: str
    status: PermissionStatus
    timestamp: datetime
    file_url: Optional[str] = None
    admin_note: Optional[str] = None
