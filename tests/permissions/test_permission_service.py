from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.school_attendance.school_attendance.core.enums import PermissionStatus, PermissionType
from src.school_attendance.school_attendance.core.exceptions import ValidationError
from src.school_attendance.school_attendance.permissions.model import PermissionListRow, PermissionRequest
from src.school_attendance.school_attendance.permissions.service import PermissionService


class FakePermissionsRepo:
    def __init__(self):
        self._next_id = 1
        self.items: dict[int, PermissionRequest] = {}

    def create(self, *, user_id, type, reason, file_url):
        rid = self._next_id
        self._next_id += 1
        self.items[rid] = PermissionRequest(
            request_id=rid,
            user_id=user_id,
            type=type,
            reason=reason,
            status=PermissionStatus.PENDING,
            timestamp=datetime(2026, 3, 2, 7, 0, 0),
            file_url=file_url,
        )
        return rid

    def get(self, *, request_id):
        return self.items.get(int(request_id))

    def decide(self, *, request_id, status, decided_by, admin_note=None):
        req = self.items.get(int(request_id))
        if not req or req.status != PermissionStatus.PENDING:
            return False
        self.items[int(request_id)] = replace(
            req,
            status=status,
            decided_by=decided_by,
            decided_at=datetime(2026, 3, 2, 9, 0, 0),
            admin_note=admin_note,
        )
        return True

    def list_rows(self, *, status=None, user_id=None, limit=1000):
        rows = [
            PermissionListRow(
                request_id=r.request_id,
                user_id=r.user_id,
                user_name=f"user{r.user_id}",
                type=r.type,
                reason=r.reason,
                status=r.status,
                timestamp=r.timestamp,
                file_url=r.file_url,
                admin_note=r.admin_note,
            )
            for r in self.items.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ]
        return rows[:limit]

    def count_pending(self):
        return sum(1 for r in self.items.values() if r.status == PermissionStatus.PENDING)


def test_submit_starts_pending():
    repo = FakePermissionsRepo()
    rid = PermissionService(repo).submit(user_id=3, type="sakit", reason=" Demam ", file_url="")

    req = repo.get(request_id=rid)
    assert req.status == PermissionStatus.PENDING
    assert req.type == PermissionType.SICK
    assert req.reason == "Demam"
    assert req.file_url is None


@pytest.mark.parametrize("type,reason", [("cuti", "Liburan"), ("izin", ""), (None, "x")])
def test_submit_validation(type, reason):
    with pytest.raises(ValidationError):
        PermissionService(FakePermissionsRepo()).submit(user_id=3, type=type, reason=reason)


def test_approve_then_cannot_reject():
    repo = FakePermissionsRepo()
    svc = PermissionService(repo)
    rid = svc.submit(user_id=3, type="izin", reason="Acara keluarga")

    svc.approve(admin_user_id=1, request_id=rid, admin_note=" ok ")

    req = repo.get(request_id=rid)
    assert req.status == PermissionStatus.APPROVED
    assert req.decided_by == 1
    assert req.admin_note == "ok"

    with pytest.raises(ValidationError):
        svc.reject(admin_user_id=1, request_id=rid)


def test_reject_unknown_request():
    with pytest.raises(ValidationError):
        PermissionService(FakePermissionsRepo()).reject(admin_user_id=1, request_id=99)


def test_lists_and_pending_count():
    repo = FakePermissionsRepo()
    svc = PermissionService(repo)
    a = svc.submit(user_id=3, type="izin", reason="a")
    svc.submit(user_id=4, type="sakit", reason="b")
    svc.reject(admin_user_id=1, request_id=a)

    assert svc.count_pending() == 1
    assert [r.user_id for r in svc.list_for_user(4)] == [4]
    assert [r.request_id for r in svc.list_admin(status="rejected")] == [a]
    assert len(svc.list_admin()) == 2
    with pytest.raises(ValidationError):
        svc.list_admin(status="unknown")


def test_decision_lost_to_concurrent_update():
    class RacingRepo(FakePermissionsRepo):
        def decide(self, **kwargs):
            return False

    repo = RacingRepo()
    svc = PermissionService(repo)
    rid = svc.submit(user_id=3, type="izin", reason="Rapat")

    with pytest.raises(ValidationError):
        svc.approve(admin_user_id=1, request_id=rid)
    assert repo.get(request_id=rid).status == PermissionStatus.PENDING
