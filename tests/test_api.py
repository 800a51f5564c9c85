from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest
from werkzeug.security import generate_password_hash

from src.school_attendance.school_attendance.academics.model import SchoolClass, Subject
from src.school_attendance.school_attendance.academics.service import AcademicService
from src.school_attendance.school_attendance.attendance.model import AttendanceListRow
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.container import Container
from src.school_attendance.school_attendance.core.enums import PermissionStatus, Role
from src.school_attendance.school_attendance.dashboard.service import StatsService
from src.school_attendance.school_attendance.geofence.model import Coordinate, GeoZone
from src.school_attendance.school_attendance.geofence.service import GeoZoneService
from src.school_attendance.school_attendance.journals.model import JournalListRow
from src.school_attendance.school_attendance.journals.service import JournalService
from src.school_attendance.school_attendance.main import create_app
from src.school_attendance.school_attendance.permissions.model import PermissionListRow, PermissionRequest
from src.school_attendance.school_attendance.permissions.service import PermissionService
from src.school_attendance.school_attendance.users.model import User
from src.school_attendance.school_attendance.users.service import AuthService, UserService

NOW = datetime(2026, 3, 2, 7, 15, 0)


class Users:
    def __init__(self):
        self.by_id = {
            1: User(1, "admin", generate_password_hash("admin123"), "Administrator", Role.ADMIN),
            2: User(2, "guru", generate_password_hash("guru123"), "Guru Contoh", Role.TEACHER, "1980"),
        }

    def get_by_id(self, user_id):
        return self.by_id.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self.by_id.values() if u.username == username), None)

    def list_all(self):
        return list(self.by_id.values())

    def create_user(self, *, username, password_hash, name, role, nip, class_id):
        uid = max(self.by_id) + 1
        self.by_id[uid] = User(uid, username, password_hash, name, role, nip, class_id)
        return uid

    def update_user(self, *, user_id, username, name, role, nip, password_hash=None):
        old = self.by_id[int(user_id)]
        self.by_id[int(user_id)] = replace(
            old, username=username, name=name, role=role, nip=nip, password_hash=password_hash or old.password_hash
        )
        return True

    def delete_by_id(self, user_id):
        return self.by_id.pop(int(user_id), None) is not None

    def count(self):
        return len(self.by_id)


class Zones:
    def __init__(self):
        self.items = {1: GeoZone(1, "Sekolah", Coordinate(-6.2000, 106.8166), 100)}

    def list_all(self):
        return list(self.items.values())

    def get_by_id(self, zone_id):
        return self.items.get(int(zone_id))

    def create(self, *, name, latitude, longitude, radius_m):
        zid = max(self.items, default=0) + 1
        self.items[zid] = GeoZone(zid, name, Coordinate(latitude, longitude), radius_m)
        return zid

    def delete_by_id(self, zone_id):
        return self.items.pop(int(zone_id), None) is not None


class Attendance:
    def __init__(self, users):
        self._users = users
        self.rows: list[AttendanceListRow] = []
        self.keys: set = set()

    def create_if_absent(self, *, user_id, type, latitude, longitude, address, selfie):
        key = (user_id, type, date.today())
        if key in self.keys:
            return None
        self.keys.add(key)
        self.rows.append(
            AttendanceListRow(
                attendance_id=len(self.rows) + 1,
                user_id=user_id,
                user_name=self._users.get_by_id(user_id).name,
                type=type,
                timestamp=NOW,
                latitude=latitude,
                longitude=longitude,
                address=address,
                selfie=selfie,
            )
        )
        return len(self.rows)

    def types_today(self, user_id):
        return {t for (u, t, _) in self.keys if u == user_id}

    def get_recent_for_user(self, user_id, limit):
        return [r for r in reversed(self.rows) if r.user_id == user_id][:limit]

    def list_admin(self, limit):
        return list(reversed(self.rows))[:limit]

    def count_users_today(self):
        return len({u for (u, _, _) in self.keys})


class Named:
    def __init__(self, items):
        self.items = list(items)

    def list_all(self):
        return list(self.items)

    def create(self, name):
        if any(i.name == name for i in self.items):
            return None
        self.items.append(type(self.items[0])(len(self.items) + 1, name))
        return len(self.items)


class Journals:
    def __init__(self):
        self.rows = []

    def create(self, *, user_id, class_id, subject_id, content, selfie, latitude, longitude):
        self.rows.append(JournalListRow(len(self.rows) + 1, user_id, "Guru Contoh", "X IPA 1", "Fisika", content, NOW))
        return len(self.rows)

    def list_rows(self, *, user_id=None, limit=1000):
        return [r for r in self.rows if user_id is None or r.user_id == user_id][:limit]


class Permissions:
    def __init__(self):
        self.items: dict[int, PermissionRequest] = {}

    def create(self, *, user_id, type, reason, file_url):
        rid = len(self.items) + 1
        self.items[rid] = PermissionRequest(rid, user_id, type, reason, PermissionStatus.PENDING, NOW, file_url)
        return rid

    def get(self, *, request_id):
        return self.items.get(int(request_id))

    def decide(self, *, request_id, status, decided_by, admin_note=None):
        req = self.items[int(request_id)]
        if req.status != PermissionStatus.PENDING:
            return False
        self.items[int(request_id)] = replace(req, status=status, decided_by=decided_by, admin_note=admin_note)
        return True

    def list_rows(self, *, status=None, user_id=None, limit=1000):
        return [
            PermissionListRow(r.request_id, r.user_id, "Guru Contoh", r.type, r.reason, r.status, r.timestamp)
            for r in self.items.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ][:limit]

    def count_pending(self):
        return sum(1 for r in self.items.values() if r.status == PermissionStatus.PENDING)


def _container() -> Container:
    users = Users()
    zones = Zones()
    attendance = Attendance(users)
    classes = Named([SchoolClass(1, "X IPA 1")])
    subjects = Named([Subject(1, "Fisika")])
    journals = Journals()
    permissions = Permissions()
    return Container(
        conn=None,
        users_repo=users,
        zones_repo=zones,
        attendance_repo=attendance,
        classes_repo=classes,
        subjects_repo=subjects,
        journals_repo=journals,
        permissions_repo=permissions,
        auth_service=AuthService(users),
        user_service=UserService(users),
        geozone_service=GeoZoneService(zones),
        attendance_service=AttendanceService(attendance, zones),
        academic_service=AcademicService(classes, subjects),
        journal_service=JournalService(journals, classes, subjects, zones),
        permission_service=PermissionService(permissions),
        stats_service=StatsService(users, attendance, permissions),
    )


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=_container())
    return app.test_client()


def _login(client, username="guru", password="guru123"):
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return resp


INSIDE = {"latitude": -6.2005, "longitude": 106.8166}
OUTSIDE = {"latitude": -6.2020, "longitude": 106.8166}


def test_login_and_me(client):
    body = _login(client).get_json()
    assert body["success"] is True
    assert body["user"]["role"] == "guru"

    me = client.get("/api/me").get_json()
    assert me["user"]["username"] == "guru"
    assert "password_hash" not in me["user"]


def test_bad_login(client):
    resp = client.post("/api/login", json={"username": "guru", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Username atau password salah"}


def test_requires_login(client):
    assert client.get("/api/attendance/history").status_code == 401
    assert client.post("/api/attendance", json={}).status_code == 401


def test_admin_routes_reject_non_admin(client):
    _login(client)
    assert client.get("/api/admin/users").status_code == 403
    assert client.get("/api/admin/attendance.csv").status_code == 403


def test_check_in_flow(client):
    _login(client)

    check = client.post("/api/geolocations/check", json=INSIDE).get_json()["data"]
    assert check["withinAnyZone"] is True
    assert check["distanceLabel"] == "56m"

    resp = client.post("/api/attendance", json={"type": "in", "selfie": "data:image/jpeg;base64,xx", **INSIDE})
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Absensi berhasil dikirim!"

    again = client.post("/api/attendance", json={"type": "in", "selfie": "blob", **INSIDE})
    assert again.status_code == 409
    assert again.get_json()["message"] == "Anda sudah melakukan absen masuk hari ini."

    history = client.get("/api/attendance/history").get_json()["data"]
    assert len(history) == 1
    assert history[0]["type"] == "in"
    assert history[0]["timestamp"]

    assert client.get("/api/attendance/today").get_json()["data"] == ["in"]


def test_check_in_outside_zone_is_forbidden(client):
    _login(client)
    resp = client.post("/api/attendance", json={"type": "out", "selfie": "blob", **OUTSIDE})
    assert resp.status_code == 403
    assert resp.get_json()["success"] is False


def test_check_in_missing_fields(client):
    _login(client)
    resp = client.post("/api/attendance", json={"type": "in", **INSIDE})
    assert resp.status_code == 400


def test_admin_zone_management_and_csv(client):
    _login(client)
    client.post("/api/attendance", json={"type": "in", "selfie": "blob", **INSIDE})
    client.post("/api/logout")

    _login(client, "admin", "admin123")
    created = client.post(
        "/api/admin/geolocations", json={"name": "Lapangan", "latitude": -6.21, "longitude": 106.82, "radius": 200}
    )
    assert created.status_code == 200
    zone_id = created.get_json()["id"]
    assert len(client.get("/api/admin/geolocations").get_json()["data"]) == 2
    assert client.delete(f"/api/admin/geolocations/{zone_id}").status_code == 200
    assert client.delete(f"/api/admin/geolocations/{zone_id}").status_code == 400

    resp = client.get("/api/admin/attendance.csv")
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0] == "timestamp,user_id,user_name,type,latitude,longitude,address"
    assert "Guru Contoh" in text
    assert "base64" not in text


def test_admin_user_crud(client):
    _login(client, "admin", "admin123")

    created = client.post(
        "/api/admin/users", json={"username": "budi", "password": "rahasia", "name": "Budi", "role": "pegawai"}
    )
    uid = created.get_json()["id"]
    assert client.put(f"/api/admin/users/{uid}", json={"username": "budi", "name": "Budi S", "role": "pegawai"}).status_code == 200
    assert client.delete("/api/admin/users/1").status_code == 403
    assert client.delete(f"/api/admin/users/{uid}").status_code == 200
    assert [u["username"] for u in client.get("/api/admin/users").get_json()["data"]] == ["admin", "guru"]


def test_journal_and_permission_flow(client):
    _login(client)
    journal = client.post(
        "/api/journals", json={"classId": 1, "subjectId": 1, "content": "Hukum Newton", **OUTSIDE}
    ).get_json()
    assert journal["success"] is True
    assert journal["withinAnyZone"] is False

    assert client.post("/api/journals", json={"classId": 1, "content": "x"}).status_code == 400
    assert len(client.get("/api/journals").get_json()["data"]) == 1

    rid = client.post("/api/permissions", json={"type": "sakit", "reason": "Demam"}).get_json()["id"]
    assert client.get("/api/stats").get_json()["data"]["pendingPermissions"] == 1
    client.post("/api/logout")

    _login(client, "admin", "admin123")
    assert client.post(f"/api/admin/permissions/{rid}/approve", json={"note": "Lekas sembuh"}).status_code == 200
    assert client.post(f"/api/admin/permissions/{rid}/reject").status_code == 400

    rows = client.get("/api/admin/permissions").get_json()["data"]
    assert rows[0]["status"] == "approved"

    stats = client.get("/api/stats").get_json()["data"]
    assert stats == {"totalUsers": 2, "todayAttendance": 0, "pendingPermissions": 0}
    assert len(client.get("/api/admin/journals").get_json()["data"]) == 1


def test_history_limit_must_be_positive(client):
    _login(client)
    client.post("/api/attendance", json={"type": "in", "selfie": "blob", **INSIDE})
    client.post("/api/attendance", json={"type": "out", "selfie": "blob", **INSIDE})

    resp = client.get("/api/attendance/history?limit=-1")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert len(client.get("/api/attendance/history?limit=5").get_json()["data"]) == 2


def test_login_with_numeric_username_is_rejected_not_crashed(client):
    resp = client.post("/api/login", json={"username": 5, "password": 5})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_bad_class_id_on_user_create(client):
    _login(client, "admin", "admin123")
    resp = client.post(
        "/api/admin/users",
        json={"username": "andi", "password": "rahasia", "name": "Andi", "role": "pegawai", "classId": "X-IPA"},
    )
    assert resp.status_code == 400


def _broken(*args, **kwargs):
    raise RuntimeError("db down")


@pytest.mark.parametrize(
    "repo_attr,method,path",
    [
        ("zones_repo", "list_all", "/api/geolocations"),
        ("zones_repo", "list_all", "/api/admin/geolocations"),
        ("attendance_repo", "get_recent_for_user", "/api/attendance/history"),
        ("attendance_repo", "types_today", "/api/attendance/today"),
        ("attendance_repo", "list_admin", "/api/admin/attendance"),
        ("attendance_repo", "list_admin", "/api/admin/attendance.csv"),
        ("users_repo", "list_all", "/api/admin/users"),
        ("journals_repo", "list_rows", "/api/journals"),
        ("journals_repo", "list_rows", "/api/admin/journals"),
        ("classes_repo", "list_all", "/api/admin/classes"),
        ("subjects_repo", "list_all", "/api/subjects"),
        ("permissions_repo", "list_rows", "/api/permissions"),
        ("permissions_repo", "list_rows", "/api/admin/permissions"),
    ],
)
def test_storage_failure_on_reads_returns_json_500(monkeypatch, repo_attr, method, path):
    monkeypatch.setenv("APP_ENV", "testing")
    container = _container()
    client = create_app(container=container).test_client()
    _login(client, "admin", "admin123")
    monkeypatch.setattr(getattr(container, repo_attr), method, _broken)

    resp = client.get(path)

    assert resp.status_code == 500
    assert resp.mimetype == "application/json"
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"].startswith("Kesalahan sistem saat ")
