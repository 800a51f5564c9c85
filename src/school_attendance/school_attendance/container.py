from __future__ import annotations

from dataclasses import dataclass

from .academics.mysql_academic_repository import MySQLClassRepository, MySQLSubjectRepository
from .academics.service import AcademicService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HISTORY_LIMIT
from .dashboard.service import StatsService
from .database.connection import DBConfig, DatabaseConnection
from .geofence.mysql_geozone_repository import MySQLGeoZoneRepository
from .geofence.service import GeoZoneService
from .journals.mysql_journal_repository import MySQLJournalRepository
from .journals.service import JournalService
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.service import PermissionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    zones_repo: MySQLGeoZoneRepository
    attendance_repo: MySQLAttendanceRepository
    classes_repo: MySQLClassRepository
    subjects_repo: MySQLSubjectRepository
    journals_repo: MySQLJournalRepository
    permissions_repo: MySQLPermissionRepository

    auth_service: AuthService
    user_service: UserService
    geozone_service: GeoZoneService
    attendance_service: AttendanceService
    academic_service: AcademicService
    journal_service: JournalService
    permission_service: PermissionService
    stats_service: StatsService


def build_container(
    *,
    db_config: dict,
    enforce_geofence: bool = True,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    zones_repo = MySQLGeoZoneRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    classes_repo = MySQLClassRepository(conn)
    subjects_repo = MySQLSubjectRepository(conn)
    journals_repo = MySQLJournalRepository(conn)
    permissions_repo = MySQLPermissionRepository(conn)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    geozone_service = GeoZoneService(zones_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        zones_repo,
        enforce_geofence=enforce_geofence,
        history_limit=history_limit,
    )
    academic_service = AcademicService(classes_repo, subjects_repo)
    journal_service = JournalService(journals_repo, classes_repo, subjects_repo, zones_repo)
    permission_service = PermissionService(permissions_repo)
    stats_service = StatsService(users_repo, attendance_repo, permissions_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        zones_repo=zones_repo,
        attendance_repo=attendance_repo,
        classes_repo=classes_repo,
        subjects_repo=subjects_repo,
        journals_repo=journals_repo,
        permissions_repo=permissions_repo,
        auth_service=auth_service,
        user_service=user_service,
        geozone_service=geozone_service,
        attendance_service=attendance_service,
        academic_service=academic_service,
        journal_service=journal_service,
        permission_service=permission_service,
        stats_service=stats_service,
    )
