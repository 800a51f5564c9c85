from __future__ import annotations

from flask import Flask

from ..common.web import handles_domain_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats", methods=["GET"], endpoint="stats")
    @login_required
    @handles_domain_errors("memuat statistik")
    def stats():
        s = container.stats_service.summary()
        return ok(
            {
                "totalUsers": s.total_users,
                "todayAttendance": s.today_attendance,
                "pendingPermissions": s.pending_permissions,
            }
        )
