from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, request

from ..common.web import (
    admin_required,
    current_user_id,
    handles_domain_errors,
    json_body,
    login_required,
    ok,
)
from ..container import Container
from .service import CSV_FIELDS


def register(app: Flask, container: Container) -> None:
    def _write_csv(rows: list[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        # BOM so spreadsheet apps pick up UTF-8 names
        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_submit")
    @login_required
    @handles_domain_errors("mengirim absensi")
    def attendance_submit():
        submission = container.attendance_service.parse_submission(current_user_id(), json_body())
        attendance_id = container.attendance_service.submit(submission)
        return ok(id=attendance_id, message="Absensi berhasil dikirim!")

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    @handles_domain_errors("memuat riwayat absensi")
    def attendance_history():
        limit = request.args.get("limit", type=int)
        return ok(container.attendance_service.history(current_user_id(), limit))

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @handles_domain_errors("memuat absensi hari ini")
    def attendance_today():
        done = container.attendance_service.today_types(current_user_id())
        return ok(sorted(t.value for t in done))

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    @handles_domain_errors("memuat data absensi")
    def admin_attendance():
        return ok(container.attendance_service.list_admin())

    @app.route("/api/admin/attendance.csv", methods=["GET"], endpoint="admin_attendance_csv")
    @admin_required
    @handles_domain_errors("mengekspor absensi")
    def admin_attendance_csv():
        rows = container.attendance_service.export_csv_rows()
        filename = f"attendance_{date.today().strftime('%Y%m%d')}.csv"
        return _write_csv(rows, filename)
