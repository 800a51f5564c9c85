from __future__ import annotations

from flask import Flask

from ..common.web import (
    admin_required,
    current_user_id,
    handles_domain_errors,
    json_body,
    login_required,
    ok,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/journals", methods=["POST"], endpoint="journals_submit")
    @login_required
    @handles_domain_errors("menyimpan jurnal")
    def journals_submit():
        data = json_body()
        receipt = container.journal_service.submit(
            user_id=current_user_id(),
            class_id=data.get("classId"),
            subject_id=data.get("subjectId"),
            content=data.get("content"),
            selfie=data.get("selfie"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return ok(
            id=receipt.journal_id,
            withinAnyZone=receipt.proximity.within_any_zone,
            distance=receipt.proximity.nearest_distance_m,
            message="Jurnal berhasil disimpan!",
        )

    @app.route("/api/journals", methods=["GET"], endpoint="journals_mine")
    @login_required
    @handles_domain_errors("memuat jurnal")
    def journals_mine():
        return ok(container.journal_service.list_for_user(current_user_id()))

    @app.route("/api/admin/journals", methods=["GET"], endpoint="admin_journals")
    @admin_required
    @handles_domain_errors("memuat jurnal")
    def admin_journals():
        return ok(container.journal_service.list_admin())
