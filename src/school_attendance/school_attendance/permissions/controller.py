from __future__ import annotations

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


def register(app: Flask, container: Container) -> None:
    @app.route("/api/permissions", methods=["POST"], endpoint="permissions_submit")
    @login_required
    @handles_domain_errors("mengirim izin")
    def permissions_submit():
        data = json_body()
        request_id = container.permission_service.submit(
            user_id=current_user_id(),
            type=data.get("type"),
            reason=data.get("reason"),
            file_url=data.get("fileUrl"),
        )
        return ok(id=request_id, message="Pengajuan izin berhasil dikirim")

    @app.route("/api/permissions", methods=["GET"], endpoint="permissions_mine")
    @login_required
    @handles_domain_errors("memuat izin")
    def permissions_mine():
        return ok(container.permission_service.list_for_user(current_user_id()))

    @app.route("/api/admin/permissions", methods=["GET"], endpoint="admin_permissions")
    @admin_required
    @handles_domain_errors("memuat izin")
    def admin_permissions():
        return ok(container.permission_service.list_admin(status=request.args.get("status") or None))

    @app.route("/api/admin/permissions/<int:request_id>/approve", methods=["POST"], endpoint="admin_permissions_approve")
    @admin_required
    @handles_domain_errors("menyetujui izin")
    def admin_permissions_approve(request_id: int):
        container.permission_service.approve(
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_note=json_body().get("note", ""),
        )
        return ok()

    @app.route("/api/admin/permissions/<int:request_id>/reject", methods=["POST"], endpoint="admin_permissions_reject")
    @admin_required
    @handles_domain_errors("menolak izin")
    def admin_permissions_reject(request_id: int):
        container.permission_service.reject(
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_note=json_body().get("note", ""),
        )
        return ok()
