from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, handles_domain_errors, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    # Read endpoints are open to any logged-in user: the journal form needs them.
    @app.route("/api/classes", methods=["GET"], endpoint="classes")
    @app.route("/api/admin/classes", methods=["GET"], endpoint="admin_classes")
    @login_required
    @handles_domain_errors("memuat kelas")
    def classes():
        return ok(container.academic_service.list_classes())

    @app.route("/api/admin/classes", methods=["POST"], endpoint="admin_classes_create")
    @admin_required
    @handles_domain_errors("menambah kelas")
    def admin_classes_create():
        class_id = container.academic_service.create_class(json_body().get("name", ""))
        return ok(id=class_id)

    @app.route("/api/subjects", methods=["GET"], endpoint="subjects")
    @app.route("/api/admin/subjects", methods=["GET"], endpoint="admin_subjects")
    @login_required
    @handles_domain_errors("memuat mata pelajaran")
    def subjects():
        return ok(container.academic_service.list_subjects())

    @app.route("/api/admin/subjects", methods=["POST"], endpoint="admin_subjects_create")
    @admin_required
    @handles_domain_errors("menambah mata pelajaran")
    def admin_subjects_create():
        subject_id = container.academic_service.create_subject(json_body().get("name", ""))
        return ok(id=subject_id)
