from __future__ import annotations

from flask import Flask, session

from ..common.web import (
    admin_required,
    current_user_id,
    fail,
    handles_domain_errors,
    json_body,
    login_required,
    ok,
)
from ..container import Container
from .model import UserView


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    @handles_domain_errors("login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        return ok(user=s_user)

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    @handles_domain_errors("memuat profil")
    def me():
        user = container.users_repo.get_by_id(current_user_id())
        if not user:
            session.clear()
            return fail("Sesi tidak valid, silakan login ulang", 401)
        return ok(user=UserView.of(user))

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    @handles_domain_errors("memuat pengguna")
    def admin_users():
        return ok(container.user_service.list_users())

    @app.route("/api/admin/users", methods=["POST"], endpoint="admin_users_create")
    @admin_required
    @handles_domain_errors("menambah pengguna")
    def admin_users_create():
        data = json_body()
        user_id = container.user_service.create_user(
            username=data.get("username", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            role=data.get("role"),
            nip=data.get("nip"),
            class_id=data.get("classId"),
        )
        return ok(id=user_id)

    @app.route("/api/admin/users/<int:user_id>", methods=["PUT"], endpoint="admin_users_update")
    @admin_required
    @handles_domain_errors("memperbarui pengguna")
    def admin_users_update(user_id: int):
        data = json_body()
        container.user_service.update_user(
            user_id=user_id,
            username=data.get("username", ""),
            name=data.get("name", ""),
            role=data.get("role"),
            nip=data.get("nip"),
            password=data.get("password") or None,
        )
        return ok()

    @app.route("/api/admin/users/<int:user_id>", methods=["DELETE"], endpoint="admin_users_delete")
    @admin_required
    @handles_domain_errors("menghapus pengguna")
    def admin_users_delete(user_id: int):
        container.user_service.delete_user(current_user_id=current_user_id(), user_id=user_id)
        return ok()
