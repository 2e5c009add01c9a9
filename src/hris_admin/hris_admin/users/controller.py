from __future__ import annotations

from flask import Flask, request, session

from ..common.auth import login_required, roles_required
from ..common.responses import fail, ok
from ..core.enums import ADMIN_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/api/auth/login", endpoint="auth_login")
    def login():
        data = request.get_json(silent=True) or request.form
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["email"] = s_user.email
        session["role"] = s_user.role.value
        return ok(s_user.to_dict(), message="Login successful")

    @app.post("/api/auth/logout", endpoint="auth_logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.get("/api/auth/me", endpoint="auth_me")
    @login_required
    def me():
        s_user = container.auth_service.current_user(int(session["user_id"]))
        if not s_user:
            session.clear()
            return fail("Not authenticated", 401)
        return ok(s_user.to_dict())

    @app.get("/api/users", endpoint="users_list")
    @roles_required(*ADMIN_ROLES)
    def list_users():
        users = container.user_service.list_users()
        return ok(users, count=len(users))
