from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import session

from ..core.enums import Role
from .responses import fail


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def current_actor() -> dict:
    """Who is acting, for audit entries."""
    return {
        "user_id": session.get("user_id"),
        "user_name": session.get("name") or "system",
        "role": session.get("role"),
    }


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Not authenticated", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Not authenticated", 401)
            if session.get("role") not in allowed:
                return fail(f"Role {session.get('role')} is not authorized to access this resource", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
