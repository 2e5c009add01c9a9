from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..audit.service import ActivityLogService
from ..common.validators import require_non_empty
from ..core.enums import ActivityType, Role
from ..core.exceptions import AuthenticationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    full_name: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "name": self.full_name, "role": self.role.value}


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, activity: Optional[ActivityLogService] = None):
        self._users = users
        self._activity = activity

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        password = require_non_empty(password, "Password")

        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        if self._activity:
            self._activity.log_activity(
                activity_type=ActivityType.USER_LOGIN,
                title="User login",
                description=f"{user.full_name} signed in",
                entity_type="User",
                entity_id=user.user_id,
                actor={"user_id": user.user_id, "user_name": user.full_name, "role": user.role.value},
            )

        return SessionUser(user_id=user.user_id, email=user.email, full_name=user.full_name, role=user.role)

    def current_user(self, user_id: int) -> Optional[SessionUser]:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            return None
        return SessionUser(user_id=user.user_id, email=user.email, full_name=user.full_name, role=user.role)


class UserService:
    """Read-only user listing for admins."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> list[dict]:
        return [u.to_dict() for u in self._users.list_all()]

    def count_active(self) -> int:
        return self._users.count_active()
