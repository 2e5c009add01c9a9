from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """An account that can sign into the admin API."""

    user_id: int
    email: str
    full_name: str
    password_hash: str
    role: Role
    employee_id: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.full_name,
            "role": self.role.value,
            "employeeId": self.employee_id,
            "isActive": self.is_active,
        }
