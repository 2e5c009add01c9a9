from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """An employee row mirrored from HRIS into employees_sync."""

    emp_no: str
    emp_name: str
    emp_name_with_initials: Optional[str] = None
    emp_designation: Optional[str] = None
    emp_email: Optional[str] = None
    emp_gender: Optional[str] = None
    emp_status: str = "ACTIVE"
    div_code: Optional[str] = None
    div_name: Optional[str] = None
    sec_code: Optional[str] = None
    sec_name: Optional[str] = None
    date_joined: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "empNo": self.emp_no,
            "name": self.emp_name,
            "nameWithInitials": self.emp_name_with_initials,
            "designation": self.emp_designation,
            "email": self.emp_email,
            "gender": self.emp_gender,
            "status": self.emp_status,
            "division": {"code": self.div_code, "name": self.div_name},
            "section": {"code": self.sec_code, "name": self.sec_name},
            "dateJoined": self.date_joined.isoformat() if self.date_joined else None,
        }


@dataclass(frozen=True)
class EmployeeFilter:
    search: Optional[str] = None
    division_code: Optional[str] = None
    section_code: Optional[str] = None
    designation: Optional[str] = None


@dataclass(frozen=True)
class SyncCounts:
    synced: int = 0
    failed: int = 0

    def to_dict(self) -> dict:
        return {"synced": self.synced, "failed": self.failed}
