from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    CLERK = "clerk"
    EMPLOYEE = "employee"


ADMIN_ROLES = (Role.SUPER_ADMIN, Role.ADMIN)


class ReportType(str, Enum):
    """Report tiers served by the ultra-fast report endpoints."""

    DIVISION = "division"
    SECTION = "section"
    EMPLOYEE = "employee"
    SUMMARY = "summary"


class AttendanceStatus(str, Enum):
    """Values of attendance_reports_optimized.attendance_status."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"


class ActivityType(str, Enum):
    USER_LOGIN = "user_login"
    DIVISION_CREATED = "division_created"
    DIVISION_UPDATED = "division_updated"
    DIVISION_DELETED = "division_deleted"
    SECTION_CREATED = "section_created"
    SECTION_UPDATED = "section_updated"
    SECTION_DELETED = "section_deleted"
    SUBSECTION_CREATED = "subsection_created"
    SUBSECTION_UPDATED = "subsection_updated"
    SUBSECTION_DELETED = "subsection_deleted"
    SUMMARY_REBUILT = "summary_rebuilt"
    HRIS_SYNCED = "hris_synced"
    CACHE_REFRESHED = "cache_refreshed"
