from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def total_counts(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                  (SELECT COUNT(*) FROM divisions) AS divisions,
                  (SELECT COUNT(*) FROM sections) AS sections,
                  (SELECT COUNT(*) FROM subsections) AS sub_sections,
                  (SELECT COUNT(*) FROM employees_sync WHERE emp_status='ACTIVE') AS active_employees
                """
            )
            row = fetchone(cur) or {}
            return {
                "divisions": int(row.get("divisions") or 0),
                "sections": int(row.get("sections") or 0),
                "subSections": int(row.get("sub_sections") or 0),
                "activeEmployees": int(row.get("active_employees") or 0),
            }
