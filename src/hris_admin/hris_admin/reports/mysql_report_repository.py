from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import EmployeePage
from .repository import ReportRepository

DETAIL_TABLE = "attendance_reports_optimized"
SUMMARY_TABLE = "attendance_daily_summary"

# Present and absent are counted per distinct (employee, day), so
# present_count <= total_employees * working_days always holds.
_EMPLOYEE_DAY = "CONCAT(emp_id, '|', attendance_date)"
_GROUP_METRICS = f"""
    COUNT(DISTINCT emp_id) AS total_employees,
    COUNT(DISTINCT attendance_date) AS working_days,
    COUNT(*) AS total_scans,
    COUNT(DISTINCT {_EMPLOYEE_DAY}) AS employee_days,
    COUNT(DISTINCT CASE WHEN attendance_status = %s THEN {_EMPLOYEE_DAY} END) AS present_count
"""
_DERIVED_METRICS = """
    g.employee_days - g.present_count AS absent_count,
    ROUND(COALESCE(g.present_count / NULLIF(g.employee_days, 0), 0) * 100, 2) AS attendance_percentage
"""

CREATE_SUMMARY_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {SUMMARY_TABLE} (
  id INT AUTO_INCREMENT PRIMARY KEY,
  summary_date DATE NOT NULL,
  division_code VARCHAR(50) NOT NULL DEFAULT '',
  division_name VARCHAR(255),
  section_code VARCHAR(50) NOT NULL DEFAULT '',
  section_name VARCHAR(255),
  total_employees INT DEFAULT 0,
  total_present INT DEFAULT 0,
  total_absent INT DEFAULT 0,
  total_leave INT DEFAULT 0,
  attendance_percentage DECIMAL(5,2) DEFAULT 0,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
  UNIQUE KEY uniq_date_div_sec (summary_date, division_code, section_code),
  INDEX idx_date (summary_date),
  INDEX idx_division (division_code)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci
"""

POPULATE_SUMMARY_SQL = f"""
INSERT INTO {SUMMARY_TABLE}
  (summary_date, division_code, division_name, section_code, section_name,
   total_employees, total_present, total_absent, total_leave, attendance_percentage)
SELECT
  g.attendance_date, g.division_code, g.division_name, g.section_code, g.section_name,
  g.total_employees, g.total_present, g.total_employees - g.total_present, g.total_leave,
  ROUND(COALESCE(g.total_present / NULLIF(g.total_employees, 0), 0) * 100, 2)
FROM (
  SELECT
    attendance_date,
    COALESCE(division_code, '') AS division_code,
    MAX(division_name) AS division_name,
    COALESCE(section_code, '') AS section_code,
    MAX(section_name) AS section_name,
    COUNT(DISTINCT emp_id) AS total_employees,
    COUNT(DISTINCT CASE WHEN attendance_status = %s THEN emp_id END) AS total_present,
    COUNT(DISTINCT CASE WHEN attendance_status = %s THEN emp_id END) AS total_leave
  FROM {DETAIL_TABLE}
  GROUP BY attendance_date, COALESCE(division_code, ''), COALESCE(section_code, '')
) g
ON DUPLICATE KEY UPDATE
  division_name = VALUES(division_name),
  section_name = VALUES(section_name),
  total_employees = VALUES(total_employees),
  total_present = VALUES(total_present),
  total_absent = VALUES(total_absent),
  total_leave = VALUES(total_leave),
  attendance_percentage = VALUES(attendance_percentage)
"""


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() and value.as_tuple().exponent >= 0 else float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        total = int(value.total_seconds())
        return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"
    return value


def normalize_row(row: dict, *, floats: Sequence[str] = ("attendance_percentage",)) -> dict:
    out = {k: _jsonable(v) for k, v in row.items()}
    for key in floats:
        if key in out and out[key] is not None:
            out[key] = float(out[key])
    return out


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def division_report(self, *, start_date: date, end_date: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT g.*, {_DERIVED_METRICS}
                FROM (
                    SELECT division_code, division_name, {_GROUP_METRICS}
                    FROM {DETAIL_TABLE}
                    WHERE attendance_date BETWEEN %s AND %s
                    GROUP BY division_code, division_name
                ) g
                ORDER BY g.division_code
                """,
                (AttendanceStatus.PRESENT.value, start_date, end_date),
            )
            return [normalize_row(r) for r in fetchall(cur)]

    def section_report(self, *, division_code: str, start_date: date, end_date: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT g.*, {_DERIVED_METRICS}
                FROM (
                    SELECT section_code, section_name, {_GROUP_METRICS}
                    FROM {DETAIL_TABLE}
                    WHERE division_code = %s
                      AND attendance_date BETWEEN %s AND %s
                    GROUP BY section_code, section_name
                ) g
                ORDER BY g.section_code
                """,
                (AttendanceStatus.PRESENT.value, division_code, start_date, end_date),
            )
            return [normalize_row(r) for r in fetchall(cur)]

    def employee_report_page(
        self,
        *,
        division_code: str,
        section_code: str,
        start_date: date,
        end_date: date,
        page: int,
        page_size: int,
    ) -> EmployeePage:
        scope = (division_code, section_code, start_date, end_date)
        offset = (int(page) - 1) * int(page_size)

        with db_cursor(self._conn_factory) as (_, cur):
            # COUNT(*) OVER() runs before LIMIT, so each row carries the total in one round-trip.
            cur.execute(
                f"""
                SELECT
                    g.*,
                    g.working_days - g.present_days AS absent_days,
                    ROUND(COALESCE(g.present_days / NULLIF(g.working_days, 0), 0) * 100, 2) AS attendance_percentage,
                    COUNT(*) OVER() AS total_records
                FROM (
                    SELECT
                        emp_id,
                        MAX(emp_name) AS emp_name,
                        MAX(emp_designation) AS emp_designation,
                        COUNT(DISTINCT attendance_date) AS working_days,
                        COUNT(DISTINCT CASE WHEN attendance_status = %s THEN attendance_date END) AS present_days,
                        COUNT(*) AS total_scans
                    FROM {DETAIL_TABLE}
                    WHERE division_code = %s
                      AND section_code = %s
                      AND attendance_date BETWEEN %s AND %s
                    GROUP BY emp_id
                ) g
                ORDER BY g.emp_id
                LIMIT %s OFFSET %s
                """,
                (AttendanceStatus.PRESENT.value, *scope, int(page_size), offset),
            )
            rows = fetchall(cur)

            if rows:
                total = int(rows[0]["total_records"])
            else:
                cur.execute(
                    f"""
                    SELECT COUNT(DISTINCT emp_id) AS total
                    FROM {DETAIL_TABLE}
                    WHERE division_code = %s
                      AND section_code = %s
                      AND attendance_date BETWEEN %s AND %s
                    """,
                    scope,
                )
                total = int((fetchone(cur) or {}).get("total") or 0)

        data = []
        for r in rows:
            r = dict(r)
            r.pop("total_records", None)
            data.append(normalize_row(r))
        return EmployeePage(rows=data, total_records=total, page=int(page), page_size=int(page_size))

    def rebuild_daily_summary(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(CREATE_SUMMARY_TABLE_SQL)

        # Full rebuild: groups that vanished from the detail table must not survive.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {SUMMARY_TABLE}")
            cur.execute(POPULATE_SUMMARY_SQL, (AttendanceStatus.PRESENT.value, AttendanceStatus.LEAVE.value))
            cur.execute(f"SELECT COUNT(*) AS cnt FROM {SUMMARY_TABLE}")
            return int((fetchone(cur) or {}).get("cnt") or 0)

    def summary_report(
        self,
        *,
        start_date: date,
        end_date: date,
        division_code: Optional[str] = None,
        section_code: Optional[str] = None,
    ) -> Sequence[dict]:
        clauses = ["summary_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if division_code:
            clauses.append("division_code = %s")
            params.append(division_code)
        if section_code:
            clauses.append("section_code = %s")
            params.append(section_code)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    summary_date, division_code, division_name, section_code, section_name,
                    total_employees, total_present, total_absent, total_leave, attendance_percentage
                FROM {SUMMARY_TABLE}
                {build_where(clauses)}
                ORDER BY summary_date DESC, division_code, section_code
                """,
                tuple(params),
            )
            return [normalize_row(r) for r in fetchall(cur)]

    def attendance_trend(self, *, start_date: date, end_date: date) -> Sequence[dict]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT summary_date,
                           SUM(total_employees) AS total_employees,
                           SUM(total_present) AS total_present
                    FROM {SUMMARY_TABLE}
                    WHERE summary_date BETWEEN %s AND %s
                    GROUP BY summary_date
                    ORDER BY summary_date
                    """,
                    (start_date, end_date),
                )
                return [normalize_row(r, floats=()) for r in fetchall(cur)]
        except mysql.connector.ProgrammingError as e:
            # Summary not materialised yet.
            if e.errno == errorcode.ER_NO_SUCH_TABLE:
                return []
            raise

    def count_attendance_records(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS cnt FROM {DETAIL_TABLE}")
            return int((fetchone(cur) or {}).get("cnt") or 0)
