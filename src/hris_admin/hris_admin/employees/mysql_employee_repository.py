from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Employee, EmployeeFilter
from .repository import EmployeeRepository

_COLUMNS = """
    emp_no, emp_name, emp_name_with_initials, emp_designation, emp_email, emp_gender,
    emp_status, div_code, div_name, sec_code, sec_name, date_joined
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        emp_no=str(row["emp_no"]),
        emp_name=row["emp_name"],
        emp_name_with_initials=row.get("emp_name_with_initials"),
        emp_designation=row.get("emp_designation"),
        emp_email=row.get("emp_email"),
        emp_gender=row.get("emp_gender"),
        emp_status=row.get("emp_status") or "ACTIVE",
        div_code=row.get("div_code"),
        div_name=row.get("div_name"),
        sec_code=row.get("sec_code"),
        sec_name=row.get("sec_name"),
        date_joined=row.get("date_joined"),
    )


def _filter_clauses(filters: EmployeeFilter) -> tuple[list[str], tuple]:
    clauses = ["emp_status = 'ACTIVE'"]
    params: list = []
    if filters.search:
        like = f"%{filters.search}%"
        clauses.append("(emp_name LIKE %s OR emp_no LIKE %s)")
        params += [like, like]
    if filters.division_code:
        clauses.append("div_code = %s")
        params.append(filters.division_code)
    if filters.section_code:
        clauses.append("sec_code = %s")
        params.append(filters.section_code)
    if filters.designation:
        clauses.append("emp_designation LIKE %s")
        params.append(f"%{filters.designation}%")
    return clauses, tuple(params)


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_page(self, filters: EmployeeFilter, *, limit: int, offset: int) -> tuple[Sequence[Employee], int]:
        clauses, params = _filter_clauses(filters)
        where = build_where(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM employees_sync {where}", params)
            total = int(fetchone(cur)["n"])
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees_sync {where} ORDER BY emp_no LIMIT %s OFFSET %s",
                params + (limit, offset),
            )
            return [_to_employee(r) for r in fetchall(cur)], total

    def get_by_emp_no(self, emp_no: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees_sync WHERE emp_no=%s", (emp_no,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees_sync WHERE emp_status='ACTIVE'")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def upsert_division(self, *, hie_code, hie_name, name_sinhala, name_tamil, relationship) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO divisions_sync (hie_code, hie_name, hie_name_sinhala, hie_name_tamil, hie_relationship)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                  hie_name=VALUES(hie_name),
                  hie_name_sinhala=VALUES(hie_name_sinhala),
                  hie_name_tamil=VALUES(hie_name_tamil),
                  hie_relationship=VALUES(hie_relationship)
                """,
                (hie_code, hie_name, name_sinhala, name_tamil, relationship),
            )

    def upsert_section(self, *, hie_code, hie_name, name_sinhala, name_tamil, division_code) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sections_sync (hie_code, hie_name, hie_name_sinhala, hie_name_tamil, division_code)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                  hie_name=VALUES(hie_name),
                  hie_name_sinhala=VALUES(hie_name_sinhala),
                  hie_name_tamil=VALUES(hie_name_tamil),
                  division_code=VALUES(division_code)
                """,
                (hie_code, hie_name, name_sinhala, name_tamil, division_code),
            )

    def upsert_employee(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees_sync (
                  emp_no, emp_name, emp_name_with_initials, emp_designation, emp_email, emp_gender,
                  emp_status, div_code, div_name, sec_code, sec_name, date_joined
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                  emp_name=VALUES(emp_name),
                  emp_name_with_initials=VALUES(emp_name_with_initials),
                  emp_designation=VALUES(emp_designation),
                  emp_email=VALUES(emp_email),
                  emp_gender=VALUES(emp_gender),
                  emp_status=VALUES(emp_status),
                  div_code=VALUES(div_code),
                  div_name=VALUES(div_name),
                  sec_code=VALUES(sec_code),
                  sec_name=VALUES(sec_name),
                  date_joined=VALUES(date_joined)
                """,
                (
                    employee.emp_no,
                    employee.emp_name,
                    employee.emp_name_with_initials,
                    employee.emp_designation,
                    employee.emp_email,
                    employee.emp_gender,
                    employee.emp_status,
                    employee.div_code,
                    employee.div_name,
                    employee.sec_code,
                    employee.sec_name,
                    employee.date_joined,
                ),
            )
