from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, is_duplicate_key_error
from .model import Division
from .repository import DivisionRepository

_COLUMNS = "id, code, name, is_active"


def _to_division(r: dict) -> Division:
    return Division(division_id=int(r["id"]), code=r["code"], name=r["name"], is_active=bool(r["is_active"]))


class MySQLDivisionRepository(DivisionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, search: Optional[str] = None, is_active: Optional[bool] = None) -> Sequence[Division]:
        clauses: list[str] = []
        params: list[object] = []
        if search:
            clauses.append("(name LIKE %s OR code LIKE %s)")
            params.extend([f"%{search}%", f"%{search}%"])
        if is_active is not None:
            clauses.append("is_active=%s")
            params.append(1 if is_active else 0)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM divisions {build_where(clauses)} ORDER BY code", tuple(params))
            return [_to_division(r) for r in fetchall(cur)]

    def _get_one(self, where: str, value: object) -> Optional[Division]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM divisions WHERE {where}=%s", (value,))
            r = fetchone(cur)
            return _to_division(r) if r else None

    def get_by_id(self, division_id: int) -> Optional[Division]:
        return self._get_one("id", int(division_id))

    def get_by_code(self, code: str) -> Optional[Division]:
        return self._get_one("code", code)

    def get_by_name(self, name: str) -> Optional[Division]:
        return self._get_one("name", name)

    def create(self, *, code: str, name: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO divisions (code, name) VALUES (%s, %s)", (code, name))
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("Division with this code or name already exists") from e
            raise

    def update(self, division_id: int, *, code: str, name: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("UPDATE divisions SET code=%s, name=%s WHERE id=%s", (code, name, int(division_id)))
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("Division code or name already exists") from e
            raise

    def set_active(self, division_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE divisions SET is_active=%s WHERE id=%s", (1 if is_active else 0, int(division_id)))
            return cur.rowcount > 0

    def delete(self, division_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM divisions WHERE id=%s", (int(division_id),))
            return cur.rowcount > 0

    def count_employees(self, code: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM employees_sync WHERE div_code=%s", (code,))
            return int((fetchone(cur) or {}).get("cnt") or 0)
