from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key_error
from .model import Section
from .repository import SectionRepository

_COLUMNS = "id, division_id, code, name, description, is_active"


def _to_section(r: dict) -> Section:
    return Section(
        section_id=int(r["id"]),
        division_id=int(r["division_id"]),
        code=r["code"],
        name=r["name"],
        description=r.get("description"),
        is_active=bool(r["is_active"]),
    )


class MySQLSectionRepository(SectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, division_id: Optional[int] = None) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            if division_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM sections ORDER BY division_id, code")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM sections WHERE division_id=%s ORDER BY code",
                    (int(division_id),),
                )
            return [_to_section(r) for r in fetchall(cur)]

    def get_by_id(self, section_id: int) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sections WHERE id=%s", (int(section_id),))
            r = fetchone(cur)
            return _to_section(r) if r else None

    def get_by_code(self, *, division_id: int, code: str) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM sections WHERE division_id=%s AND code=%s",
                (int(division_id), code),
            )
            r = fetchone(cur)
            return _to_section(r) if r else None

    def create(self, *, division_id: int, code: str, name: str, description: Optional[str]) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO sections (division_id, code, name, description) VALUES (%s, %s, %s, %s)",
                    (int(division_id), code, name, description),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("Section code already exists in this division") from e
            raise

    def update(self, section_id: int, *, code: str, name: str, description: Optional[str]) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE sections SET code=%s, name=%s, description=%s WHERE id=%s",
                    (code, name, description, int(section_id)),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("Section code already exists in this division") from e
            raise

    def delete(self, section_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sections WHERE id=%s", (int(section_id),))
            return cur.rowcount > 0

    def count_by_division(self, division_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM sections WHERE division_id=%s", (int(division_id),))
            return int((fetchone(cur) or {}).get("cnt") or 0)
