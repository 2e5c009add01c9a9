from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key_error
from .model import Division, Section, SubSection
from .repository import SubSectionRepository

_COLUMNS = (
    "id, division_id, division_code, division_name, "
    "section_id, section_code, section_name, sub_code, sub_name"
)


def _to_subsection(r: dict) -> SubSection:
    return SubSection(
        subsection_id=int(r["id"]),
        division_id=int(r["division_id"]),
        division_code=r.get("division_code"),
        division_name=r.get("division_name"),
        section_id=int(r["section_id"]),
        section_code=r.get("section_code"),
        section_name=r.get("section_name"),
        code=r["sub_code"],
        name=r["sub_name"],
    )


class MySQLSubSectionRepository(SubSectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, section_id: Optional[int] = None) -> Sequence[SubSection]:
        with db_cursor(self._conn_factory) as (_, cur):
            if section_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM subsections ORDER BY sub_name ASC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM subsections WHERE section_id=%s ORDER BY sub_name ASC",
                    (int(section_id),),
                )
            return [_to_subsection(r) for r in fetchall(cur)]

    def get_by_id(self, subsection_id: int) -> Optional[SubSection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subsections WHERE id=%s", (int(subsection_id),))
            r = fetchone(cur)
            return _to_subsection(r) if r else None

    def get_by_code(self, *, section_id: int, code: str) -> Optional[SubSection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM subsections WHERE section_id=%s AND sub_code=%s",
                (int(section_id), code),
            )
            r = fetchone(cur)
            return _to_subsection(r) if r else None

    def create(self, *, division: Division, section: Section, code: str, name: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO subsections
                        (division_id, division_code, division_name,
                         section_id, section_code, section_name, sub_code, sub_name)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        division.division_id, division.code, division.name,
                        section.section_id, section.code, section.name, code, name,
                    ),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("Sub-section code already exists in this section") from e
            raise

    def update(self, subsection_id: int, *, code: str, name: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE subsections SET sub_code=%s, sub_name=%s WHERE id=%s",
                    (code, name, int(subsection_id)),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("Sub-section code already exists in this section") from e
            raise

    def delete(self, subsection_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subsections WHERE id=%s", (int(subsection_id),))
            return cur.rowcount > 0

    def count_by_section(self, section_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM subsections WHERE section_id=%s", (int(section_id),))
            return int((fetchone(cur) or {}).get("cnt") or 0)
