from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from ..core.logging import get_logger
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone

log = get_logger("bootstrap")

SCHEMA_PATH = Path(__file__).resolve().parents[4] / "database" / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work whatever MYSQL_DATABASE is set to.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ';' that are not inside quotes."""
    buf: list[str] = []
    quote: Optional[str] = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    count = 0
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    log.info("Applied %d schema statements from %s", count, schema_path)
    return count


def ensure_default_admin(conn_factory: DatabaseConnection, *, email: str, password: str) -> Optional[int]:
    """Create (or re-activate) the super admin configured by DEFAULT_ADMIN_EMAIL."""
    if not email or not password:
        log.warning("DEFAULT_ADMIN_EMAIL/DEFAULT_ADMIN_PASSWORD not set; skipping default admin")
        return None

    email = email.strip().lower()
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
        existing = fetchone(cur)
        if existing:
            cur.execute(
                "UPDATE users SET role=%s, is_active=1 WHERE user_id=%s",
                (Role.SUPER_ADMIN.value, int(existing["user_id"])),
            )
            return int(existing["user_id"])

        cur.execute(
            """
            INSERT INTO users (email, full_name, password_hash, role, is_active)
            VALUES (%s, %s, %s, %s, 1)
            """,
            (email, "Super Admin", generate_password_hash(password), Role.SUPER_ADMIN.value),
        )
        log.info("Created default super admin %s", email)
        return int(cur.lastrowid)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
