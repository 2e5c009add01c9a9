from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, as_time_of_day
from .model import Activity
from .repository import ActivityRepository


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(
        self,
        *,
        activity_type: str,
        title: str,
        description: Optional[str],
        entity_type: Optional[str],
        entity_id: Optional[str],
        user_id: Optional[int],
        user_name: Optional[str],
        icon: Optional[str],
        occurred_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO recent_activities
                    (activity_type, title, description, entity_type, entity_id,
                     user_id, user_name, icon, activity_date, activity_time)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    activity_type, title, description, entity_type, entity_id,
                    user_id, user_name, icon, occurred_at.date(), occurred_at.time().replace(microsecond=0),
                ),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, activity_type, title, description, entity_type, entity_id,
                       user_name, icon, activity_date, activity_time
                FROM recent_activities
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                Activity(
                    activity_id=int(r["id"]),
                    activity_type=r["activity_type"],
                    title=r["title"],
                    description=r.get("description"),
                    entity_type=r.get("entity_type"),
                    entity_id=r.get("entity_id"),
                    user_name=r.get("user_name"),
                    icon=r.get("icon"),
                    activity_date=r["activity_date"],
                    activity_time=as_time_of_day(r["activity_time"]),
                )
                for r in fetchall(cur)
            ]
