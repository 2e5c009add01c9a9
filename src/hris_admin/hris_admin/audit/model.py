from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class Activity:
    """Row of recent_activities, shown on the dashboard feed."""

    activity_id: int
    activity_type: str
    title: str
    description: Optional[str]
    entity_type: Optional[str]
    entity_id: Optional[str]
    user_name: Optional[str]
    icon: Optional[str]
    activity_date: date
    activity_time: time

    def to_dict(self) -> dict:
        return {
            "id": self.activity_id,
            "title": self.title,
            "description": self.description,
            "date": self.activity_date.isoformat(),
            "time": self.activity_time.strftime("%H:%M:%S"),
            "icon": self.icon,
            "action": self.activity_type,
            "entityType": self.entity_type,
            "entityId": self.entity_id,
            "user": self.user_name,
        }
