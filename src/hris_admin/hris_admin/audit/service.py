from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..core.constants import DEFAULT_RECENT_ACTIVITIES, MAX_RECENT_ACTIVITIES
from ..core.enums import ActivityType
from ..core.logging import get_logger
from .repository import ActivityRepository

log = get_logger("audit")

_ICONS = {
    "created": "plus",
    "updated": "edit",
    "deleted": "trash",
}


def _icon_for(activity_type: str) -> str:
    for suffix, icon in _ICONS.items():
        if activity_type.endswith(suffix):
            return icon
    return "activity"


class ActivityLogService:
    """Audit trail writes; a failed write is logged and never reaches the caller."""

    def __init__(self, activities: ActivityRepository, *, clock: Callable[[], datetime] = datetime.now):
        self._activities = activities
        self._clock = clock

    def log_activity(
        self,
        *,
        activity_type: ActivityType | str,
        title: str,
        description: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[object] = None,
        actor: Optional[dict] = None,
    ) -> Optional[int]:
        activity_type = activity_type.value if isinstance(activity_type, ActivityType) else str(activity_type)
        actor = actor or {}
        try:
            return self._activities.insert(
                activity_type=activity_type,
                title=title,
                description=description,
                entity_type=entity_type,
                entity_id=None if entity_id is None else str(entity_id),
                user_id=actor.get("user_id"),
                user_name=actor.get("user_name"),
                icon=_icon_for(activity_type),
                occurred_at=self._clock(),
            )
        except Exception as e:
            log.error("Failed to log activity %s: %s", activity_type, e)
            return None

    def recent(self, limit: Optional[int] = None) -> list[dict]:
        try:
            n = int(limit) if limit is not None else DEFAULT_RECENT_ACTIVITIES
        except (TypeError, ValueError):
            n = DEFAULT_RECENT_ACTIVITIES
        n = min(max(n, 1), MAX_RECENT_ACTIVITIES)
        return [a.to_dict() for a in self._activities.list_recent(n)]
