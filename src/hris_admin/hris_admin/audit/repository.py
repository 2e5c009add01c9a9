from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Activity


class ActivityRepository(Protocol):
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
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[Activity]:
        raise NotImplementedError
