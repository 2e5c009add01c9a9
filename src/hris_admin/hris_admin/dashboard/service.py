from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional

from ..audit.service import ActivityLogService
from ..common.validators import parse_int
from ..core.constants import DEFAULT_TREND_DAYS
from ..reports.model import attendance_percentage
from ..reports.repository import ReportRepository
from .repository import DashboardRepository

MAX_TREND_DAYS = 90


class DashboardService:
    def __init__(
        self,
        dashboard: DashboardRepository,
        reports: ReportRepository,
        activity: ActivityLogService,
        *,
        today: Callable[[], date] = date.today,
    ):
        self._dashboard = dashboard
        self._reports = reports
        self._activity = activity
        self._today = today

    def total_counts(self) -> dict:
        return self._dashboard.total_counts()

    def recent_activities(self, limit=None) -> list[dict]:
        return self._activity.recent(limit)

    def attendance_trend(self, days: Optional[str] = None) -> list[dict]:
        """One point per day for the last ``days`` days; days without data report zero."""
        n = parse_int(days, "days", default=DEFAULT_TREND_DAYS, max_value=MAX_TREND_DAYS)
        end = self._today()
        start = end - timedelta(days=n - 1)
        by_day = {
            str(r["summary_date"]): r
            for r in self._reports.attendance_trend(start_date=start, end_date=end)
        }

        out = []
        for i in range(n):
            day = (start + timedelta(days=i)).isoformat()
            row = by_day.get(day, {})
            total = int(row.get("total_employees") or 0)
            present = int(row.get("total_present") or 0)
            out.append(
                {
                    "date": day,
                    "totalEmployees": total,
                    "present": present,
                    "attendancePercentage": attendance_percentage(present, total),
                }
            )
        return out
