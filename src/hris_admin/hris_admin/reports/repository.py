from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EmployeePage


class ReportRepository(Protocol):
    """Aggregation queries over attendance_reports_optimized and its daily summary."""

    def division_report(self, *, start_date: date, end_date: date) -> Sequence[dict]:
        raise NotImplementedError

    def section_report(self, *, division_code: str, start_date: date, end_date: date) -> Sequence[dict]:
        raise NotImplementedError

    def employee_report_page(
        self,
        *,
        division_code: str,
        section_code: str,
        start_date: date,
        end_date: date,
        page: int,
        page_size: int,
    ) -> EmployeePage:
        raise NotImplementedError

    def rebuild_daily_summary(self) -> int:
        raise NotImplementedError

    def summary_report(
        self,
        *,
        start_date: date,
        end_date: date,
        division_code: Optional[str] = None,
        section_code: Optional[str] = None,
    ) -> Sequence[dict]:
        raise NotImplementedError

    def attendance_trend(self, *, start_date: date, end_date: date) -> Sequence[dict]:
        raise NotImplementedError

    def count_attendance_records(self) -> int:
        raise NotImplementedError
