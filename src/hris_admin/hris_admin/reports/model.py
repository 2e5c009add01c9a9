from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


def attendance_percentage(present: int, denominator: int) -> float:
    """present / max(denominator, 1) * 100, rounded to 2 decimals, never negative."""
    present = max(int(present or 0), 0)
    denominator = max(int(denominator or 0), 1)
    return round(present / denominator * 100, 2)


@dataclass(frozen=True)
class EmployeePage:
    """One page of the employee-level report plus the authoritative total."""

    rows: list[dict]
    total_records: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total_records <= 0:
            return 0
        return -(-self.total_records // self.page_size)

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalRecords": self.total_records,
            "totalPages": self.total_pages,
            "hasNextPage": self.page < self.total_pages,
        }


@dataclass
class ReportResult:
    data: list[dict]
    query_time_ms: int
    cached: bool = False
    pagination: Optional[dict] = None
    source: Optional[str] = None
    total_time_ms: int = 0
    timestamp: Optional[str] = None
    extra: dict = field(default_factory=dict)

    @property
    def record_count(self) -> int:
        return len(self.data)
