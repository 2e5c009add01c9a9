from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional

from ..caching.redis_cache import ReportCache
from ..common.datetime_utils import elapsed_ms, monotonic_ms, utc_timestamp
from ..core.constants import (
    DEFAULT_PAGE_SIZE,
    DIVISION_REPORT_TTL_SECONDS,
    EMPLOYEE_REPORT_TTL_SECONDS,
    MAX_PAGE_SIZE,
    REPORT_CACHE_PREFIXES,
    SECTION_REPORT_TTL_SECONDS,
)
from ..core.enums import ReportType
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from .model import ReportResult
from .repository import ReportRepository

log = get_logger("reports")


def division_cache_key(start: date, end: date) -> str:
    return f"div_report:{start.isoformat()}:{end.isoformat()}"


def section_cache_key(division_code: str, start: date, end: date) -> str:
    return f"sec_report:{division_code}:{start.isoformat()}:{end.isoformat()}"


def employee_cache_key(division_code: str, section_code: str, start: date, end: date, page: int, page_size: int) -> str:
    return f"emp_report:{division_code}:{section_code}:{start.isoformat()}:{end.isoformat()}:{page}:{page_size}"


class ReportService:
    """Attendance reports with a Redis cache-aside layer in front of MySQL.

    Division and section reports are cached for an hour; for the employee
    report only page 1 is cached (30 minutes). The summary tier reads the
    materialised daily table and is never cached. A disabled or failing
    cache only costs speed.
    """

    def __init__(self, reports: ReportRepository, cache: Optional[ReportCache] = None):
        self._reports = reports
        self._cache = cache or ReportCache(None)

    def _cached(self, key: str, ttl_seconds: int, compute: Callable[[], Any]) -> tuple[Any, bool, int]:
        started = monotonic_ms()
        hit = self._cache.get_json(key) if ttl_seconds > 0 else None
        if hit is not None:
            log.info("Cache HIT %s", key)
            return hit, True, elapsed_ms(started)

        log.info("Cache MISS %s - querying database", key)
        started = monotonic_ms()
        value = compute()
        query_ms = elapsed_ms(started)
        if ttl_seconds > 0:
            self._cache.set_json(key, value, ttl_seconds)
        return value, False, query_ms

    def division_report(self, *, start: date, end: date) -> ReportResult:
        rows, cached, ms = self._cached(
            division_cache_key(start, end),
            DIVISION_REPORT_TTL_SECONDS,
            lambda: list(self._reports.division_report(start_date=start, end_date=end)),
        )
        return ReportResult(data=rows, query_time_ms=ms, cached=cached)

    def section_report(self, *, division_code: str, start: date, end: date) -> ReportResult:
        if not division_code:
            raise ValidationError("divisionCode is required")
        rows, cached, ms = self._cached(
            section_cache_key(division_code, start, end),
            SECTION_REPORT_TTL_SECONDS,
            lambda: list(self._reports.section_report(division_code=division_code, start_date=start, end_date=end)),
        )
        return ReportResult(data=rows, query_time_ms=ms, cached=cached)

    def employee_report(
        self,
        *,
        division_code: str,
        section_code: str,
        start: date,
        end: date,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ReportResult:
        if not division_code or not section_code:
            raise ValidationError("divisionCode and sectionCode are required")
        if page < 1:
            raise ValidationError("page must be >= 1")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationError(f"pageSize must be between 1 and {MAX_PAGE_SIZE}")

        def compute() -> dict:
            result = self._reports.employee_report_page(
                division_code=division_code,
                section_code=section_code,
                start_date=start,
                end_date=end,
                page=page,
                page_size=page_size,
            )
            return {"data": list(result.rows), "pagination": result.pagination()}

        payload, cached, ms = self._cached(
            employee_cache_key(division_code, section_code, start, end, page, page_size),
            EMPLOYEE_REPORT_TTL_SECONDS if page == 1 else 0,
            compute,
        )
        return ReportResult(data=payload["data"], pagination=payload["pagination"], query_time_ms=ms, cached=cached)

    def summary_report(
        self,
        *,
        start: date,
        end: date,
        division_code: Optional[str] = None,
        section_code: Optional[str] = None,
    ) -> ReportResult:
        started = monotonic_ms()
        rows = list(
            self._reports.summary_report(
                start_date=start,
                end_date=end,
                division_code=division_code or None,
                section_code=section_code or None,
            )
        )
        return ReportResult(data=rows, query_time_ms=elapsed_ms(started), source="summary_table")

    def rebuild_summary(self) -> int:
        log.info("Rebuilding daily summary table")
        count = self._reports.rebuild_daily_summary()
        self.invalidate()
        log.info("Daily summary table rebuilt with %d rows", count)
        return count

    def invalidate(self) -> int:
        deleted = self._cache.delete_prefixes(REPORT_CACHE_PREFIXES)
        log.info("Invalidated %d cached report entries", deleted)
        return deleted

    def get_optimal_report(self, report_type: ReportType | str, params: dict) -> ReportResult:
        try:
            report_type = ReportType(report_type)
        except ValueError:
            raise ValidationError(f"Unknown report type: {report_type}")

        log.info("Generating %s report", report_type.value)
        started = monotonic_ms()
        start, end = params["start"], params["end"]

        if report_type == ReportType.DIVISION:
            result = self.division_report(start=start, end=end)
        elif report_type == ReportType.SECTION:
            result = self.section_report(division_code=params.get("division_code"), start=start, end=end)
        elif report_type == ReportType.EMPLOYEE:
            result = self.employee_report(
                division_code=params.get("division_code"),
                section_code=params.get("section_code"),
                start=start,
                end=end,
                page=int(params.get("page") or 1),
                page_size=int(params.get("page_size") or DEFAULT_PAGE_SIZE),
            )
        else:
            result = self.summary_report(
                start=start,
                end=end,
                division_code=params.get("division_code"),
                section_code=params.get("section_code"),
            )

        result.total_time_ms = elapsed_ms(started)
        result.timestamp = utc_timestamp()
        return result
