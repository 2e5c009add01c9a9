"""Example: call the report service directly (no Flask).

Controllers stay thin; this is the same call the /api/reports/ultra-fast routes make.
"""

import importlib
from datetime import date, timedelta

from config import get_settings_module

from src.hris_admin.hris_admin.container import build_container
from src.hris_admin.hris_admin.core.enums import ReportType


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        redis_config=settings.REDIS_CONFIG,
        hris_config=settings.HRIS_CONFIG,
    )
    end = date.today()
    start = end - timedelta(days=6)

    first = container.report_service.get_optimal_report(ReportType.DIVISION, {"start": start, "end": end})
    second = container.report_service.get_optimal_report(ReportType.DIVISION, {"start": start, "end": end})
    print(f"{first.record_count} divisions, {first.query_time_ms}ms (cached={first.cached})")
    print(f"again: {second.query_time_ms}ms (cached={second.cached})")


if __name__ == "__main__":
    main()
