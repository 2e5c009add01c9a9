from __future__ import annotations

from _settings import load_settings

from src.hris_admin.hris_admin.caching.redis_cache import ReportCache
from src.hris_admin.hris_admin.core.logging import setup_logging
from src.hris_admin.hris_admin.database.connection import DBConfig, DatabaseConnection
from src.hris_admin.hris_admin.reports.mysql_report_repository import MySQLReportRepository
from src.hris_admin.hris_admin.reports.service import ReportService


def main() -> None:
    settings = load_settings()
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    cache = ReportCache.connect(getattr(settings, "REDIS_CONFIG", {}))

    try:
        rows = ReportService(MySQLReportRepository(conn), cache).rebuild_summary()
    finally:
        cache.close()
    print(f"OK: attendance_daily_summary rebuilt ({rows} rows)")


if __name__ == "__main__":
    main()
