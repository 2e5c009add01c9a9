from __future__ import annotations

import json

from _settings import load_settings

from src.hris_admin.hris_admin.core.logging import setup_logging
from src.hris_admin.hris_admin.database.connection import DBConfig, DatabaseConnection
from src.hris_admin.hris_admin.employees.mysql_employee_repository import MySQLEmployeeRepository
from src.hris_admin.hris_admin.employees.service import HrisSyncService
from src.hris_admin.hris_admin.hris.client import HrisClient


def main() -> None:
    settings = load_settings()
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    hris = dict(settings.HRIS_CONFIG)
    client = HrisClient(
        base_url=hris["base_url"],
        username=hris.get("username", ""),
        password=hris.get("password", ""),
        timeout=float(hris.get("timeout", 30)),
    )
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    result = HrisSyncService(client, MySQLEmployeeRepository(conn)).sync_all(
        actor={"user_name": "sync_hris.py"}
    )
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
