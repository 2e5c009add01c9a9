from __future__ import annotations

from _settings import load_settings

from src.hris_admin.hris_admin.core.logging import setup_logging
from src.hris_admin.hris_admin.database.bootstrap import apply_schema, ensure_default_admin, list_tables
from src.hris_admin.hris_admin.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = load_settings()
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    apply_schema(conn)
    ensure_default_admin(
        conn,
        email=getattr(settings, "DEFAULT_ADMIN_EMAIL", ""),
        password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", ""),
    )
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
