from __future__ import annotations

import importlib
import threading

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .caching.controller import register as register_local_cache
from .common.responses import register_error_handlers
from .container import Container, build_container
from .core.logging import get_logger, setup_logging
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, ensure_default_admin, list_tables
from .employees.controller import register as register_employees
from .hris.controller import register as register_hris
from .organization.controller import register as register_organization
from .reports.controller import register as register_reports
from .users.controller import register as register_users

log = get_logger("app")


def warm_caches(container: Container) -> None:
    """Fill the HRIS and local caches; failures leave them not-ready."""
    container.hris_cache.initialize()
    container.local_cache.initialize()


def register_routes(app: Flask, container: Container) -> None:
    register_users(app, container)
    register_organization(app, container)
    register_employees(app, container)
    register_reports(app, container)
    register_hris(app, container)
    register_local_cache(app, container)
    register_dashboard(app, container)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        container = build_container(
            db_config=db_config,
            redis_config=getattr(settings, "REDIS_CONFIG", {}),
            hris_config=getattr(settings, "HRIS_CONFIG", {}),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            ensure_default_admin(
                container.conn,
                email=getattr(settings, "DEFAULT_ADMIN_EMAIL", ""),
                password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", ""),
            )
            log.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

        if bool(getattr(settings, "WARM_CACHES", False)):
            threading.Thread(target=warm_caches, args=(container,), name="cache-warmup", daemon=True).start()

    app.extensions["hris_admin"] = container
    register_error_handlers(app)
    register_routes(app, container)
    return app
