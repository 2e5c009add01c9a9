from __future__ import annotations

from flask import Flask

from ..common.auth import current_actor, login_required, roles_required
from ..common.responses import fail, ok
from ..core.enums import ActivityType, Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    cache = container.local_cache

    def _not_ready():
        return fail("Cache is not initialized. Please refresh the cache first.", 503)

    @app.get("/api/cache/status", endpoint="local_cache_status")
    @login_required
    def cache_status():
        return ok(cache.status())

    @app.post("/api/cache/refresh", endpoint="local_cache_refresh")
    @roles_required(Role.SUPER_ADMIN)
    def cache_refresh():
        if not cache.refresh():
            return fail("Failed to refresh cache", 500)
        container.activity_service.log_activity(
            activity_type=ActivityType.CACHE_REFRESHED,
            title="Local cache refreshed",
            entity_type="Cache",
            actor=current_actor(),
        )
        return ok(cache.status(), message="Cache refreshed successfully")

    @app.post("/api/cache/clear", endpoint="local_cache_clear")
    @roles_required(Role.SUPER_ADMIN)
    def cache_clear():
        cache.clear()
        return ok(message="Cache cleared successfully")

    @app.get("/api/cache/subsections", endpoint="local_cache_subsections")
    @login_required
    def cached_subsections():
        if not cache.is_ready():
            return _not_ready()
        items = cache.sub_sections()
        if items is None:
            return _not_ready()
        return ok(items, count=len(items), cached=True)

    @app.get("/api/cache/users", endpoint="local_cache_users")
    @login_required
    def cached_users():
        if not cache.is_ready():
            return _not_ready()
        items = cache.users()
        if items is None:
            return _not_ready()
        return ok(items, count=len(items), cached=True)
