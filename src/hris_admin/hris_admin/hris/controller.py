from __future__ import annotations

from flask import Flask

from ..common.auth import current_actor, login_required, roles_required
from ..common.responses import fail, ok
from ..core.enums import ActivityType, Role
from ..core.exceptions import CacheNotReadyError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    cache = container.hris_cache

    def _ready_list(items):
        if not cache.is_ready() or items is None:
            raise CacheNotReadyError("HRIS cache is not initialized")
        return ok(items, count=len(items), cached=True)

    @app.get("/api/hris-cache/status", endpoint="hris_cache_status")
    @login_required
    def hris_cache_status():
        return ok(cache.status())

    @app.post("/api/hris-cache/refresh", endpoint="hris_cache_refresh")
    @roles_required(Role.SUPER_ADMIN)
    def hris_cache_refresh():
        if not cache.refresh():
            return fail("Failed to refresh HRIS cache", 500)
        container.activity_service.log_activity(
            activity_type=ActivityType.CACHE_REFRESHED,
            title="HRIS cache refreshed",
            entity_type="Cache",
            actor=current_actor(),
        )
        return ok(cache.status(), message="HRIS cache refreshed")

    @app.get("/api/hris/divisions", endpoint="hris_divisions")
    @login_required
    def hris_divisions():
        return _ready_list(cache.divisions())

    @app.get("/api/hris/sections", endpoint="hris_sections")
    @login_required
    def hris_sections():
        return _ready_list(cache.sections())
