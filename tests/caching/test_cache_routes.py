from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.hris_admin.hris_admin.caching.controller import register as register_local_cache
from src.hris_admin.hris_admin.caching.local_cache import SUB_SECTIONS, USERS, LocalDataCache
from src.hris_admin.hris_admin.caching.ttl_cache import TTLCache
from src.hris_admin.hris_admin.common.responses import register_error_handlers
from src.hris_admin.hris_admin.core.constants import LOCAL_CACHE_TTL_SECONDS
from src.hris_admin.hris_admin.core.exceptions import UpstreamError
from src.hris_admin.hris_admin.hris.cache import HrisDataCache
from src.hris_admin.hris_admin.hris.controller import register as register_hris


class DownClient:
    def login(self):
        raise UpstreamError("HRIS down")

    def has_valid_token(self):
        return False


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class RecordingActivity:
    def __init__(self):
        self.logged = []

    def log_activity(self, **kwargs):
        self.logged.append(kwargs)


@pytest.fixture()
def env():
    local = LocalDataCache({SUB_SECTIONS: lambda: [{"id": 1}], USERS: lambda: []})
    container = SimpleNamespace(
        local_cache=local,
        hris_cache=HrisDataCache(DownClient()),
        activity_service=RecordingActivity(),
    )
    app = Flask(__name__)
    app.secret_key = "test"
    register_error_handlers(app)
    register_local_cache(app, container)
    register_hris(app, container)
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["name"] = "Root"
        sess["role"] = "super_admin"
    return SimpleNamespace(client=client, local=local, container=container)


def test_local_cache_503_until_refreshed(env):
    resp = env.client.get("/api/cache/subsections")
    assert resp.status_code == 503
    assert resp.get_json()["success"] is False

    assert env.client.post("/api/cache/refresh").status_code == 200
    body = env.client.get("/api/cache/subsections").get_json()
    assert body["data"] == [{"id": 1}]
    assert body["count"] == 1
    assert env.container.activity_service.logged[0]["activity_type"].value == "cache_refreshed"

    env.client.post("/api/cache/clear")
    assert env.client.get("/api/cache/users").status_code == 503


def test_hris_lists_503_when_not_ready(env):
    assert env.client.get("/api/hris/divisions").status_code == 503
    assert env.client.get("/api/hris/sections").status_code == 503

    status = env.client.get("/api/hris-cache/status").get_json()["data"]
    assert status["isInitialized"] is False
    assert status["tokenValid"] is False


def test_hris_refresh_failure_is_500(env):
    resp = env.client.post("/api/hris-cache/refresh")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Failed to refresh HRIS cache"}


def test_upstream_error_surfaces_as_500_with_its_message():
    app = Flask(__name__)
    register_error_handlers(app)

    @app.get("/boom")
    def boom():
        raise UpstreamError("HRIS down")

    resp = app.test_client().get("/boom")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "HRIS down"}


def test_expired_local_entries_are_503_not_empty(env):
    clock = FakeClock()
    env.container.local_cache = LocalDataCache(
        {SUB_SECTIONS: lambda: [{"id": 1}], USERS: lambda: [{"id": 7}]},
        cache=TTLCache(LOCAL_CACHE_TTL_SECONDS, clock=clock),
    )
    app = Flask(__name__)
    app.secret_key = "test"
    register_error_handlers(app)
    register_local_cache(app, env.container)
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["role"] = "admin"

    env.container.local_cache.initialize()
    assert client.get("/api/cache/subsections").get_json()["count"] == 1

    clock.now += LOCAL_CACHE_TTL_SECONDS + 1

    for path in ("/api/cache/subsections", "/api/cache/users"):
        resp = client.get(path)
        assert resp.status_code == 503
        assert resp.get_json()["success"] is False


def test_refresh_requires_super_admin(env):
    with env.client.session_transaction() as sess:
        sess["role"] = "clerk"

    assert env.client.post("/api/cache/refresh").status_code == 403
    assert env.client.post("/api/hris-cache/refresh").status_code == 403
