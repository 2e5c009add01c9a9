from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.hris_admin.hris_admin.caching.redis_cache import ReportCache
from src.hris_admin.hris_admin.common.responses import register_error_handlers
from src.hris_admin.hris_admin.reports.controller import register
from src.hris_admin.hris_admin.reports.service import ReportService
from tests.fakes import FakeRedis, FakeReports


class RecordingActivity:
    def __init__(self):
        self.logged: list[dict] = []

    def log_activity(self, **kwargs):
        self.logged.append(kwargs)


@pytest.fixture()
def env():
    repo = FakeReports()
    activity = RecordingActivity()
    container = SimpleNamespace(report_service=ReportService(repo, ReportCache(FakeRedis())), activity_service=activity)

    app = Flask(__name__)
    app.secret_key = "test"
    register_error_handlers(app)
    register(app, container)
    return SimpleNamespace(client=app.test_client(), repo=repo, activity=activity)


def login_as(client, role: str):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["name"] = "Tester"
        sess["role"] = role


def test_division_report_envelope(env):
    resp = env.client.get("/api/reports/ultra-fast/division?startDate=2025-01-01&endDate=2025-01-31")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"][0]["division_code"] == "OPS"
    assert body["meta"]["recordCount"] == 1
    assert body["meta"]["cached"] is False
    assert body["meta"]["queryTime"].endswith("ms")
    assert body["meta"]["timestamp"]

    again = env.client.get("/api/reports/ultra-fast/division?startDate=2025-01-01&endDate=2025-01-31")
    assert again.get_json()["meta"]["cached"] is True


def test_missing_dates_is_400(env):
    resp = env.client.get("/api/reports/ultra-fast/division?startDate=2025-01-01")

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "endDate is required"}


def test_section_requires_division_code(env):
    resp = env.client.get("/api/reports/ultra-fast/section?startDate=2025-01-01&endDate=2025-01-31")

    assert resp.status_code == 400
    assert "divisionCode" in resp.get_json()["message"]


def test_start_after_end_is_400(env):
    resp = env.client.get("/api/reports/ultra-fast/division?startDate=2025-02-01&endDate=2025-01-31")

    assert resp.status_code == 400


def test_employee_report_includes_pagination(env):
    resp = env.client.get(
        "/api/reports/ultra-fast/employee?divisionCode=OPS&sectionCode=YRD"
        "&startDate=2025-01-01&endDate=2025-01-31&page=2&pageSize=50"
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["pagination"]["page"] == 2
    assert body["pagination"]["pageSize"] == 50
    assert body["pagination"]["totalPages"] == 5


def test_employee_page_size_over_limit_is_400(env):
    resp = env.client.get(
        "/api/reports/ultra-fast/employee?divisionCode=OPS&sectionCode=YRD"
        "&startDate=2025-01-01&endDate=2025-01-31&pageSize=5000"
    )

    assert resp.status_code == 400


def test_summary_reports_source(env):
    resp = env.client.get("/api/reports/ultra-fast/summary?startDate=2025-01-01&endDate=2025-01-31")

    assert resp.get_json()["meta"]["source"] == "summary_table"


def test_rebuild_summary_requires_login(env):
    resp = env.client.post("/api/reports/ultra-fast/rebuild-summary")

    assert resp.status_code == 401
    assert "rebuild" not in env.repo.calls


def test_rebuild_summary_forbidden_for_clerk(env):
    login_as(env.client, "clerk")

    resp = env.client.post("/api/reports/ultra-fast/rebuild-summary")

    assert resp.status_code == 403
    assert resp.get_json()["success"] is False
    assert "rebuild" not in env.repo.calls


def test_rebuild_summary_as_admin_logs_activity(env):
    login_as(env.client, "admin")

    resp = env.client.post("/api/reports/ultra-fast/rebuild-summary")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"rows": 12}
    assert env.activity.logged[0]["actor"]["user_name"] == "Tester"
