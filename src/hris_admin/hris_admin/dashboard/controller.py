from __future__ import annotations

from flask import Flask, request

from ..common.auth import login_required
from ..common.responses import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    @app.get("/api/dashboard/total-counts", endpoint="dashboard_total_counts")
    @login_required
    def total_counts():
        return ok(dashboard.total_counts())

    @app.get("/api/dashboard/activities/recent", endpoint="dashboard_recent_activities")
    @login_required
    def recent_activities():
        items = dashboard.recent_activities(request.args.get("limit"))
        return ok(items, count=len(items))

    @app.get("/api/dashboard/attendance-trend", endpoint="dashboard_attendance_trend")
    @login_required
    def attendance_trend():
        return ok(dashboard.attendance_trend(request.args.get("days")))
