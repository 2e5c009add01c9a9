from datetime import date

import pytest

from src.hris_admin.hris_admin.core.exceptions import ValidationError
from src.hris_admin.hris_admin.dashboard.service import DashboardService


class FakeDashboard:
    def total_counts(self):
        return {"divisions": 2, "sections": 5, "subSections": 9, "activeEmployees": 120}


class FakeReports:
    def __init__(self):
        self.args = None

    def attendance_trend(self, *, start_date, end_date):
        self.args = (start_date, end_date)
        return [
            {"summary_date": "2025-01-09", "total_employees": 4, "total_present": 3},
            {"summary_date": "2025-01-10", "total_employees": 0, "total_present": 0},
        ]


class FakeActivity:
    def recent(self, limit=None):
        return [{"id": 1, "limit": limit}]


def make_service(reports=None):
    return DashboardService(FakeDashboard(), reports or FakeReports(), FakeActivity(), today=lambda: date(2025, 1, 10))


def test_trend_fills_missing_days_and_guards_zero():
    reports = FakeReports()

    trend = make_service(reports).attendance_trend()

    assert reports.args == (date(2025, 1, 4), date(2025, 1, 10))
    assert len(trend) == 7
    assert trend[0] == {"date": "2025-01-04", "totalEmployees": 0, "present": 0, "attendancePercentage": 0.0}
    assert trend[5]["attendancePercentage"] == 75.0
    assert trend[6]["attendancePercentage"] == 0.0


def test_trend_days_validated():
    with pytest.raises(ValidationError):
        make_service().attendance_trend("0")


def test_counts_and_recent_pass_through():
    svc = make_service()

    assert svc.total_counts()["activeEmployees"] == 120
    assert svc.recent_activities("3") == [{"id": 1, "limit": "3"}]
