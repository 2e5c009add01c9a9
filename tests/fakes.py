"""In-memory stand-ins shared by the report tests."""

from __future__ import annotations

import redis

from src.hris_admin.hris_admin.reports.model import EmployeePage


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    def scan_iter(self, match=None):
        prefix = (match or "*").rstrip("*")
        return [k for k in list(self.store) if k.startswith(prefix)]

    def expire(self, key):
        self.store.pop(key, None)
        self.ttls.pop(key, None)

    def delete(self, *keys):
        n = 0
        for k in keys:
            if self.store.pop(k, None) is not None:
                n += 1
        return n


class BrokenRedis:
    def get(self, key):
        raise redis.ConnectionError("down")

    def setex(self, key, ttl, value):
        raise redis.ConnectionError("down")


class FakeReports:
    def __init__(self):
        self.calls: list[str] = []

    def division_report(self, *, start_date, end_date):
        self.calls.append("division")
        return [
            {"division_code": "OPS", "total_employees": 2, "present_count": 3, "attendance_percentage": 75.0},
        ]

    def section_report(self, *, division_code, start_date, end_date):
        self.calls.append("section")
        return [{"section_code": "YRD", "attendance_percentage": 0.0}]

    def employee_report_page(self, *, division_code, section_code, start_date, end_date, page, page_size):
        self.calls.append(f"employee:{page}")
        rows = [{"emp_id": f"E{i}"} for i in range(page_size)] if page <= 3 else []
        return EmployeePage(rows=rows, total_records=250, page=page, page_size=page_size)

    def summary_report(self, *, start_date, end_date, division_code=None, section_code=None):
        self.calls.append("summary")
        return [{"summary_date": "2025-01-01"}]

    def rebuild_daily_summary(self):
        self.calls.append("rebuild")
        return 12
