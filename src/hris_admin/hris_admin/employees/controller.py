from __future__ import annotations

from flask import Flask, request

from ..common.auth import current_actor, login_required, roles_required
from ..common.responses import ok
from ..core.enums import Role
from ..container import Container
from .model import EmployeeFilter


def register(app: Flask, container: Container) -> None:
    @app.get("/api/employees", endpoint="employees_list")
    @login_required
    def list_employees():
        args = request.args
        filters = EmployeeFilter(
            search=args.get("search") or None,
            division_code=args.get("division_code") or args.get("divisionCode") or None,
            section_code=args.get("section_code") or args.get("sectionCode") or None,
            designation=args.get("designation") or None,
        )
        data = container.employee_service.list_employees(filters, page=args.get("page"), limit=args.get("limit"))
        return ok(data["employees"], pagination=data["pagination"])

    @app.get("/api/employees/<emp_no>", endpoint="employees_get")
    @login_required
    def get_employee(emp_no: str):
        return ok(container.employee_service.get_employee(emp_no).to_dict())

    @app.post("/api/sync/hris", endpoint="sync_hris")
    @roles_required(Role.SUPER_ADMIN)
    def sync_hris():
        result = container.hris_sync_service.sync_all(actor=current_actor())
        return ok(result, message="HRIS sync completed")
