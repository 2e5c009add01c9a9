from __future__ import annotations

from flask import Flask, request

from ..common.auth import current_actor, roles_required
from ..common.responses import fail, ok, report_meta
from ..common.validators import parse_int, require_date_range
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.enums import ADMIN_ROLES, ActivityType, ReportType
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from ..container import Container

log = get_logger("reports.http")

PREFIX = "/api/reports/ultra-fast"


def register(app: Flask, container: Container) -> None:
    def _run(report_type: ReportType, required: tuple[str, ...], **extra_params):
        args = request.args
        missing = [name for name in required if not args.get(name)]
        if missing:
            return fail(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required", 400)

        try:
            start, end = require_date_range(args.get("startDate"), args.get("endDate"))
            params = {
                "start": start,
                "end": end,
                "division_code": args.get("divisionCode"),
                "section_code": args.get("sectionCode"),
                **extra_params,
            }
            result = container.report_service.get_optimal_report(report_type, params)
        except DomainError as e:
            return fail(str(e), e.status_code)
        except Exception as e:
            log.exception("%s report error", report_type.value)
            return fail(str(e), 500)

        extra = {}
        if result.source:
            extra["source"] = result.source
        body = {"meta": report_meta(result, **extra)}
        if result.pagination is not None:
            body["pagination"] = result.pagination
        return ok(result.data, **body)

    @app.get(f"{PREFIX}/division", endpoint="report_division")
    def division_report():
        return _run(ReportType.DIVISION, ("startDate", "endDate"))

    @app.get(f"{PREFIX}/section", endpoint="report_section")
    def section_report():
        return _run(ReportType.SECTION, ("divisionCode", "startDate", "endDate"))

    @app.get(f"{PREFIX}/employee", endpoint="report_employee")
    def employee_report():
        try:
            page = parse_int(request.args.get("page"), "page", default=1)
            page_size = parse_int(
                request.args.get("pageSize"), "pageSize", default=DEFAULT_PAGE_SIZE, max_value=MAX_PAGE_SIZE
            )
        except DomainError as e:
            return fail(str(e), e.status_code)
        return _run(
            ReportType.EMPLOYEE,
            ("divisionCode", "sectionCode", "startDate", "endDate"),
            page=page,
            page_size=page_size,
        )

    @app.get(f"{PREFIX}/summary", endpoint="report_summary")
    def summary_report():
        return _run(ReportType.SUMMARY, ("startDate", "endDate"))

    @app.post(f"{PREFIX}/rebuild-summary", endpoint="report_rebuild_summary")
    @roles_required(*ADMIN_ROLES)
    def rebuild_summary():
        try:
            rows = container.report_service.rebuild_summary()
        except Exception as e:
            log.exception("Summary rebuild error")
            return fail(f"Failed to rebuild summary table: {e}", 500)

        container.activity_service.log_activity(
            activity_type=ActivityType.SUMMARY_REBUILT,
            title="Daily summary rebuilt",
            description=f"attendance_daily_summary rebuilt with {rows} rows",
            entity_type="Report",
            actor=current_actor(),
        )
        return ok({"rows": rows}, message="Summary table rebuilt successfully")

    @app.post(f"{PREFIX}/cache/clear", endpoint="report_cache_clear")
    @roles_required(*ADMIN_ROLES)
    def clear_report_cache():
        deleted = container.report_service.invalidate()
        return ok({"deleted": deleted}, message="Report cache cleared")
