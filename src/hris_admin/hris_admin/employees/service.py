from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

from ..audit.service import ActivityLogService
from ..common.datetime_utils import elapsed_ms, monotonic_ms
from ..common.validators import parse_int
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.enums import ActivityType
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..hris.cache import split_hierarchy
from ..hris.client import HrisClient
from .model import Employee, EmployeeFilter, SyncCounts
from .repository import EmployeeRepository

log = get_logger("employees")


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, filters: EmployeeFilter, *, page=None, limit=None) -> dict:
        page = parse_int(page, "page", default=1)
        limit = parse_int(limit, "limit", default=DEFAULT_PAGE_SIZE, max_value=MAX_PAGE_SIZE)
        rows, total = self._employees.list_page(filters, limit=limit, offset=(page - 1) * limit)
        return {
            "employees": [e.to_dict() for e in rows],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": (total + limit - 1) // limit,
            },
        }

    def get_employee(self, emp_no: str) -> Employee:
        employee = self._employees.get_by_emp_no(emp_no)
        if not employee:
            raise NotFoundError(f"Employee {emp_no} not found")
        return employee

    def count_active(self) -> int:
        return self._employees.count_active()


def parse_hris_date(value: Any) -> Optional[date]:
    """HRIS dates arrive as ISO strings or as Mongo extended JSON ({"$date": {"$numberLong": ms}})."""
    if not value:
        return None
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    if isinstance(value, dict):
        raw = value.get("$date")
        if isinstance(raw, dict):
            raw = raw.get("$numberLong")
        try:
            return datetime.fromtimestamp(int(raw) / 1000, tz=timezone.utc).date()
        except (TypeError, ValueError):
            return None
    return None


def _numeric_code(item: dict, *keys: str) -> tuple[int, str]:
    code = next((str(item[k]) for k in keys if item.get(k)), "")
    try:
        return int(code), code
    except ValueError:
        return 0, code


def is_active_employee(record: dict) -> bool:
    flag = record.get("ACTIVE_HRM_FLG")
    if flag is None:
        return True
    try:
        return int(flag) == 1
    except (TypeError, ValueError):
        return False


def employee_from_hris(record: dict) -> Employee:
    current = record.get("currentwork") or {}
    emp_no = record.get("EMP_NUMBER") or record.get("EMP_NO")
    if not emp_no:
        raise ValueError("employee record without EMP_NUMBER")
    return Employee(
        emp_no=str(emp_no),
        emp_name=record.get("FULLNAME") or record.get("EMP_NAME") or "Unknown Employee",
        emp_name_with_initials=record.get("DISPLAY_NAME") or record.get("EMP_NAME_WITH_INITIALS"),
        emp_designation=current.get("designation") or record.get("EMP_DESIGNATION"),
        emp_email=record.get("PER_EMAIL") or record.get("EMP_EMAIL"),
        emp_gender=record.get("GENDER") or record.get("SEX"),
        emp_status=record.get("EMP_STATUS") or "ACTIVE",
        div_code=record.get("HIE_CODE_3") or record.get("DIV_CODE"),
        div_name=current.get("HIE_NAME_3") or record.get("DIV_NAME"),
        sec_code=record.get("HIE_CODE_4") or record.get("SEC_CODE"),
        sec_name=current.get("HIE_NAME_4") or record.get("SEC_NAME"),
        date_joined=parse_hris_date(record.get("DATE_JOINED")),
    )


class HrisSyncService:
    """Mirror the HRIS hierarchy and active employees into the *_sync tables."""

    def __init__(
        self,
        client: HrisClient,
        employees: EmployeeRepository,
        activity: Optional[ActivityLogService] = None,
    ):
        self._client = client
        self._employees = employees
        self._activity = activity

    def _upsert_each(self, label: str, items: list[dict], upsert: Callable[[dict], None], key: Callable[[dict], str]) -> SyncCounts:
        synced = failed = 0
        for item in items:
            try:
                upsert(item)
                synced += 1
            except Exception as e:
                failed += 1
                log.error("Failed to sync %s %s: %s", label, key(item), e)
        log.info("Synced %s: %d ok, %d failed", label, synced, failed)
        return SyncCounts(synced=synced, failed=failed)

    def sync_divisions(self, hierarchy: list[dict]) -> SyncCounts:
        divisions, _ = split_hierarchy(hierarchy)
        divisions.sort(key=lambda d: _numeric_code(d, "HIE_CODE"))
        return self._upsert_each(
            "division",
            divisions,
            lambda d: self._employees.upsert_division(
                hie_code=str(d["HIE_CODE"]),
                hie_name=d.get("HIE_NAME") or "Unknown Division",
                name_sinhala=d.get("HIE_NAME_SINHALA") or d.get("HIE_NAME_2"),
                name_tamil=d.get("HIE_NAME_TAMIL"),
                relationship=d.get("HIE_RELATIONSHIP"),
            ),
            key=lambda d: d.get("HIE_CODE"),
        )

    def sync_sections(self, hierarchy: list[dict]) -> SyncCounts:
        _, sections = split_hierarchy(hierarchy)
        sections.sort(key=lambda s: _numeric_code(s, "HIE_CODE"))
        return self._upsert_each(
            "section",
            sections,
            lambda s: self._employees.upsert_section(
                hie_code=str(s["HIE_CODE"]),
                hie_name=s.get("HIE_NAME_4") or s.get("HIE_NAME") or "Unknown Section",
                name_sinhala=s.get("HIE_NAME_SINHALA") or s.get("HIE_NAME_2"),
                name_tamil=s.get("HIE_NAME_TAMIL"),
                division_code=s.get("HIE_CODE_3") or s.get("HIE_RELATIONSHIP"),
            ),
            key=lambda s: s.get("HIE_CODE"),
        )

    def sync_employees(self, records: list[dict]) -> SyncCounts:
        active = [r for r in records if is_active_employee(r)]
        active.sort(key=lambda r: str(r.get("EMP_NUMBER") or r.get("EMP_NO") or ""))
        return self._upsert_each(
            "employee",
            active,
            lambda r: self._employees.upsert_employee(employee_from_hris(r)),
            key=lambda r: r.get("EMP_NUMBER") or r.get("EMP_NO"),
        )

    def sync_all(self, *, actor: Optional[dict] = None) -> dict:
        started = monotonic_ms()
        hierarchy = self._client.read_data("company_hierarchy", {})
        divisions = self.sync_divisions(hierarchy)
        sections = self.sync_sections(hierarchy)
        employees = self.sync_employees(self._client.read_data("employee", {}))

        result = {
            "divisions": divisions.to_dict(),
            "sections": sections.to_dict(),
            "employees": employees.to_dict(),
            "durationMs": elapsed_ms(started),
        }
        if self._activity:
            self._activity.log_activity(
                activity_type=ActivityType.HRIS_SYNCED,
                title="HRIS sync completed",
                description=(
                    f"divisions={divisions.synced} sections={sections.synced} "
                    f"employees={employees.synced} failed="
                    f"{divisions.failed + sections.failed + employees.failed}"
                ),
                entity_type="Sync",
                actor=actor,
            )
        return result
