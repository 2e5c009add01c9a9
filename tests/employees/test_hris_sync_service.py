from datetime import date

import pytest

from src.hris_admin.hris_admin.core.exceptions import NotFoundError
from src.hris_admin.hris_admin.employees.model import EmployeeFilter
from src.hris_admin.hris_admin.employees.service import (
    EmployeeService,
    HrisSyncService,
    employee_from_hris,
    parse_hris_date,
)


class FakeClient:
    def __init__(self, hierarchy, employees):
        self._data = {"company_hierarchy": hierarchy, "employee": employees}

    def read_data(self, collection, filter_array=None, project="", paginate=False):
        return list(self._data[collection])


class InMemoryEmployees:
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.divisions: list[str] = []
        self.sections: dict[str, str] = {}
        self.employees: dict = {}

    def upsert_division(self, *, hie_code, hie_name, name_sinhala, name_tamil, relationship):
        self.divisions.append(hie_code)

    def upsert_section(self, *, hie_code, hie_name, name_sinhala, name_tamil, division_code):
        self.sections[hie_code] = division_code

    def upsert_employee(self, employee):
        if employee.emp_no in self.fail_on:
            raise RuntimeError("bad row")
        self.employees[employee.emp_no] = employee

    def list_page(self, filters, *, limit, offset):
        items = sorted(self.employees.values(), key=lambda e: e.emp_no)
        if filters.division_code:
            items = [e for e in items if e.div_code == filters.division_code]
        return items[offset:offset + limit], len(items)

    def get_by_emp_no(self, emp_no):
        return self.employees.get(emp_no)

    def count_active(self):
        return len(self.employees)


HIERARCHY = [
    {"HIE_CODE": "20", "HIE_NAME": "Finance", "DEF_LEVEL": 3},
    {"HIE_CODE": "3", "HIE_NAME": "Operations", "DEF_LEVEL": "3"},
    {"HIE_CODE": "301", "HIE_NAME_4": "Yard", "HIE_CODE_3": "3", "DEF_LEVEL": 4},
]

EMPLOYEES = [
    {"EMP_NUMBER": "E2", "FULLNAME": "Bee", "ACTIVE_HRM_FLG": 1, "HIE_CODE_3": "3",
     "currentwork": {"designation": "Clerk", "HIE_NAME_3": "Operations"}},
    {"EMP_NUMBER": "E1", "FULLNAME": "Ay", "ACTIVE_HRM_FLG": 1, "DATE_JOINED": "2020-03-04T00:00:00"},
    {"EMP_NUMBER": "E3", "FULLNAME": "Gone", "ACTIVE_HRM_FLG": 0},
    {"EMP_NUMBER": "E4", "FULLNAME": "Broken", "ACTIVE_HRM_FLG": 1},
]


def test_sync_all_counts_and_filters_inactive():
    repo = InMemoryEmployees(fail_on={"E4"})
    svc = HrisSyncService(FakeClient(HIERARCHY, EMPLOYEES), repo)

    result = svc.sync_all()

    assert result["divisions"] == {"synced": 2, "failed": 0}
    assert result["sections"] == {"synced": 1, "failed": 0}
    assert result["employees"] == {"synced": 2, "failed": 1}
    assert repo.divisions == ["3", "20"]
    assert repo.sections == {"301": "3"}
    assert set(repo.employees) == {"E1", "E2"}


def test_employee_mapping_uses_currentwork():
    e = employee_from_hris(EMPLOYEES[0])

    assert e.emp_no == "E2"
    assert e.emp_designation == "Clerk"
    assert e.div_code == "3"
    assert e.div_name == "Operations"


def test_employee_without_number_is_rejected():
    with pytest.raises(ValueError):
        employee_from_hris({"FULLNAME": "Nobody"})


def test_parse_hris_date_formats():
    assert parse_hris_date("2020-03-04T00:00:00") == date(2020, 3, 4)
    assert parse_hris_date({"$date": {"$numberLong": "1583280000000"}}) == date(2020, 3, 4)
    assert parse_hris_date("garbage") is None
    assert parse_hris_date(None) is None


def test_employee_service_paging_and_404():
    repo = InMemoryEmployees()
    HrisSyncService(FakeClient(HIERARCHY, EMPLOYEES[:2]), repo).sync_all()
    svc = EmployeeService(repo)

    page = svc.list_employees(EmployeeFilter(), page="2", limit="1")

    assert [e["empNo"] for e in page["employees"]] == ["E2"]
    assert page["pagination"] == {"page": 2, "limit": 1, "total": 2, "totalPages": 2}
    with pytest.raises(NotFoundError):
        svc.get_employee("E9")
