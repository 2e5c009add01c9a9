from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeFilter


class EmployeeRepository(Protocol):
    def list_page(self, filters: EmployeeFilter, *, limit: int, offset: int) -> tuple[Sequence[Employee], int]:
        """Return one page of employees plus the total matching count."""
        raise NotImplementedError

    def get_by_emp_no(self, emp_no: str) -> Optional[Employee]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def upsert_division(self, *, hie_code: str, hie_name: str, name_sinhala: Optional[str],
                        name_tamil: Optional[str], relationship: Optional[str]) -> None:
        raise NotImplementedError

    def upsert_section(self, *, hie_code: str, hie_name: str, name_sinhala: Optional[str],
                       name_tamil: Optional[str], division_code: Optional[str]) -> None:
        raise NotImplementedError

    def upsert_employee(self, employee: Employee) -> None:
        raise NotImplementedError
