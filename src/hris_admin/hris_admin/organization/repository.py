from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Division, Section, SubSection


class DivisionRepository(Protocol):
    def list_all(self, *, search: Optional[str] = None, is_active: Optional[bool] = None) -> Sequence[Division]:
        raise NotImplementedError

    def get_by_id(self, division_id: int) -> Optional[Division]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Division]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Division]:
        raise NotImplementedError

    def create(self, *, code: str, name: str) -> int:
        raise NotImplementedError

    def update(self, division_id: int, *, code: str, name: str) -> bool:
        raise NotImplementedError

    def set_active(self, division_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete(self, division_id: int) -> bool:
        raise NotImplementedError

    def count_employees(self, code: str) -> int:
        raise NotImplementedError


class SectionRepository(Protocol):
    def list_all(self, *, division_id: Optional[int] = None) -> Sequence[Section]:
        raise NotImplementedError

    def get_by_id(self, section_id: int) -> Optional[Section]:
        raise NotImplementedError

    def get_by_code(self, *, division_id: int, code: str) -> Optional[Section]:
        raise NotImplementedError

    def create(self, *, division_id: int, code: str, name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, section_id: int, *, code: str, name: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, section_id: int) -> bool:
        raise NotImplementedError

    def count_by_division(self, division_id: int) -> int:
        raise NotImplementedError


class SubSectionRepository(Protocol):
    def list_all(self, *, section_id: Optional[int] = None) -> Sequence[SubSection]:
        raise NotImplementedError

    def get_by_id(self, subsection_id: int) -> Optional[SubSection]:
        raise NotImplementedError

    def get_by_code(self, *, section_id: int, code: str) -> Optional[SubSection]:
        raise NotImplementedError

    def create(
        self,
        *,
        division: Division,
        section: Section,
        code: str,
        name: str,
    ) -> int:
        raise NotImplementedError

    def update(self, subsection_id: int, *, code: str, name: str) -> bool:
        raise NotImplementedError

    def delete(self, subsection_id: int) -> bool:
        raise NotImplementedError

    def count_by_section(self, section_id: int) -> int:
        raise NotImplementedError
