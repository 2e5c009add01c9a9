from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.hris_admin.hris_admin.core.exceptions import DuplicateError, NotFoundError, ValidationError
from src.hris_admin.hris_admin.organization.model import Division, Section, SubSection
from src.hris_admin.hris_admin.organization.service import (
    DivisionService,
    SectionService,
    SubSectionService,
    section_code_from_name,
)


class InMemoryDivisions:
    def __init__(self):
        self.items: dict[int, Division] = {}
        self.employees_by_code: dict[str, int] = {}

    def list_all(self, *, search=None, is_active=None):
        return list(self.items.values())

    def get_by_id(self, division_id: int) -> Optional[Division]:
        return self.items.get(division_id)

    def get_by_code(self, code: str):
        return next((d for d in self.items.values() if d.code == code), None)

    def get_by_name(self, name: str):
        return next((d for d in self.items.values() if d.name == name), None)

    def create(self, *, code: str, name: str) -> int:
        new_id = len(self.items) + 1
        self.items[new_id] = Division(division_id=new_id, code=code, name=name)
        return new_id

    def update(self, division_id: int, *, code: str, name: str) -> bool:
        self.items[division_id] = replace(self.items[division_id], code=code, name=name)
        return True

    def set_active(self, division_id: int, *, is_active: bool) -> bool:
        self.items[division_id] = replace(self.items[division_id], is_active=is_active)
        return True

    def delete(self, division_id: int) -> bool:
        return self.items.pop(division_id, None) is not None

    def count_employees(self, code: str) -> int:
        return self.employees_by_code.get(code, 0)


class InMemorySections:
    def __init__(self):
        self.items: dict[int, Section] = {}

    def list_all(self, *, division_id=None):
        return [s for s in self.items.values() if division_id is None or s.division_id == division_id]

    def get_by_id(self, section_id: int):
        return self.items.get(section_id)

    def get_by_code(self, *, division_id: int, code: str):
        return next((s for s in self.items.values() if s.division_id == division_id and s.code == code), None)

    def create(self, *, division_id, code, name, description) -> int:
        new_id = len(self.items) + 1
        self.items[new_id] = Section(
            section_id=new_id, division_id=division_id, code=code, name=name, description=description
        )
        return new_id

    def update(self, section_id, *, code, name, description) -> bool:
        self.items[section_id] = replace(self.items[section_id], code=code, name=name, description=description)
        return True

    def delete(self, section_id) -> bool:
        return self.items.pop(section_id, None) is not None

    def count_by_division(self, division_id: int) -> int:
        return len(self.list_all(division_id=division_id))


class InMemorySubSections:
    def __init__(self):
        self.items: dict[int, SubSection] = {}

    def list_all(self, *, section_id=None):
        return [s for s in self.items.values() if section_id is None or s.section_id == section_id]

    def get_by_id(self, subsection_id):
        return self.items.get(subsection_id)

    def get_by_code(self, *, section_id, code):
        return next((s for s in self.items.values() if s.section_id == section_id and s.code == code), None)

    def create(self, *, division, section, code, name) -> int:
        new_id = len(self.items) + 1
        self.items[new_id] = SubSection(
            subsection_id=new_id,
            division_id=division.division_id,
            division_code=division.code,
            division_name=division.name,
            section_id=section.section_id,
            section_code=section.code,
            section_name=section.name,
            code=code,
            name=name,
        )
        return new_id

    def update(self, subsection_id, *, code, name) -> bool:
        self.items[subsection_id] = replace(self.items[subsection_id], code=code, name=name)
        return True

    def delete(self, subsection_id) -> bool:
        return self.items.pop(subsection_id, None) is not None

    def count_by_section(self, section_id) -> int:
        return len(self.list_all(section_id=section_id))


class RecordingActivity:
    def __init__(self):
        self.logged: list[dict] = []

    def log_activity(self, **kwargs):
        self.logged.append(kwargs)


@pytest.fixture()
def org():
    divisions, sections, subsections = InMemoryDivisions(), InMemorySections(), InMemorySubSections()
    activity = RecordingActivity()

    class Org:
        pass

    o = Org()
    o.divisions, o.sections, o.subsections, o.activity = divisions, sections, subsections, activity
    o.division_service = DivisionService(divisions, sections, activity)
    o.section_service = SectionService(divisions, sections, subsections, activity)
    o.subsection_service = SubSectionService(divisions, sections, subsections, activity)
    return o


def test_division_code_is_uppercased_and_audited(org):
    division = org.division_service.create_division(code=" ops ", name="Operations", actor={"user_name": "x"})

    assert division.code == "OPS"
    assert org.activity.logged[0]["activity_type"].value == "division_created"
    assert org.activity.logged[0]["entity_id"] == division.division_id


def test_duplicate_division_code_or_name_rejected(org):
    org.division_service.create_division(code="OPS", name="Operations")

    with pytest.raises(DuplicateError):
        org.division_service.create_division(code="ops", name="Other")
    with pytest.raises(DuplicateError):
        org.division_service.create_division(code="NEW", name="Operations")


def test_division_update_may_keep_its_own_code(org):
    d = org.division_service.create_division(code="OPS", name="Operations")

    updated = org.division_service.update_division(d.division_id, name="Ops & Logistics")

    assert updated.code == "OPS"
    assert updated.name == "Ops & Logistics"


def test_toggle_status_flips_active(org):
    d = org.division_service.create_division(code="OPS", name="Operations")

    assert org.division_service.toggle_status(d.division_id).is_active is False
    assert org.division_service.toggle_status(d.division_id).is_active is True


def test_delete_division_refused_while_sections_exist(org):
    d = org.division_service.create_division(code="OPS", name="Operations")
    org.section_service.create_section(division_id=d.division_id, name="Yard")

    with pytest.raises(ValidationError, match="1 sections"):
        org.division_service.delete_division(d.division_id)
    assert d.division_id in org.divisions.items


def test_delete_division_refused_while_employees_exist(org):
    d = org.division_service.create_division(code="OPS", name="Operations")
    org.divisions.employees_by_code["OPS"] = 3

    with pytest.raises(ValidationError, match="3 employees"):
        org.division_service.delete_division(d.division_id)


def test_delete_empty_division(org):
    d = org.division_service.create_division(code="OPS", name="Operations")

    org.division_service.delete_division(d.division_id)

    assert org.divisions.items == {}
    with pytest.raises(NotFoundError):
        org.division_service.get_division(d.division_id)


def test_section_code_generated_from_name():
    assert section_code_from_name("Container yard north") == "CONTAINER_"
    assert section_code_from_name("  hr  ") == "HR"


def test_section_code_unique_within_division_only(org):
    ops = org.division_service.create_division(code="OPS", name="Operations")
    fin = org.division_service.create_division(code="FIN", name="Finance")
    org.section_service.create_section(division_id=ops.division_id, name="Admin", code="adm")

    with pytest.raises(DuplicateError):
        org.section_service.create_section(division_id=ops.division_id, name="Admin 2", code="ADM")
    other = org.section_service.create_section(division_id=fin.division_id, name="Admin", code="ADM")

    assert other.code == "ADM"


def test_section_name_limit_applies_on_update(org):
    d = org.division_service.create_division(code="OPS", name="Operations")
    s = org.section_service.create_section(division_id=d.division_id, name="Yard")

    with pytest.raises(ValidationError):
        org.section_service.update_section(s.section_id, name="x" * 101)
    assert org.sections.items[s.section_id].name == "Yard"

    renamed = org.section_service.update_section(s.section_id, name="y" * 100)
    assert renamed.name == "y" * 100


def test_section_in_missing_division_is_404(org):
    with pytest.raises(NotFoundError):
        org.section_service.create_section(division_id=99, name="Yard")


def test_delete_section_refused_while_subsections_exist(org):
    d = org.division_service.create_division(code="OPS", name="Operations")
    s = org.section_service.create_section(division_id=d.division_id, name="Yard")
    org.subsection_service.create_subsection(section_id=s.section_id, name="Gate A", code="ga")

    with pytest.raises(ValidationError):
        org.section_service.delete_section(s.section_id)


def test_subsection_copies_parent_snapshot(org):
    d = org.division_service.create_division(code="OPS", name="Operations")
    s = org.section_service.create_section(division_id=d.division_id, name="Yard", code="YRD")

    sub = org.subsection_service.create_subsection(section_id=s.section_id, name="Gate A", code="ga")

    body = sub.to_dict()
    assert body["parentDivision"]["division_code"] == "OPS"
    assert body["parentSection"]["hie_code"] == "YRD"
    assert body["subSection"] == {"sub_hie_code": "GA", "sub_hie_name": "Gate A"}


def test_subsection_code_unique_within_section(org):
    d = org.division_service.create_division(code="OPS", name="Operations")
    s = org.section_service.create_section(division_id=d.division_id, name="Yard")
    org.subsection_service.create_subsection(section_id=s.section_id, name="Gate A", code="GA")

    with pytest.raises(DuplicateError):
        org.subsection_service.create_subsection(section_id=s.section_id, name="Gate B", code="ga")


def test_subsection_requires_name_and_code(org):
    with pytest.raises(ValidationError):
        org.subsection_service.create_subsection(section_id=1, name="", code="GA")
    with pytest.raises(ValidationError):
        org.subsection_service.create_subsection(section_id=1, name="Gate", code=" ")


def test_subsection_update_needs_a_field(org):
    with pytest.raises(ValidationError):
        org.subsection_service.update_subsection(1)
