from __future__ import annotations

import re
from typing import Optional

from ..audit.service import ActivityLogService
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import SECTION_CODE_MAX_LENGTH
from ..core.enums import ActivityType
from ..core.exceptions import DuplicateError, NotFoundError, ValidationError
from .model import Division, Section, SubSection
from .repository import DivisionRepository, SectionRepository, SubSectionRepository


def normalize_code(code: str, field_name: str = "Code") -> str:
    return require_non_empty(code, field_name).upper()


def section_code_from_name(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip().upper())[:SECTION_CODE_MAX_LENGTH]


class DivisionService:
    """Use cases: manage divisions (admin)."""

    def __init__(self, divisions: DivisionRepository, sections: SectionRepository, activity: ActivityLogService):
        self._divisions = divisions
        self._sections = sections
        self._activity = activity

    def list_divisions(self, *, search: Optional[str] = None, is_active: Optional[bool] = None) -> list[Division]:
        return list(self._divisions.list_all(search=search, is_active=is_active))

    def get_division(self, division_id: int) -> Division:
        division = self._divisions.get_by_id(division_id)
        if not division:
            raise NotFoundError("Division not found")
        return division

    def list_sections(self, division_id: int) -> list[Section]:
        self.get_division(division_id)
        return list(self._sections.list_all(division_id=division_id))

    def _check_unique(self, *, code: str, name: str, exclude_id: Optional[int] = None) -> None:
        for existing in (self._divisions.get_by_code(code), self._divisions.get_by_name(name)):
            if existing and existing.division_id != exclude_id:
                raise DuplicateError("Division with this code or name already exists")

    def create_division(self, *, code: str, name: str, actor: Optional[dict] = None) -> Division:
        code = normalize_code(code, "Division code")
        name = require_non_empty(name, "Division name")
        self._check_unique(code=code, name=name)

        division_id = self._divisions.create(code=code, name=name)
        self._activity.log_activity(
            activity_type=ActivityType.DIVISION_CREATED,
            title="Division created",
            description=f"Created division: {name} ({code})",
            entity_type="Division",
            entity_id=division_id,
            actor=actor,
        )
        return Division(division_id=division_id, code=code, name=name)

    def update_division(
        self,
        division_id: int,
        *,
        code: Optional[str] = None,
        name: Optional[str] = None,
        actor: Optional[dict] = None,
    ) -> Division:
        current = self.get_division(division_id)
        new_code = normalize_code(code, "Division code") if code is not None else current.code
        new_name = require_non_empty(name, "Division name") if name is not None else current.name
        self._check_unique(code=new_code, name=new_name, exclude_id=current.division_id)

        self._divisions.update(current.division_id, code=new_code, name=new_name)
        self._activity.log_activity(
            activity_type=ActivityType.DIVISION_UPDATED,
            title="Division updated",
            description=f"Updated division: {new_name} ({new_code})",
            entity_type="Division",
            entity_id=current.division_id,
            actor=actor,
        )
        return Division(division_id=current.division_id, code=new_code, name=new_name, is_active=current.is_active)

    def toggle_status(self, division_id: int, *, actor: Optional[dict] = None) -> Division:
        current = self.get_division(division_id)
        self._divisions.set_active(current.division_id, is_active=not current.is_active)
        state = "Deactivated" if current.is_active else "Activated"
        self._activity.log_activity(
            activity_type=ActivityType.DIVISION_UPDATED,
            title=f"Division {state.lower()}",
            description=f"{state} division: {current.name} ({current.code})",
            entity_type="Division",
            entity_id=current.division_id,
            actor=actor,
        )
        return Division(
            division_id=current.division_id, code=current.code, name=current.name, is_active=not current.is_active
        )

    def delete_division(self, division_id: int, *, actor: Optional[dict] = None) -> None:
        division = self.get_division(division_id)

        employees = self._divisions.count_employees(division.code)
        if employees > 0:
            raise ValidationError(
                f"Cannot delete division with {employees} employees. Please reassign or remove employees first."
            )
        sections = self._sections.count_by_division(division.division_id)
        if sections > 0:
            raise ValidationError(f"Cannot delete division with {sections} sections. Please delete sections first.")

        self._divisions.delete(division.division_id)
        self._activity.log_activity(
            activity_type=ActivityType.DIVISION_DELETED,
            title="Division deleted",
            description=f"Deleted division: {division.name} ({division.code})",
            entity_type="Division",
            entity_id=division.division_id,
            actor=actor,
        )


class SectionService:
    """Use cases: manage sections inside a division."""

    def __init__(
        self,
        divisions: DivisionRepository,
        sections: SectionRepository,
        subsections: SubSectionRepository,
        activity: ActivityLogService,
    ):
        self._divisions = divisions
        self._sections = sections
        self._subsections = subsections
        self._activity = activity

    def list_sections(self, *, division_id: Optional[int] = None) -> list[Section]:
        return list(self._sections.list_all(division_id=division_id))

    def get_section(self, section_id: int) -> Section:
        section = self._sections.get_by_id(section_id)
        if not section:
            raise NotFoundError("Section not found")
        return section

    def _check_unique(self, *, division_id: int, code: str, exclude_id: Optional[int] = None) -> None:
        existing = self._sections.get_by_code(division_id=division_id, code=code)
        if existing and existing.section_id != exclude_id:
            raise DuplicateError("Section code already exists in this division")

    def create_section(
        self,
        *,
        division_id: int,
        name: str,
        code: Optional[str] = None,
        description: Optional[str] = None,
        actor: Optional[dict] = None,
    ) -> Section:
        name = require_max_length(require_non_empty(name, "Section name"), "Section name", 100)
        division = self._divisions.get_by_id(division_id)
        if not division:
            raise NotFoundError("Division not found")

        code = normalize_code(code, "Section code") if code else section_code_from_name(name)
        require_max_length(code, "Section code", SECTION_CODE_MAX_LENGTH)
        self._check_unique(division_id=division.division_id, code=code)

        section_id = self._sections.create(
            division_id=division.division_id, code=code, name=name, description=description
        )
        self._activity.log_activity(
            activity_type=ActivityType.SECTION_CREATED,
            title="Section created",
            description=f"Created section: {name} ({code}) in {division.code}",
            entity_type="Section",
            entity_id=section_id,
            actor=actor,
        )
        return Section(section_id=section_id, division_id=division.division_id, code=code, name=name, description=description)

    def update_section(
        self,
        section_id: int,
        *,
        name: Optional[str] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        actor: Optional[dict] = None,
    ) -> Section:
        current = self.get_section(section_id)
        new_name = (
            require_max_length(require_non_empty(name, "Section name"), "Section name", 100)
            if name is not None
            else current.name
        )
        new_code = normalize_code(code, "Section code") if code is not None else current.code
        require_max_length(new_code, "Section code", SECTION_CODE_MAX_LENGTH)
        new_description = description if description is not None else current.description
        self._check_unique(division_id=current.division_id, code=new_code, exclude_id=current.section_id)

        self._sections.update(current.section_id, code=new_code, name=new_name, description=new_description)
        self._activity.log_activity(
            activity_type=ActivityType.SECTION_UPDATED,
            title="Section updated",
            description=f"Updated section: {new_name} ({new_code})",
            entity_type="Section",
            entity_id=current.section_id,
            actor=actor,
        )
        return Section(
            section_id=current.section_id,
            division_id=current.division_id,
            code=new_code,
            name=new_name,
            description=new_description,
            is_active=current.is_active,
        )

    def delete_section(self, section_id: int, *, actor: Optional[dict] = None) -> None:
        section = self.get_section(section_id)
        subsections = self._subsections.count_by_section(section.section_id)
        if subsections > 0:
            raise ValidationError(
                f"Cannot delete section with {subsections} sub-sections. Please delete sub-sections first."
            )

        self._sections.delete(section.section_id)
        self._activity.log_activity(
            activity_type=ActivityType.SECTION_DELETED,
            title="Section deleted",
            description=f"Deleted section: {section.name} ({section.code})",
            entity_type="Section",
            entity_id=section.section_id,
            actor=actor,
        )


class SubSectionService:
    """Use cases: manage sub-sections inside a section."""

    def __init__(
        self,
        divisions: DivisionRepository,
        sections: SectionRepository,
        subsections: SubSectionRepository,
        activity: ActivityLogService,
    ):
        self._divisions = divisions
        self._sections = sections
        self._subsections = subsections
        self._activity = activity

    def list_subsections(self, *, section_id: Optional[int] = None) -> list[SubSection]:
        return list(self._subsections.list_all(section_id=section_id))

    def get_subsection(self, subsection_id: int) -> SubSection:
        sub = self._subsections.get_by_id(subsection_id)
        if not sub:
            raise NotFoundError("Sub-section not found")
        return sub

    def create_subsection(self, *, section_id: int, name: str, code: str, actor: Optional[dict] = None) -> SubSection:
        name = require_non_empty(name, "Sub-section name")
        code = normalize_code(code, "Sub-section code")

        section = self._sections.get_by_id(section_id)
        if not section:
            raise NotFoundError("Section not found")
        division = self._divisions.get_by_id(section.division_id)
        if not division:
            raise NotFoundError("Division not found")

        if self._subsections.get_by_code(section_id=section.section_id, code=code):
            raise DuplicateError("Sub-section code already exists in this section")

        subsection_id = self._subsections.create(division=division, section=section, code=code, name=name)
        self._activity.log_activity(
            activity_type=ActivityType.SUBSECTION_CREATED,
            title="Sub-section created",
            description=f"Created sub-section: {name} ({code}) in {section.code}",
            entity_type="SubSection",
            entity_id=subsection_id,
            actor=actor,
        )
        return SubSection(
            subsection_id=subsection_id,
            division_id=division.division_id,
            division_code=division.code,
            division_name=division.name,
            section_id=section.section_id,
            section_code=section.code,
            section_name=section.name,
            code=code,
            name=name,
        )

    def update_subsection(
        self,
        subsection_id: int,
        *,
        name: Optional[str] = None,
        code: Optional[str] = None,
        actor: Optional[dict] = None,
    ) -> SubSection:
        if not (name and name.strip()) and not (code and code.strip()):
            raise ValidationError("Nothing to update")

        current = self.get_subsection(subsection_id)
        new_name = name.strip() if name and name.strip() else current.name
        new_code = code.strip().upper() if code and code.strip() else current.code

        existing = self._subsections.get_by_code(section_id=current.section_id, code=new_code)
        if existing and existing.subsection_id != current.subsection_id:
            raise DuplicateError("Sub-section code already exists in this section")

        self._subsections.update(current.subsection_id, code=new_code, name=new_name)
        self._activity.log_activity(
            activity_type=ActivityType.SUBSECTION_UPDATED,
            title="Sub-section updated",
            description=f"Updated sub-section: {new_name} ({new_code})",
            entity_type="SubSection",
            entity_id=current.subsection_id,
            actor=actor,
        )
        return SubSection(
            subsection_id=current.subsection_id,
            division_id=current.division_id,
            division_code=current.division_code,
            division_name=current.division_name,
            section_id=current.section_id,
            section_code=current.section_code,
            section_name=current.section_name,
            code=new_code,
            name=new_name,
        )

    def delete_subsection(self, subsection_id: int, *, actor: Optional[dict] = None) -> None:
        sub = self.get_subsection(subsection_id)
        self._subsections.delete(sub.subsection_id)
        self._activity.log_activity(
            activity_type=ActivityType.SUBSECTION_DELETED,
            title="Sub-section deleted",
            description=f"Deleted sub-section: {sub.name} ({sub.code})",
            entity_type="SubSection",
            entity_id=sub.subsection_id,
            actor=actor,
        )
