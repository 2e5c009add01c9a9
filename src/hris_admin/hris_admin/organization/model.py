from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Division:
    division_id: int
    code: str
    name: str
    is_active: bool = True

    def to_dict(self) -> dict:
        return {"id": self.division_id, "code": self.code, "name": self.name, "isActive": self.is_active}


@dataclass(frozen=True)
class Section:
    """A section belongs to one division; its code is unique inside that division."""

    section_id: int
    division_id: int
    code: str
    name: str
    description: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.section_id,
            "divisionId": self.division_id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class SubSection:
    """A sub-section with its parent division/section snapshot."""

    subsection_id: int
    division_id: int
    division_code: Optional[str]
    division_name: Optional[str]
    section_id: int
    section_code: Optional[str]
    section_name: Optional[str]
    code: str
    name: str

    def to_dict(self) -> dict:
        return {
            "id": self.subsection_id,
            "parentDivision": {
                "id": self.division_id,
                "division_code": self.division_code or "",
                "division_name": self.division_name or "",
            },
            "parentSection": {
                "id": self.section_id,
                "hie_code": self.section_code or "",
                "hie_name": self.section_name or "",
            },
            "subSection": {"sub_hie_code": self.code, "sub_hie_name": self.name},
        }
