from __future__ import annotations

from flask import Flask, request

from ..common.auth import current_actor, login_required, roles_required
from ..common.responses import ok
from ..common.validators import parse_bool
from ..core.enums import ADMIN_ROLES
from ..container import Container


def _body() -> dict:
    return request.get_json(silent=True) or {}


def register(app: Flask, container: Container) -> None:
    divisions = container.division_service
    sections = container.section_service
    subsections = container.subsection_service

    # Divisions

    @app.get("/api/divisions", endpoint="divisions_list")
    @login_required
    def list_divisions():
        items = divisions.list_divisions(
            search=request.args.get("search") or None,
            is_active=parse_bool(request.args.get("status")),
        )
        return ok([d.to_dict() for d in items], count=len(items))

    @app.get("/api/divisions/<int:division_id>", endpoint="divisions_get")
    @login_required
    def get_division(division_id: int):
        return ok(divisions.get_division(division_id).to_dict())

    @app.get("/api/divisions/<int:division_id>/sections", endpoint="divisions_sections")
    @login_required
    def division_sections(division_id: int):
        items = divisions.list_sections(division_id)
        return ok([s.to_dict() for s in items], count=len(items))

    @app.post("/api/divisions", endpoint="divisions_create")
    @roles_required(*ADMIN_ROLES)
    def create_division():
        data = _body()
        division = divisions.create_division(code=data.get("code"), name=data.get("name"), actor=current_actor())
        return ok(division.to_dict(), 201, message="Division created successfully")

    @app.put("/api/divisions/<int:division_id>", endpoint="divisions_update")
    @roles_required(*ADMIN_ROLES)
    def update_division(division_id: int):
        data = _body()
        division = divisions.update_division(
            division_id, code=data.get("code"), name=data.get("name"), actor=current_actor()
        )
        return ok(division.to_dict(), message="Division updated successfully")

    @app.patch("/api/divisions/<int:division_id>/toggle-status", endpoint="divisions_toggle")
    @roles_required(*ADMIN_ROLES)
    def toggle_division(division_id: int):
        division = divisions.toggle_status(division_id, actor=current_actor())
        state = "activated" if division.is_active else "deactivated"
        return ok(division.to_dict(), message=f"Division {state} successfully")

    @app.delete("/api/divisions/<int:division_id>", endpoint="divisions_delete")
    @roles_required(*ADMIN_ROLES)
    def delete_division(division_id: int):
        divisions.delete_division(division_id, actor=current_actor())
        return ok(message="Division deleted successfully")

    # Sections

    @app.get("/api/sections", endpoint="sections_list")
    @login_required
    def list_sections():
        division_id = request.args.get("division_id", type=int)
        items = sections.list_sections(division_id=division_id)
        return ok([s.to_dict() for s in items], count=len(items))

    @app.get("/api/sections/<int:section_id>", endpoint="sections_get")
    @login_required
    def get_section(section_id: int):
        return ok(sections.get_section(section_id).to_dict())

    @app.post("/api/sections", endpoint="sections_create")
    @roles_required(*ADMIN_ROLES)
    def create_section():
        data = _body()
        section = sections.create_section(
            division_id=data.get("division_id") or data.get("divisionId"),
            name=data.get("name"),
            code=data.get("code"),
            description=data.get("description"),
            actor=current_actor(),
        )
        return ok(section.to_dict(), 201, message="Section created successfully")

    @app.put("/api/sections/<int:section_id>", endpoint="sections_update")
    @roles_required(*ADMIN_ROLES)
    def update_section(section_id: int):
        data = _body()
        section = sections.update_section(
            section_id,
            name=data.get("name"),
            code=data.get("code"),
            description=data.get("description"),
            actor=current_actor(),
        )
        return ok(section.to_dict(), message="Section updated successfully")

    @app.delete("/api/sections/<int:section_id>", endpoint="sections_delete")
    @roles_required(*ADMIN_ROLES)
    def delete_section(section_id: int):
        sections.delete_section(section_id, actor=current_actor())
        return ok(message="Section deleted successfully")

    # Sub-sections

    @app.get("/api/subsections", endpoint="subsections_list")
    @login_required
    def list_subsections():
        section_id = request.args.get("sectionId", type=int)
        items = subsections.list_subsections(section_id=section_id)
        return ok([s.to_dict() for s in items], count=len(items))

    @app.get("/api/subsections/<int:subsection_id>", endpoint="subsections_get")
    @login_required
    def get_subsection(subsection_id: int):
        return ok(subsections.get_subsection(subsection_id).to_dict())

    @app.post("/api/subsections", endpoint="subsections_create")
    @roles_required(*ADMIN_ROLES)
    def create_subsection():
        data = _body()
        sub = subsections.create_subsection(
            section_id=data.get("sectionId") or data.get("section_id"),
            name=data.get("name") or data.get("sub_hie_name"),
            code=data.get("code") or data.get("sub_hie_code"),
            actor=current_actor(),
        )
        return ok(sub.to_dict(), 201, message="Sub-section created")

    @app.put("/api/subsections/<int:subsection_id>", endpoint="subsections_update")
    @roles_required(*ADMIN_ROLES)
    def update_subsection(subsection_id: int):
        data = _body()
        sub = subsections.update_subsection(
            subsection_id,
            name=data.get("name") or data.get("sub_hie_name"),
            code=data.get("code") or data.get("sub_hie_code"),
            actor=current_actor(),
        )
        return ok(sub.to_dict(), message="Sub-section updated")

    @app.delete("/api/subsections/<int:subsection_id>", endpoint="subsections_delete")
    @roles_required(*ADMIN_ROLES)
    def delete_subsection(subsection_id: int):
        subsections.delete_subsection(subsection_id, actor=current_actor())
        return ok(message="Sub-section deleted")
