from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.web import api_errors, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Member
from .service import NewMember


def member_json(m: Member) -> dict:
    return {
        "member_id": m.member_id,
        "name": m.name,
        "unit_id": m.unit_id,
        "nucleus_id": m.nucleus_id,
        "active": m.active,
        "phone": m.phone,
    }


def _optional_text(data: dict, key: str, where: str = "") -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value or None
    raise ValidationError(f"{where}{key} must be a string")


def _text(data: dict, key: str, where: str = "") -> str:
    return _optional_text(data, key, where) or ""


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    @login_required
    @api_errors
    def members_list():
        unit_id = request.args.get("unit_id") or None
        members = container.members_repo.list_members(unit_id)
        return jsonify({"members": [member_json(m) for m in members]})

    @app.route("/api/members", methods=["POST"], endpoint="members_save")
    @login_required
    @api_errors
    def members_save():
        data = json_body()
        active = data.get("active", True)
        if not isinstance(active, bool):
            raise ValidationError("active must be a boolean")

        member = container.member_service.save(
            Member(
                member_id=_text(data, "member_id"),
                name=_text(data, "name"),
                unit_id=_text(data, "unit_id"),
                nucleus_id=_optional_text(data, "nucleus_id"),
                active=active,
                phone=_optional_text(data, "phone"),
            )
        )
        return jsonify({"success": True, "member": member_json(member)})

    @app.route("/api/members/import", methods=["POST"], endpoint="members_import")
    @login_required
    @api_errors
    def members_import():
        data = json_body()
        rows = data.get("members")
        if not isinstance(rows, list):
            raise ValidationError("members must be a list")
        default_unit = _text(data, "unit_id")

        new_members = []
        for i, row in enumerate(rows, start=1):
            where = f"Row {i}: "
            if not isinstance(row, dict):
                raise ValidationError(f"{where}expected an object")
            new_members.append(
                NewMember(
                    name=_text(row, "name", where),
                    unit_id=_text(row, "unit_id", where) or default_unit,
                    nucleus_id=_optional_text(row, "nucleus_id", where),
                    phone=_optional_text(row, "phone", where),
                )
            )

        created = container.member_service.import_members(new_members)
        return jsonify({"success": True, "members": [member_json(m) for m in created]})
