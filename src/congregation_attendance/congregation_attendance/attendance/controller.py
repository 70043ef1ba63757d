from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, now_local, parse_iso_date
from ..common.web import api_errors, json_body, login_required
from ..container import Container
from ..schedules.service import resolve_selected_date
from .model import AttendanceRecord
from .service import DaySummary, RosterEntry


def record_json(r: Optional[AttendanceRecord]) -> Optional[dict]:
    if r is None:
        return None
    return {
        "record_id": r.record_id,
        "member_id": r.member_id,
        "unit_id": r.unit_id,
        "date": format_iso_date(r.service_date),
        "status": r.status.value,
        "justification_text": r.justification_text,
        "registered_at": r.registered_at.isoformat(),
    }


def roster_json(e: RosterEntry) -> dict:
    return {
        "member_id": e.member.member_id,
        "name": e.member.name,
        "nucleus_id": e.member.nucleus_id,
        "status": e.status_label,
        "justification_text": e.justification_text,
    }


def summary_json(s: DaySummary) -> dict:
    return {
        "total": s.total,
        "present": s.present,
        "absent": s.absent,
        "justified": s.justified,
        "not_registered": s.not_registered,
        "presence_rate": round(s.presence_rate, 2),
        "completed": s.completed,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/units/<unit_id>/register", methods=["GET"], endpoint="register_view")
    @login_required
    @api_errors
    def register_view(unit_id: str):
        unit = container.calendar_service.get_unit(unit_id)
        raw_date = request.args.get("date")
        selected = parse_iso_date(raw_date) if raw_date else now_local().date()
        selected = resolve_selected_date(selected, unit.service_days)

        status = request.args.get("status")
        roster = container.register_service.roster(
            unit_id,
            selected,
            search=request.args.get("q"),
            nucleus_id=request.args.get("nucleus") or None,
            status=status,
            filter_status=bool(status) and status != "all",
        )
        return jsonify(
            {
                "unit_id": unit_id,
                "date": format_iso_date(selected),
                "members": [roster_json(e) for e in roster],
                "summary": summary_json(container.register_service.day_summary(unit_id, selected)),
            }
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_set")
    @login_required
    @api_errors
    def attendance_set():
        data = json_body()
        record = container.register_service.set_attendance(
            str(data.get("member_id") or ""),
            str(data.get("date") or ""),
            str(data.get("unit_id") or ""),
            data.get("status"),
            data.get("justification_text"),
        )
        return jsonify({"success": True, "record": record_json(record)})

    @app.route("/api/attendance/justification", methods=["POST"], endpoint="attendance_justify")
    @login_required
    @api_errors
    def attendance_justify():
        data = json_body()
        record = container.register_service.update_justification(
            str(data.get("member_id") or ""),
            str(data.get("date") or ""),
            str(data.get("unit_id") or ""),
            data.get("justification_text"),
        )
        return jsonify({"success": True, "record": record_json(record)})

    @app.route("/api/units/<unit_id>/register/finalize", methods=["POST"], endpoint="register_finalize")
    @login_required
    @api_errors
    def register_finalize(unit_id: str):
        data = json_body()
        container.calendar_service.get_unit(unit_id)
        written = container.register_service.finalize_absences(unit_id, str(data.get("date") or ""))
        return jsonify({"success": True, "marked_absent": len(written)})
