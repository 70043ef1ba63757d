from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, year_month_of
from ..common.web import api_errors, json_body, login_required
from ..container import Container
from ..reports.controller import frequency_json
from .escalation import compose_escalation
from .service import FollowUpEntry


def entry_json(e: FollowUpEntry) -> dict:
    out = frequency_json(e.frequency)
    out["follow_up_status"] = e.status.value
    out["last_update"] = e.last_update.isoformat() if e.last_update else None
    return out


def register(app: Flask, container: Container) -> None:
    def _period() -> str:
        return request.args.get("month") or year_month_of(now_local().date())

    @app.route("/api/units/<unit_id>/followups", methods=["GET"], endpoint="followups_board")
    @login_required
    @api_errors
    def followups_board(unit_id: str):
        board = container.follow_up_service.build_board(unit_id, _period())
        return jsonify(
            {
                "unit_id": board.unit_id,
                "period": board.period,
                "active": [entry_json(e) for e in board.active],
                "resolved": [entry_json(e) for e in board.resolved],
            }
        )

    @app.route("/api/followups", methods=["POST"], endpoint="followups_set")
    @login_required
    @api_errors
    def followups_set():
        data = json_body()
        record = container.follow_up_service.set_status(
            str(data.get("member_id") or ""),
            str(data.get("period") or ""),
            str(data.get("status") or ""),
        )
        return jsonify(
            {
                "success": True,
                "member_id": record.member_id,
                "period": record.period,
                "status": record.status.value,
                "last_update": record.last_update.isoformat(),
            }
        )

    @app.route("/api/units/<unit_id>/followups/<member_id>/escalation", methods=["GET"], endpoint="followups_escalation")
    @login_required
    @api_errors
    def followups_escalation(unit_id: str, member_id: str):
        period = _period()
        unit = container.calendar_service.get_unit(unit_id)
        entry = container.follow_up_service.entry_for(unit_id, member_id, period)
        message = compose_escalation(unit, entry, period)
        return jsonify({"text": message.text, "url": message.url})
