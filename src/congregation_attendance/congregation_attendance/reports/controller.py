from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, year_month_of
from ..common.web import api_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .service import MemberFrequency


def frequency_json(f: MemberFrequency) -> dict:
    return {
        "member_id": f.member.member_id,
        "name": f.member.name,
        "nucleus_id": f.member.nucleus_id,
        "presences": f.stats.presences,
        "absences": f.stats.absences,
        "justifications": f.stats.justifications,
        "unregistered": f.stats.unregistered,
        "percent": round(f.stats.percent, 2),
        "category": f.category.tier.value,
        "category_label": f.category.label,
    }


def _weekdays_arg(raw: str | None):
    if not raw:
        return None
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise ValidationError(f"Invalid schedule: {raw!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/units/<unit_id>/report", methods=["GET"], endpoint="unit_report")
    @login_required
    @api_errors
    def unit_report(unit_id: str):
        period = request.args.get("month") or year_month_of(now_local().date())
        report = container.report_service.monthly_report(
            unit_id,
            period,
            schedule_weekdays=_weekdays_arg(request.args.get("schedule")),
        )
        return jsonify(
            {
                "unit_id": report.unit_id,
                "period": report.period,
                "total_services": report.total_services,
                "average_percent": round(report.average_percent, 2),
                "category_counts": {tier.value: n for tier, n in report.category_counts.items()},
                "members": [frequency_json(f) for f in report.members],
            }
        )
