from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, normalize_year_month, now_local, shift_month, year_month_of
from ..common.web import api_errors, login_required
from ..container import Container
from ..schedules.service import month_entry_date
from .model import Unit


def unit_json(u: Unit) -> dict:
    return {
        "unit_id": u.unit_id,
        "name": u.name,
        "service_days": list(u.service_days),
        "pastor_phone": u.pastor_phone,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/units", methods=["GET"], endpoint="units_list")
    @login_required
    @api_errors
    def units_list():
        return jsonify(
            {
                "units": [unit_json(u) for u in container.units_repo.list_units()],
                "nuclei": [
                    {"nucleus_id": n.nucleus_id, "name": n.name, "color": n.color}
                    for n in container.units_repo.list_nuclei()
                ],
            }
        )

    @app.route("/api/units/<unit_id>/calendar", methods=["GET"], endpoint="unit_calendar")
    @login_required
    @api_errors
    def unit_calendar(unit_id: str):
        period = normalize_year_month(request.args.get("month") or year_month_of(now_local().date()))
        cal = container.calendar_service.month(unit_id, period)
        unit = container.calendar_service.get_unit(unit_id)

        days = []
        for d in cal.dates:
            summary = container.register_service.day_summary(unit_id, d)
            days.append({"date": format_iso_date(d), "completed": summary.completed})

        prev_period = shift_month(period, -1)
        next_period = shift_month(period, 1)
        return jsonify(
            {
                "unit_id": cal.unit_id,
                "period": cal.period,
                "dates": days,
                "previous": {
                    "period": prev_period,
                    "entry_date": format_iso_date(month_entry_date(prev_period, unit.service_days)),
                },
                "next": {
                    "period": next_period,
                    "entry_date": format_iso_date(month_entry_date(next_period, unit.service_days)),
                },
            }
        )
