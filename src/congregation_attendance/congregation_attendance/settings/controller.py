from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import SESSION_FLAG, api_errors, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import CategoryThresholds, Settings


def settings_json(s: Settings) -> dict:
    return {
        "thresholds": {
            "regular": 0,
            "attention": s.thresholds.attention,
            "low": s.thresholds.low,
            "critical": s.thresholds.critical,
        },
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @api_errors
    def login():
        data = json_body()
        container.settings_service.authenticate(str(data.get("password") or ""))
        session[SESSION_FLAG] = True
        return jsonify({"success": True})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    @login_required
    @api_errors
    def settings_get():
        return jsonify(settings_json(container.settings_service.get()))

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    @login_required
    @api_errors
    def settings_update():
        data = json_body()

        thresholds = None
        if "thresholds" in data:
            t = data["thresholds"] or {}
            try:
                thresholds = CategoryThresholds(
                    attention=int(t["attention"]),
                    low=int(t["low"]),
                    critical=int(t["critical"]),
                )
            except (KeyError, TypeError, ValueError):
                raise ValidationError("thresholds needs integer attention, low and critical")

        updated = container.settings_service.update(
            thresholds=thresholds,
            new_password=data.get("password"),
        )
        return jsonify(settings_json(updated))
