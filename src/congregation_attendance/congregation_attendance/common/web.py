"""Helpers shared by the Flask JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

SESSION_FLAG = "authenticated"


def error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(SESSION_FLAG):
            return error("Login required", 401)
        return view(*args, **kwargs)

    return wrapper


def api_errors(view):
    """Translate domain errors into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return error(str(e), 400)
        except AuthenticationError as e:
            return error(str(e), 401)
        except NotFoundError as e:
            return error(str(e), 404)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return error("Internal error", 500)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data
