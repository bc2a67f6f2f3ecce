from __future__ import annotations

from datetime import date

from flask import Flask, jsonify

from ..core.exceptions import BackendError, ConflictError, DomainError, StaleReferenceError, ValidationError
from .datetime_utils import now_local

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (ConflictError, 409),
    (StaleReferenceError, 404),
    (BackendError, 502),
)


def ok(data=None, status=200, **meta):
    payload = {"success": True, "data": data}
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status


def fail(message="Bad Request", status=400, code=None, errors=None):
    err = {"message": message}
    if code:
        err["code"] = code
    if errors:
        err["errors"] = errors
    return jsonify({"success": False, "error": err}), status


def request_horizon() -> date:
    """Evaluation horizon for a request: today, local time."""
    return now_local().date()


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return fail(str(e), status=status, code=e.kind)
        return fail(str(e), status=400, code=e.kind)
