from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, StoreUnavailable

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def outcome_payload(outcome) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "message": outcome.message,
        "action": outcome.action.value,
        "warning": bool(outcome.warning),
    }
    record = outcome.record
    if record is not None:
        payload["status"] = record.status.value
        payload["attended_on"] = record.attended_on.isoformat()
        payload["check_in_time"] = record.check_in_time.isoformat() if record.check_in_time else None
        payload["check_out_time"] = record.check_out_time.isoformat() if record.check_out_time else None
    return payload


def register_error_handlers(app: Flask) -> None:
    """Every failure leaves the API as `{"error": "..."}` with a matching status."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, StoreUnavailable):
            logger.error("Store failure on %s %s: %s", request.method, request.path, e)
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Erreur interne du serveur"}), 500
