from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ConflictError, 400),
    (ValidationError, 400),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def error_response(exc: DomainError):
    return jsonify({"error": str(exc)}), status_for(exc)


def internal_error(exc: Exception):
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    return jsonify({"error": str(exc) or exc.__class__.__name__}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
