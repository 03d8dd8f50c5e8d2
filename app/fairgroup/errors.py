"""
Error taxonomy for the JSON API.

Services raise these; the handlers registered by `register_error_handlers`
turn them into `{"error": "..."}` responses. Anything else is a 500.
"""
from __future__ import annotations

from typing import Any

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, *, details: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["errors"] = self.details
        return body


class ValidationError(ApiError):
    """Malformed or missing fields in a request body."""

    status_code = 400


class InvalidOperation(ApiError):
    """Well-formed request that the current state does not allow."""

    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class TooManyRequests(ApiError):
    status_code = 429


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):  # type: ignore[no-redef]
        if isinstance(e, Forbidden):
            app.logger.warning("Forbidden: %s request_id=%s", e.message, getattr(g, "request_id", None))
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):  # type: ignore[no-redef]
        return jsonify({"error": e.description or e.name}), e.code or 500

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):  # type: ignore[no-redef]
        # Full trace goes to the log only; the caller gets a generic message.
        app.logger.exception("Unhandled error (request_id=%s)", getattr(g, "request_id", None))
        return jsonify({"error": "Server error"}), 500
