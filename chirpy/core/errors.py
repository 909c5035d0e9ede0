"""RFC 7807 problem responses for every error leaving the application."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from chirpy.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Stable machine codes for statuses raised by Werkzeug routing.
_STATUS_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    500: "internal_server_error",
    503: "service_unavailable",
}


class APIError(Exception):
    """
    An error that renders as a problem document.

    Parameters
    ----------
    message : str
        ``detail`` shown to clients; must be safe to disclose.
    status_code : int, optional
        HTTP status, ``400`` by default.
    code : str, optional
        Stable snake_case identifier for clients to branch on.
    details : dict[str, Any] | None, optional
        Extra structured data, e.g. per-field validation messages.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem(self.status_code, self.code, self.message, self.details)


class BadRequest(APIError):
    def __init__(self, message: str = "Bad request", code: str = "bad_request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code=code)


class Unauthorized(APIError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class Forbidden(APIError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class InternalError(APIError):
    """500 whose real cause stays in the logs."""

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
        )


def problem(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a Problem Details payload for the current request.

    :param status: HTTP status code.
    :param code: Stable error code.
    :param message: Client-safe ``detail``.
    :param details: Optional structured extras.
    :returns: Dictionary ready for :func:`flask.jsonify`.
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def _respond(body: dict[str, Any], *, exc_info: Any = None) -> tuple[Response, int]:
    status = body["status"]
    if status >= 500:
        log.error(
            "%s %s: %s", status, body["code"], body["detail"], exc_info=exc_info or True
        )
    else:
        log.warning("%s %s: %s", status, body["code"], body["detail"])
    resp = jsonify(body)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, status


def init_app(app: Flask) -> None:
    """
    Register the error handlers.

    Notes
    -----
    - Service exceptions go through
      :func:`chirpy.services._shared.base.translate_exceptions`; anything it
      does not map becomes a 500.
    - Driver errors never reach clients: integrity failures are a 409,
      connectivity failures a 503.
    - 4xx are logged as warnings, 5xx as errors with the traceback.
    """
    from chirpy.services._shared.base import translate_exceptions
    from chirpy.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(err.to_problem(), exc_info=err.__cause__ or err)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = translate_exceptions(err)
        if not isinstance(translated, APIError):
            translated = InternalError()
        return _respond(translated.to_problem(), exc_info=err)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        body = problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )
        return _respond(body)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = _STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        return _respond(problem(status, code, message), exc_info=err)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return _respond(problem(HTTPStatus.CONFLICT, "conflict", "Resource conflict"))

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        body = problem(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
        )
        return _respond(body, exc_info=err)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        body = problem(
            HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"
        )
        return _respond(body, exc_info=err)
