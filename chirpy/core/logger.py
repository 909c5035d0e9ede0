"""JSON logging with per-request correlation ids."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# Optional record attributes promoted into the JSON payload.
EXTRA_KEYS = ("endpoint", "elapsed_ms", "auth_event", "identity_id", "chirp_id", "reason")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, timestamped from the record itself."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id and, once authenticated, the caller."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            if not hasattr(record, "request_id"):
                record.request_id = None
            return True
        record.request_id = ensure_request_id()
        identity_id = g.get("identity_id")
        if identity_id is not None and not hasattr(record, "identity_id"):
            record.identity_id = str(identity_id)
        return True


def ensure_request_id() -> str:
    """Return the id correlating the current request, creating it on first use.

    Inbound ``X-Request-ID`` / ``X-Correlation-ID`` values are reused so
    traces can span services. Outside a request a fresh id is returned.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        request_id = next(
            (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
            str(uuid4()),
        )
        g.request_id = request_id
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout as JSON lines at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def log_auth_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.WARNING,
    **fields: Any,
) -> None:
    """Emit an ``auth.<event>`` record.

    Only identifiers belong in ``fields``; passwords and token material must
    never be logged. ``None`` values are dropped.
    """
    extra: dict[str, Any] = {"auth_event": event}
    extra.update({k: str(v) for k, v in fields.items() if v is not None})
    logger.log(level, "auth.%s", event, extra=extra)


def init_app(app: Flask) -> None:
    """Seed a request id before each request and echo it on every response."""
    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "configure_logging",
    "ensure_request_id",
    "init_app",
    "log_auth_event",
]
