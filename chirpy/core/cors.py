"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from chirpy.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Configure CORS for the JSON API based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted. When ``CORS_ORIGINS`` is blank or ``"*"`` any origin is
        allowed without credential support.

    Notes
    -----
    Only paths under ``API_BASE_PREFIX`` are covered; the operator surface
    and the file server stay same-origin. The request id header is exposed
    so browser clients can quote it when reporting errors.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]
    api_base = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{api_base}/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
