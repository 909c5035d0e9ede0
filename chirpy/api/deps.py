"""Shared API helpers: responses, timing, authentication and service wiring."""

from __future__ import annotations

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from chirpy.infra import get_adapters
from chirpy.services import (
    AuthorizationGuard,
    AuthTokenConfig,
    ChirpService,
    IdentityService,
    ServiceContext,
    SessionService,
)

F = TypeVar("F", bound=Callable[..., Any])


# ------------------------------- Responses ----------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def no_content() -> Response:
    return Response(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ---------------------------- Service builders ------------------------------


def _ctx() -> ServiceContext:
    return ServiceContext(
        actor_id=g.get("identity_id"),
        request_id=g.get("request_id"),
    )


def token_config() -> AuthTokenConfig:
    """Build the token settings from the active configuration."""

    cfg = current_app.config
    return AuthTokenConfig(
        signing_secret=cfg["JWT_SECRET"],
        access_ttl=cfg["ACCESS_TOKEN_TTL"],
        refresh_ttl=cfg["REFRESH_TOKEN_TTL"],
    )


def auth_guard() -> AuthorizationGuard:
    return AuthorizationGuard(get_adapters().codec)


def identity_service() -> IdentityService:
    adapters = get_adapters()
    return IdentityService(hasher=adapters.hasher, store=adapters.store, ctx=_ctx())


def session_service() -> SessionService:
    adapters = get_adapters()
    return SessionService(
        hasher=adapters.hasher,
        codec=adapters.codec,
        store=adapters.store,
        token_cfg=token_config(),
        ctx=_ctx(),
    )


def chirp_service() -> ChirpService:
    return ChirpService(ctx=_ctx())


# ------------------------------ Authentication ------------------------------


def current_identity() -> uuid.UUID:
    """Return the identity authenticated by :func:`require_auth`."""

    return cast(uuid.UUID, g.identity_id)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid bearer access token.

    The resolved identity is stored on ``g.identity_id``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.identity_id = auth_guard().authenticate(
            request.headers, current_app.config["JWT_SECRET"]
        )
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
