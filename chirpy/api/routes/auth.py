"""Session endpoints: login, access-token refresh and refresh-token revocation."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request

from chirpy.api.deps import auth_guard, json_response, no_content, session_service, timing
from chirpy.schemas import LoginResponseSchema, LoginSchema, TokenResponseSchema
from chirpy.services import LoginIn, RefreshIn, RevokeIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
token_schema = TokenResponseSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access and a refresh token."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = session_service().login(LoginIn(**data))
    body = login_response_schema.dump(
        {
            **asdict(result.user),
            "token": result.access_token,
            "refresh_token": result.refresh_token,
        }
    )
    return json_response({"data": body})


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the bearer refresh token for a new access token."""

    token = auth_guard().extract_bearer(request.headers)
    result = session_service().refresh(RefreshIn(token=token))
    return json_response({"data": token_schema.dump(result)})


@bp.post("/revoke")
@timing
def revoke():
    """Revoke the bearer refresh token. Unknown tokens are accepted silently."""

    token = auth_guard().extract_bearer(request.headers)
    session_service().revoke(RevokeIn(token=token))
    return no_content()
