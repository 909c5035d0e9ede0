"""User registration and credential update endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from chirpy.api.deps import current_identity, identity_service, json_response, require_auth, timing
from chirpy.schemas import UserCredentialsSchema, UserSchema
from chirpy.services import UserRegisterIn, UserUpdateIn

bp = Blueprint("users", __name__)

credentials_schema = UserCredentialsSchema()
user_schema = UserSchema()


@bp.post("")
@timing
def register():
    """Register a new user and return the created representation."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    user = identity_service().register(UserRegisterIn(**data))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.put("")
@timing
@require_auth
def update_credentials():
    """Replace the authenticated user's email and password."""

    data = credentials_schema.load(request.get_json(silent=True) or {})
    user = identity_service().update_credentials(current_identity(), UserUpdateIn(**data))
    return json_response({"data": user_schema.dump(user)})
