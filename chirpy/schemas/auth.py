"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .user import UserSchema


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class LoginResponseSchema(UserSchema):
    """User representation plus the freshly issued token pair."""

    token = fields.String(required=True)
    refresh_token = fields.String(required=True)


class TokenResponseSchema(Schema):
    """Response payload containing a new access token."""

    token = fields.String(required=True)
