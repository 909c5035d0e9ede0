"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginResponseSchema, LoginSchema, TokenResponseSchema
from .chirp import ChirpCreateSchema, ChirpListQuerySchema, ChirpSchema
from .user import UserCredentialsSchema, UserSchema
from .webhook import USER_UPGRADED, PolkaWebhookSchema

__all__ = [
    "LoginSchema",
    "LoginResponseSchema",
    "TokenResponseSchema",
    "ChirpCreateSchema",
    "ChirpListQuerySchema",
    "ChirpSchema",
    "UserCredentialsSchema",
    "UserSchema",
    "PolkaWebhookSchema",
    "USER_UPGRADED",
]
