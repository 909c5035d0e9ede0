from .dto import AccessTokenOut, AuthTokenConfig, LoginIn, LoginOut, RefreshIn, RevokeIn
from .guard import AuthorizationGuard
from .service import SessionService

__all__ = [
    "AccessTokenOut",
    "AuthTokenConfig",
    "AuthorizationGuard",
    "LoginIn",
    "LoginOut",
    "RefreshIn",
    "RevokeIn",
    "SessionService",
]
