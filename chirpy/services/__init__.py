"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`chirpy.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``chirpy.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Identity service (from ``chirpy.services.identity``)
    * :class:`IdentityService`
    * DTOs: :class:`UserRegisterIn`, :class:`UserUpdateIn`, :class:`UserPublicOut`

- Session service and guard (from ``chirpy.services.auth``)
    * :class:`SessionService`, :class:`AuthorizationGuard`
    * DTOs: :class:`LoginIn`, :class:`LoginOut`, :class:`RefreshIn`,
      :class:`RevokeIn`, :class:`AccessTokenOut`, :class:`AuthTokenConfig`

- Chirp service (from ``chirpy.services.chirps``)
    * :class:`ChirpService`
    * DTOs: :class:`ChirpCreateIn`, :class:`ChirpListIn`, :class:`ChirpOut`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth import (
    AccessTokenOut,
    AuthorizationGuard,
    AuthTokenConfig,
    LoginIn,
    LoginOut,
    RefreshIn,
    RevokeIn,
    SessionService,
)
from .chirps import ChirpCreateIn, ChirpListIn, ChirpOut, ChirpService
from .identity import IdentityService, UserPublicOut, UserRegisterIn, UserUpdateIn

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Identity
    "IdentityService",
    "UserRegisterIn",
    "UserUpdateIn",
    "UserPublicOut",
    # Sessions
    "SessionService",
    "AuthorizationGuard",
    "AuthTokenConfig",
    "LoginIn",
    "LoginOut",
    "RefreshIn",
    "RevokeIn",
    "AccessTokenOut",
    # Chirps
    "ChirpService",
    "ChirpCreateIn",
    "ChirpListIn",
    "ChirpOut",
]
