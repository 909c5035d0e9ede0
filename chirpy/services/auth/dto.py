# chirpy/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from chirpy.services.identity.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for minting a new access token.

    :param token: Opaque refresh token taken from the bearer header.
    :type token: str
    """

    token: str


@dataclass(frozen=True, slots=True)
class RevokeIn:
    token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param access_token: Signed access token.
    :type access_token: str
    :param refresh_token: Opaque refresh token.
    :type refresh_token: str
    :param user: Public view of the authenticated user.
    :type user: UserPublicOut
    """

    access_token: str
    refresh_token: str
    user: UserPublicOut


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param signing_secret: HMAC secret for access tokens.
    :type signing_secret: str
    :param access_ttl: Access token lifetime.
    :type access_ttl: timedelta
    :param refresh_ttl: Refresh token lifetime.
    :type refresh_ttl: timedelta
    """

    signing_secret: str
    access_ttl: timedelta = timedelta(hours=1)
    refresh_ttl: timedelta = timedelta(days=60)
