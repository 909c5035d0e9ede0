"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from chirpy.models.base import as_utc

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param email: Login email (normalized to lowercase by the model).
    :type email: str
    :param password: Raw password, hashed by the service.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for replacing a user's credentials.

    :param email: New login email.
    :type email: str
    :param password: New raw password.
    :type password: str
    """

    email: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Output DTO representing public-safe user data (never the hash).

    :param id: User identifier.
    :type id: uuid.UUID
    :param email: Email address.
    :type email: str
    :param is_chirpy_red: Premium membership flag.
    :type is_chirpy_red: bool
    """

    id: uuid.UUID
    email: str
    is_chirpy_red: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user) -> UserPublicOut:
        return cls(
            id=user.id,
            email=user.email,
            is_chirpy_red=bool(user.is_chirpy_red),
            created_at=as_utc(user.created_at),
            updated_at=as_utc(user.updated_at),
        )
