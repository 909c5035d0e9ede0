"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never depend on Flask or
HTTP. The translation to HTTP responses (RFC 7807) is handled by
:func:`chirpy.services._shared.base.translate_exceptions`, wired into
``chirpy/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The database constraint to match (e.g., ``'uq_users_email'``).

    Returns
    -------
    bool
        True if the driver message names the constraint. SQLite reports the
        column instead (``users.email``), so callers may pass either.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    These are *not* HTTP errors; the boundary translates them.
    """


# --------------------------------------------------------------------------- #
# Kinds
# --------------------------------------------------------------------------- #


class AuthFailure(str, Enum):
    """Why an authentication or authorization step failed."""

    BAD_CREDENTIAL = "bad_credential"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    MALFORMED_HEADER = "malformed_header"


class TokenFailure(str, Enum):
    """Why an access token was rejected."""

    EXPIRED = "expired"
    INVALID = "invalid"


class ValidationReason(str, Enum):
    TOO_LONG = "too_long"


# --------------------------------------------------------------------------- #
# Specific errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: object
    """

    entity: str
    key: object

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class ValidationError(ServiceError):
    """Submitted content breaks a domain rule (e.g. chirp too long)."""

    reason: ValidationReason
    detail: str = ""

    def __str__(self) -> str:
        return self.detail or self.reason.value


@dataclass(slots=True)
class AuthError(ServiceError):
    """
    Authentication or authorization failure.

    ``kind`` is for logs and tests only; the boundary never exposes it.
    """

    kind: AuthFailure

    def __str__(self) -> str:
        return f"auth failure: {self.kind.value}"


@dataclass(slots=True)
class TokenError(ServiceError):
    """An access token failed validation."""

    kind: TokenFailure

    def __str__(self) -> str:
        return f"token rejected: {self.kind.value}"


class HashingError(ServiceError):
    """The credential hasher could not produce a digest."""


class MismatchError(ServiceError):
    """A plaintext credential does not match the stored digest."""
