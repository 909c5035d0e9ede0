"""Base class and shared helpers for application services."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from chirpy.core import errors as api_errors
from chirpy.services._shared.errors import (
    AuthError,
    AuthFailure,
    ConflictError,
    HashingError,
    MismatchError,
    NotFoundError,
    ServiceError,
    TokenError,
    ValidationError,
)
from chirpy.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

#: Message shared by both login failure kinds so callers cannot tell them apart.
INVALID_LOGIN_MESSAGE = "Incorrect email or password"


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated identity, when known.
    :param request_id: Correlation id for logging.
    """

    actor_id: uuid.UUID | None = None
    request_id: str | None = None


def translate_exceptions(exc: Exception) -> Exception:
    """
    Map service-level errors to API-level (HTTP) errors.

    :param exc: Exception raised within the service layer.
    :type exc: Exception
    :returns: Translated exception, or ``exc`` untouched when not a
        :class:`ServiceError`.
    :rtype: Exception
    """
    if isinstance(exc, ValidationError):
        return api_errors.BadRequest(str(exc), code=exc.reason.value)

    if isinstance(exc, AuthError):
        if exc.kind in (AuthFailure.BAD_CREDENTIAL, AuthFailure.NOT_FOUND):
            return api_errors.Unauthorized(INVALID_LOGIN_MESSAGE)
        if exc.kind is AuthFailure.FORBIDDEN:
            return api_errors.Forbidden()
        return api_errors.Unauthorized()

    if isinstance(exc, (TokenError, MismatchError)):
        return api_errors.Unauthorized()

    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(str(exc))

    if isinstance(exc, ConflictError):
        return api_errors.Conflict(str(exc))

    if isinstance(exc, HashingError):
        return api_errors.InternalError()

    if isinstance(exc, ServiceError):
        return api_errors.BadRequest(str(exc))

    return exc


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation and the ownership policy.
    * Keep services thin, orchestration-only, no web/ORM leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        return translate_exceptions(exc)

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: uuid.UUID | None, owner_id: uuid.UUID) -> None:
        """
        Ensure the current actor is the resource owner.

        :raises AuthError: ``FORBIDDEN`` if the actor is not the owner.
        """
        from chirpy.services._shared.policies.common import authorize_ownership

        authorize_ownership(actor_id, owner_id)
