"""
IdentityService
===============

Aggregate service responsible for the `User` aggregate:

- Registration and credential replacement (hashing via the injected port)
- Premium membership upgrade
- Development-only wipe of every user and dependent row
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import IntegrityError

from chirpy.core.logger import log_auth_event
from chirpy.repositories.user import UserRepository
from chirpy.services._shared.base import BaseService, ServiceContext
from chirpy.services._shared.errors import ConflictError, NotFoundError, violates
from chirpy.services._shared.ports import CredentialHasher, RevocableTokenStore
from chirpy.services.identity.dto import UserPublicOut, UserRegisterIn, UserUpdateIn

log = logging.getLogger(__name__)

# SQLite names the column, PostgreSQL names the constraint.
_EMAIL_CONSTRAINTS = ("uq_users_email", "users.email")


def _email_conflict(exc: IntegrityError) -> bool:
    return any(violates(exc, name) for name in _EMAIL_CONSTRAINTS)


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    :param hasher: Credential hasher used for every password write.
    :type hasher: CredentialHasher
    :param store: Refresh token store emptied by :meth:`reset`; only needed
        when tokens live outside the relational database.
    :type store: RevocableTokenStore | None
    """

    def __init__(
        self,
        *,
        hasher: CredentialHasher,
        store: RevocableTokenStore | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.hasher = hasher
        self.store = store

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user.

        :param dto: User registration input DTO.
        :type dto: UserRegisterIn
        :returns: Public-safe user DTO.
        :rtype: UserPublicOut
        :raises ConflictError: If the email is already registered.
        :raises HashingError: If the password cannot be hashed.
        """
        password_hash = self.hasher.hash(dto.password)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")

            try:
                user = repo.add(repo.model(email=dto.email, password_hash=password_hash))
            except IntegrityError as exc:
                if _email_conflict(exc):
                    raise ConflictError("User", "email already in use") from exc
                raise

            out = UserPublicOut.from_model(user)

        log.info("user registered", extra={"identity_id": str(out.id)})
        return out

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: uuid.UUID) -> UserPublicOut:
        """
        :raises NotFoundError: If user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)

    # --------------------------------------------------------------------- #
    # Updates
    # --------------------------------------------------------------------- #

    def update_credentials(self, user_id: uuid.UUID, dto: UserUpdateIn) -> UserPublicOut:
        """
        Replace the email and password of ``user_id``.

        :param user_id: Authenticated user identifier.
        :type user_id: uuid.UUID
        :param dto: New credentials.
        :type dto: UserUpdateIn
        :returns: Updated user DTO.
        :rtype: UserPublicOut
        :raises NotFoundError: When the user no longer exists.
        :raises ConflictError: When the new email belongs to another user.
        """
        password_hash = self.hasher.hash(dto.password)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            other = repo.get_by_email(dto.email)
            if other is not None and other.id != user.id:
                raise ConflictError("User", "email already in use")

            try:
                repo.update(user, email=dto.email, password_hash=password_hash)
            except IntegrityError as exc:
                if _email_conflict(exc):
                    raise ConflictError("User", "email already in use") from exc
                raise

            out = UserPublicOut.from_model(user)

        log_auth_event(log, "credentials_updated", level=logging.INFO, identity_id=user_id)
        return out

    def upgrade_to_red(self, user_id: uuid.UUID) -> UserPublicOut:
        """
        Grant premium membership. Idempotent.

        :raises NotFoundError: If user does not exist.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if not user.is_chirpy_red:
                repo.update(user, is_chirpy_red=True)
            out = UserPublicOut.from_model(user)

        log.info("user upgraded to chirpy red", extra={"identity_id": str(user_id)})
        return out

    # --------------------------------------------------------------------- #
    # Development reset
    # --------------------------------------------------------------------- #

    def reset(self) -> int:
        """
        Delete every user together with their chirps and refresh tokens.

        Tokens held by the injected store are purged as well, so none can
        outlive its owner.

        Dependents are removed explicitly because bulk deletes skip ORM
        cascades and SQLite does not enforce foreign keys by default.

        :returns: Number of users removed.
        :rtype: int
        """
        with self.rw_uow() as uow:
            uow.refresh_tokens.delete_all()
            uow.chirps.delete_all()
            removed = uow.users.delete_all()
        if self.store is not None:
            self.store.purge()

        log.warning("database reset: %s users removed", removed)
        return removed
