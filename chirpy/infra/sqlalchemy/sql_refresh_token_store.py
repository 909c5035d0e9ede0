# chirpy/infra/sqlalchemy/sql_refresh_token_store.py
from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError

from chirpy.models.base import as_utc
from chirpy.services._shared.errors import NotFoundError
from chirpy.services._shared.ports import RefreshTokenView, generate_refresh_token
from chirpy.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


class SQLRefreshTokenStore:
    """
    Relational refresh token store.

    Each call runs in its own Unit of Work. Revocation is a single
    conditional ``UPDATE ... WHERE revoked_at IS NULL``, so concurrent
    revokers never overwrite an existing timestamp.

    .. note::
       Requires an active Flask app context (the Flask-scoped session).
    """

    def generate(self) -> str:
        return generate_refresh_token()

    def persist(self, token: str, identity_id: uuid.UUID, ttl: timedelta) -> None:
        """
        :raises ValueError: If ``token`` is already stored.
        """
        try:
            with SQLAlchemyUnitOfWork() as uow:
                uow.refresh_tokens.create(
                    token=token,
                    user_id=identity_id,
                    expires_at=datetime.now(UTC) + ttl,
                )
        except IntegrityError as exc:
            raise ValueError("refresh token already persisted") from exc

    def resolve(self, token: str) -> RefreshTokenView:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.refresh_tokens.get_by_token(token)
            if row is None:
                raise NotFoundError("RefreshToken", "<redacted>")
            return RefreshTokenView(
                token=row.token,
                identity_id=row.user_id,
                expires_at=as_utc(row.expires_at),
                revoked_at=as_utc(row.revoked_at) if row.revoked_at is not None else None,
            )

    def revoke(self, token: str) -> None:
        with SQLAlchemyUnitOfWork() as uow:
            changed = uow.refresh_tokens.mark_revoked(token, revoked_at=datetime.now(UTC))
            if not changed and not uow.refresh_tokens.exists(token):
                raise NotFoundError("RefreshToken", "<redacted>")

    def purge(self) -> int:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.refresh_tokens.delete_all()
