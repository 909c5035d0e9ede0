"""Refresh-token repository: row-level primitives used by the SQL token store."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import cast

from sqlalchemy import select, update

from chirpy.models.refresh_token import RefreshToken
from chirpy.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`.

    Rows are keyed by the opaque token string.
    """

    model = RefreshToken

    def _pk_attr(self):
        return RefreshToken.token

    def create(self, *, token: str, user_id: uuid.UUID, expires_at: datetime) -> RefreshToken:
        """Insert a new, non-revoked row.

        A duplicate token violates the primary key and surfaces as
        :class:`sqlalchemy.exc.IntegrityError`.
        """
        row = RefreshToken(token=token, user_id=user_id, expires_at=expires_at, revoked_at=None)
        return self.add(row)

    def get_by_token(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def mark_revoked(self, token: str, *, revoked_at: datetime) -> bool:
        """Set ``revoked_at`` only if it is still ``NULL``.

        Single conditional ``UPDATE`` so concurrent revocations cannot
        overwrite or clear an existing timestamp.

        :returns: ``True`` when this call performed the transition.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)

    def exists(self, token: str) -> bool:
        stmt = select(RefreshToken.token).where(RefreshToken.token == token)
        return self.session.execute(stmt).first() is not None
