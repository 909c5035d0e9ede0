"""RefreshToken model: opaque long-lived session credentials.

The row is keyed by the token string itself. ``revoked_at`` only ever moves
from ``NULL`` to a timestamp; nothing in the code base clears it.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chirpy.core.extensions import db

from .base import TimestampMixin

if TYPE_CHECKING:
    from .user import User


class RefreshToken(TimestampMixin, db.Model):
    """Server-side record of a refresh token issued at login."""

    __tablename__ = "refresh_tokens"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship(back_populates="refresh_tokens")

    __table_args__ = (Index("ix_refresh_tokens_user_id", "user_id"),)

    def __repr__(self) -> str:
        # Never print the token itself.
        return f"<RefreshToken user_id={self.user_id} revoked={self.revoked_at is not None}>"
