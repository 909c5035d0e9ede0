"""Chirp model: a short text post owned by a single user."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chirpy.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User

MAX_BODY_LENGTH = 140


class Chirp(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Post authored by a :class:`~chirpy.models.user.User`.

    ``user_id`` is written once at creation and is the only axis used to
    authorize deletion.
    """

    __tablename__ = "chirps"

    body: Mapped[str] = mapped_column(String(MAX_BODY_LENGTH), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    author: Mapped[User] = relationship(back_populates="chirps")

    __table_args__ = (
        Index("ix_chirps_user_id", "user_id"),
        Index("ix_chirps_created_at", "created_at"),
    )
