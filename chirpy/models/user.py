"""User model definition: the authentication identity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from chirpy.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .chirp import Chirp
    from .refresh_token import RefreshToken


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    password_hash : str
        Salted one-way digest produced by the credential hasher. The model
        never sees plaintext passwords.
    is_chirpy_red : bool
        Premium membership flag flipped by the payment webhook.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_chirpy_red: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    chirps: Mapped[list[Chirp]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    refresh_tokens: Mapped[list[RefreshToken]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v
