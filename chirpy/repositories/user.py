"""User repository for persistence and lookup utilities."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from chirpy.models.user import User
from chirpy.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository never hashes or verifies credentials and never touches
    tokens; it only stores what the services hand it.
    """

    model = User

    def _sortable_fields(self):
        return {
            "email": User.email,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {"email": User.email}

    def _updatable_fields(self):
        """Publicly allowed updatable fields (hash is set by the identity service)."""
        return {"email", "password_hash", "is_chirpy_red"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())
