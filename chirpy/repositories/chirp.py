"""Chirp repository."""

from __future__ import annotations

import uuid

from chirpy.models.chirp import Chirp
from chirpy.repositories.base import BaseRepository


class ChirpRepository(BaseRepository[Chirp]):
    """Persistence-only repository for :class:`Chirp`."""

    model = Chirp

    def _sortable_fields(self):
        return {"created_at": Chirp.created_at}

    def _filterable_fields(self):
        return {"user_id": Chirp.user_id}

    def list_for_author(self, author_id: uuid.UUID | None, *, descending: bool = False) -> list[Chirp]:
        """List chirps oldest-first (or newest-first), optionally for one author."""
        return self.list(
            filters={"user_id": author_id},
            sort=["-created_at" if descending else "created_at"],
        )
