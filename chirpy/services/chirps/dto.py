"""DTOs for ChirpService."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from chirpy.models.base import as_utc

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class ChirpCreateIn:
    """
    Input DTO for posting a chirp.

    :param body: Raw body; the content policy runs before persistence.
    :type body: str
    """

    body: str


@dataclass(frozen=True, slots=True)
class ChirpListIn:
    """
    Listing filters.

    :param author_id: Only chirps by this user when set.
    :type author_id: uuid.UUID | None
    :param sort: ``"asc"`` (oldest first) or ``"desc"`` by ``created_at``.
    :type sort: str
    """

    author_id: uuid.UUID | None = None
    sort: SortOrder = "asc"


@dataclass(frozen=True, slots=True)
class ChirpOut:
    id: uuid.UUID
    body: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, chirp) -> ChirpOut:
        return cls(
            id=chirp.id,
            body=chirp.body,
            user_id=chirp.user_id,
            created_at=as_utc(chirp.created_at),
            updated_at=as_utc(chirp.updated_at),
        )
