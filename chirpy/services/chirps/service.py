"""
ChirpService
============

Create, read and delete chirps. Bodies pass the content policy before they
are stored; deletion is gated on ownership.
"""

from __future__ import annotations

import logging
import uuid

from chirpy.services._shared.base import BaseService
from chirpy.services._shared.errors import NotFoundError
from chirpy.services._shared.policies.content import clean_body
from chirpy.services.chirps.dto import ChirpCreateIn, ChirpListIn, ChirpOut

log = logging.getLogger(__name__)


class ChirpService(BaseService):
    """Application service for the `Chirp` aggregate."""

    def create_chirp(self, author_id: uuid.UUID, dto: ChirpCreateIn) -> ChirpOut:
        """
        Validate, sanitize and store a chirp.

        :param author_id: Authenticated author.
        :type author_id: uuid.UUID
        :param dto: Chirp input.
        :type dto: ChirpCreateIn
        :returns: Stored chirp.
        :rtype: ChirpOut
        :raises ValidationError: ``TOO_LONG`` for bodies over 140 characters.
        :raises NotFoundError: If the author no longer exists.
        """
        body = clean_body(dto.body)

        with self.rw_uow() as uow:
            if uow.users.get(author_id) is None:
                raise NotFoundError("User", author_id)
            chirp = uow.chirps.add(uow.chirps.model(body=body, user_id=author_id))
            out = ChirpOut.from_model(chirp)

        log.info("chirp created", extra={"identity_id": str(author_id), "chirp_id": str(out.id)})
        return out

    def list_chirps(self, dto: ChirpListIn | None = None) -> list[ChirpOut]:
        """List chirps ordered by creation time, optionally for one author."""
        dto = dto or ChirpListIn()
        with self.ro_uow() as uow:
            rows = uow.chirps.list_for_author(dto.author_id, descending=dto.sort == "desc")
            return [ChirpOut.from_model(row) for row in rows]

    def get_chirp(self, chirp_id: uuid.UUID) -> ChirpOut:
        """
        :raises NotFoundError: If the chirp does not exist.
        """
        with self.ro_uow() as uow:
            chirp = uow.chirps.get(chirp_id)
            if chirp is None:
                raise NotFoundError("Chirp", chirp_id)
            return ChirpOut.from_model(chirp)

    def delete_chirp(self, actor_id: uuid.UUID, chirp_id: uuid.UUID) -> None:
        """
        Delete a chirp owned by ``actor_id``.

        :raises NotFoundError: If the chirp does not exist.
        :raises AuthError: ``FORBIDDEN`` if ``actor_id`` is not the author.
        """
        with self.rw_uow() as uow:
            chirp = uow.chirps.get_for_update(chirp_id)
            if chirp is None:
                raise NotFoundError("Chirp", chirp_id)
            self.ensure_owner(actor_id, chirp.user_id)
            uow.chirps.delete(chirp)

        log.info("chirp deleted", extra={"identity_id": str(actor_id), "chirp_id": str(chirp_id)})
