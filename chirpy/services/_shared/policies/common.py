"""Ownership policy shared by services and the authorization guard."""

from __future__ import annotations

import uuid

from chirpy.services._shared.errors import AuthError, AuthFailure


def is_owner(*, actor_id: uuid.UUID | None, owner_id: uuid.UUID) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and actor_id == owner_id


def authorize_ownership(identity_id: uuid.UUID | None, owner_id: uuid.UUID) -> None:
    """
    :raises AuthError: ``FORBIDDEN`` when ``identity_id`` differs from ``owner_id``.
    """
    if not is_owner(actor_id=identity_id, owner_id=owner_id):
        raise AuthError(AuthFailure.FORBIDDEN)
