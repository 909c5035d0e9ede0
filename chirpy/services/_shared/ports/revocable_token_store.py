from __future__ import annotations

import secrets
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol

from chirpy.services._shared.errors import NotFoundError

#: Random bytes behind each refresh token (rendered as 64 hex chars).
TOKEN_BYTES = 32


def generate_refresh_token() -> str:
    """Return a fresh opaque refresh token from the OS CSPRNG."""
    return secrets.token_hex(TOKEN_BYTES)


@dataclass(frozen=True, slots=True)
class RefreshTokenView:
    """
    Read-model for a persisted refresh token.

    :ivar token: Opaque token string.
    :ivar identity_id: Owner user id.
    :ivar expires_at: Absolute expiration (UTC).
    :ivar revoked_at: Revocation instant, ``None`` while not revoked.
    """

    token: str
    identity_id: uuid.UUID
    expires_at: datetime
    revoked_at: datetime | None

    def is_active(self, now: datetime) -> bool:
        """``True`` iff not expired at ``now`` and never revoked."""
        not_expired = now < self.expires_at
        not_revoked = self.revoked_at is None
        return not_expired and not_revoked


class RevocableTokenStore(Protocol):
    """
    Stateful store for opaque refresh tokens.

    Every method is atomic with respect to concurrent callers on the same
    token. Revocation is monotonic: ``revoked_at`` is set at most once and is
    never cleared.
    """

    def generate(self) -> str:
        """Generate a new random refresh token."""
        ...

    def persist(self, token: str, identity_id: uuid.UUID, ttl: timedelta) -> None:
        """Store ``token`` as active until ``now + ttl``."""
        ...

    def resolve(self, token: str) -> RefreshTokenView:
        """
        :raises NotFoundError: If the token was never persisted.
        """
        ...

    def revoke(self, token: str) -> None:
        """
        Set ``revoked_at = now`` unless already revoked (then no-op).

        :raises NotFoundError: If the token was never persisted.
        """
        ...

    def purge(self) -> int:
        """Drop every stored token and return how many were removed."""
        ...


class InMemoryRevocableTokenStore:
    """
    In-memory refresh token store.

    .. note::
       A single lock serializes every call, which is enough for unit tests
       and single-process deployments.
    """

    def __init__(self) -> None:
        self._rows: dict[str, RefreshTokenView] = {}
        self._lock = threading.Lock()

    def generate(self) -> str:
        return generate_refresh_token()

    def persist(self, token: str, identity_id: uuid.UUID, ttl: timedelta) -> None:
        now = datetime.now(UTC)
        with self._lock:
            if token in self._rows:
                raise ValueError("refresh token already persisted")
            self._rows[token] = RefreshTokenView(
                token=token,
                identity_id=identity_id,
                expires_at=now + ttl,
                revoked_at=None,
            )

    def resolve(self, token: str) -> RefreshTokenView:
        with self._lock:
            row = self._rows.get(token)
        if row is None:
            raise NotFoundError("RefreshToken", "<redacted>")
        return row

    def revoke(self, token: str) -> None:
        now = datetime.now(UTC)
        with self._lock:
            row = self._rows.get(token)
            if row is None:
                raise NotFoundError("RefreshToken", "<redacted>")
            if row.revoked_at is None:
                self._rows[token] = replace(row, revoked_at=now)

    def purge(self) -> int:
        with self._lock:
            removed = len(self._rows)
            self._rows.clear()
        return removed
