# chirpy/infra/redis/redis_refresh_token_store.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import redis  # type: ignore[import-untyped]

from chirpy.services._shared.errors import NotFoundError
from chirpy.services._shared.ports import RefreshTokenView, generate_refresh_token


def _s(value: bytes | str | None) -> str:
    if value is None:
        return ""
    return value.decode() if isinstance(value, bytes) else value


@dataclass(slots=True)
class RedisRefreshTokenStore:
    """
    Redis-backed refresh token store.

    Each token is a hash at ``rt:<token>`` with ``user_id``, ``expires_at``
    (epoch seconds) and, once revoked, ``revoked_at``. The key expires with
    the token. Writes use WATCH/MULTI/EXEC and ``HSETNX`` so ``revoked_at``
    is set at most once.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str) -> str:
        return f"rt:{token}"

    # -------------------- API ------------------------

    def generate(self) -> str:
        return generate_refresh_token()

    def persist(self, token: str, identity_id: uuid.UUID, ttl: timedelta) -> None:
        """
        :raises ValueError: If ``token`` is already stored.
        """
        key = self._k(token)
        expires_at = datetime.now(UTC) + ttl
        ttl_ms = max(1, int(ttl.total_seconds() * 1000))

        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    if p.exists(key):
                        p.unwatch()
                        raise ValueError("refresh token already persisted")
                    p.multi()
                    p.hset(
                        key,
                        mapping={
                            "user_id": str(identity_id),
                            "expires_at": repr(expires_at.timestamp()),
                        },
                    )
                    p.pexpire(key, ttl_ms)
                    p.execute()
                    return
            except redis.WatchError:
                # Concurrent writer touched the key; retry.
                continue

    def resolve(self, token: str) -> RefreshTokenView:
        h = self.r.hgetall(self._k(token))
        if not h:
            raise NotFoundError("RefreshToken", "<redacted>")
        fields = {_s(k): _s(v) for k, v in h.items()}
        revoked_raw = fields.get("revoked_at")
        return RefreshTokenView(
            token=token,
            identity_id=uuid.UUID(fields["user_id"]),
            expires_at=datetime.fromtimestamp(float(fields["expires_at"]), tz=UTC),
            revoked_at=(
                datetime.fromtimestamp(float(revoked_raw), tz=UTC) if revoked_raw else None
            ),
        )

    def revoke(self, token: str) -> None:
        key = self._k(token)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    if not p.exists(key):
                        p.unwatch()
                        raise NotFoundError("RefreshToken", "<redacted>")
                    if p.hexists(key, "revoked_at"):
                        p.unwatch()
                        return
                    p.multi()
                    p.hsetnx(key, "revoked_at", repr(datetime.now(UTC).timestamp()))
                    p.execute()
                    return
            except redis.WatchError:
                continue

    def purge(self) -> int:
        """Delete every ``rt:*`` key. SCAN keeps the server responsive."""
        removed = 0
        batch: list[bytes | str] = []
        for key in self.r.scan_iter(match=self._k("*"), count=500):
            batch.append(key)
            if len(batch) >= 500:
                removed += int(self.r.delete(*batch))
                batch.clear()
        if batch:
            removed += int(self.r.delete(*batch))
        return removed
