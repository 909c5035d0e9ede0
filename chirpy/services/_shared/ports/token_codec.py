from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Protocol


class TokenCodec(Protocol):
    """Port for issuing and validating signed, short-lived access tokens."""

    def issue(self, identity_id: uuid.UUID, signing_secret: str, ttl: timedelta) -> str:
        """Return a compact signed token whose subject is ``identity_id``."""
        ...

    def validate(self, token: str, signing_secret: str) -> uuid.UUID:
        """
        Verify ``token`` and return its subject.

        :raises TokenError: ``EXPIRED`` past expiry, ``INVALID`` for anything
            else (bad signature, wrong algorithm or issuer, missing claims).
        """
        ...
