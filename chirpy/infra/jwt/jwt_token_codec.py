# chirpy/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from chirpy.services._shared.errors import TokenError, TokenFailure

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["exp", "iat", "sub", "iss"]


@dataclass(frozen=True, slots=True)
class JWTTokenCodec:
    """
    PyJWT adapter for the :class:`~chirpy.services._shared.ports.TokenCodec` port.

    ``iat`` and ``exp`` are written as float epoch seconds so expiry keeps
    sub-second precision. Only HS256 is accepted on decode.

    :param issuer: Value written to and required in the ``iss`` claim.
    """

    issuer: str = "chirpy"

    def issue(self, identity_id: uuid.UUID, signing_secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "iss": self.issuer,
            "sub": str(identity_id),
            "iat": now.timestamp(),
            "exp": (now + ttl).timestamp(),
        }
        return jwt.encode(payload, signing_secret, algorithm=ALGORITHM)

    def validate(self, token: str, signing_secret: str) -> uuid.UUID:
        try:
            claims = jwt.decode(
                token,
                signing_secret,
                algorithms=[ALGORITHM],
                issuer=self.issuer,
                # Expiry is checked below against float timestamps.
                options={"require": REQUIRED_CLAIMS, "verify_exp": False},
            )
            expires_at = float(claims["exp"])
            subject = uuid.UUID(str(claims["sub"]))
        except (jwt.InvalidTokenError, TypeError, ValueError) as exc:
            raise TokenError(TokenFailure.INVALID) from exc

        if datetime.now(UTC).timestamp() > expires_at:
            raise TokenError(TokenFailure.EXPIRED)
        return subject
