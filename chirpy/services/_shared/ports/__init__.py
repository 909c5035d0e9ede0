"""
chirpy.services._shared.ports
=============================

*Ports* (hexagonal interfaces) for the authentication infrastructure.

Modules
-------
- :mod:`credential_hasher`:
    Defines :class:`~.CredentialHasher`, the password digest abstraction.

- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`, issuing and validating access tokens.

- :mod:`revocable_token_store`:
    Defines :class:`~.RevocableTokenStore` and :class:`~.RefreshTokenView`
    for opaque refresh tokens, plus an in-memory implementation.

Concrete adapters (Werkzeug, PyJWT, SQLAlchemy, Redis) live under
``chirpy.infra``.
"""

from __future__ import annotations

from .credential_hasher import CredentialHasher
from .revocable_token_store import (
    InMemoryRevocableTokenStore,
    RefreshTokenView,
    RevocableTokenStore,
    generate_refresh_token,
)
from .token_codec import TokenCodec

__all__ = [
    "CredentialHasher",
    "TokenCodec",
    "RevocableTokenStore",
    "RefreshTokenView",
    "InMemoryRevocableTokenStore",
    "generate_refresh_token",
]
