"""Infrastructure adapters and their wiring onto the Flask app."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app

from chirpy.core.extensions import get_redis
from chirpy.infra.jwt import JWTTokenCodec
from chirpy.infra.redis import RedisRefreshTokenStore
from chirpy.infra.security import WerkzeugCredentialHasher
from chirpy.infra.sqlalchemy import SQLRefreshTokenStore
from chirpy.services._shared.ports import CredentialHasher, RevocableTokenStore, TokenCodec

log = logging.getLogger(__name__)

EXTENSION_KEY = "chirpy.adapters"


@dataclass(frozen=True, slots=True)
class Adapters:
    """Process-wide adapter instances shared by every request."""

    hasher: CredentialHasher
    codec: TokenCodec
    store: RevocableTokenStore


def build_adapters(app: Flask) -> Adapters:
    """
    Create adapters from ``app.config``.

    The refresh token store is Redis-backed when ``REDIS_URL`` is set and
    relational otherwise.
    """
    hasher = WerkzeugCredentialHasher(method=app.config.get("PASSWORD_HASH_METHOD", "scrypt"))
    codec = JWTTokenCodec(issuer=app.config.get("JWT_ISSUER", "chirpy"))
    store: RevocableTokenStore
    if app.config.get("REDIS_URL"):
        store = RedisRefreshTokenStore(get_redis(app))
        log.info("refresh token store: redis")
    else:
        store = SQLRefreshTokenStore()
        log.info("refresh token store: sql")
    return Adapters(hasher=hasher, codec=codec, store=store)


def init_app(app: Flask, adapters: Adapters | None = None) -> Adapters:
    """Attach ``adapters`` (or ones built from config) to the application."""
    owned = adapters if adapters is not None else build_adapters(app)
    app.extensions[EXTENSION_KEY] = owned
    return owned


def get_adapters() -> Adapters:
    adapters = current_app.extensions.get(EXTENSION_KEY)
    if adapters is None:
        raise RuntimeError("Adapters are not initialized. Call chirpy.infra.init_app() first.")
    return adapters


__all__ = ["Adapters", "build_adapters", "get_adapters", "init_app"]
