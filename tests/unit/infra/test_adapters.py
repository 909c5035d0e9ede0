"""Adapter selection from configuration."""

from __future__ import annotations

from chirpy.infra import get_adapters
from chirpy.infra.jwt import JWTTokenCodec
from chirpy.infra.security import WerkzeugCredentialHasher
from chirpy.infra.sqlalchemy import SQLRefreshTokenStore


def test_testing_app_uses_sql_store_without_redis(app) -> None:
    with app.app_context():
        adapters = get_adapters()

    assert isinstance(adapters.store, SQLRefreshTokenStore)
    assert isinstance(adapters.codec, JWTTokenCodec)
    assert adapters.codec.issuer == "chirpy"
    assert isinstance(adapters.hasher, WerkzeugCredentialHasher)
    assert adapters.hasher.method == app.config["PASSWORD_HASH_METHOD"]
