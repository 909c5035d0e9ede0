"""Unit tests for the PyJWT access-token codec."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from chirpy.infra.jwt import JWTTokenCodec
from chirpy.services._shared.errors import TokenError, TokenFailure

SECRET = "unit-test-secret-0123456789abcdef0123456789"


@pytest.fixture()
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(issuer="chirpy")


def _claims(**overrides):
    now = datetime.now(UTC)
    claims = {
        "iss": "chirpy",
        "sub": str(uuid.uuid4()),
        "iat": now.timestamp(),
        "exp": (now + timedelta(minutes=5)).timestamp(),
    }
    claims.update(overrides)
    return {k: v for k, v in claims.items() if v is not None}


def test_issue_then_validate_returns_subject(codec) -> None:
    identity = uuid.uuid4()
    token = codec.issue(identity, SECRET, timedelta(hours=1))

    assert codec.validate(token, SECRET) == identity


def test_issued_claims_shape(codec) -> None:
    identity = uuid.uuid4()
    token = codec.issue(identity, SECRET, timedelta(seconds=90))

    header = jwt.get_unverified_header(token)
    claims = jwt.decode(token, options={"verify_signature": False})
    assert header["alg"] == "HS256"
    assert claims["iss"] == "chirpy"
    assert claims["sub"] == str(identity)
    assert claims["exp"] - claims["iat"] == pytest.approx(90.0)


def test_wrong_secret_is_invalid(codec) -> None:
    token = codec.issue(uuid.uuid4(), SECRET, timedelta(hours=1))

    with pytest.raises(TokenError) as exc:
        codec.validate(token, "another-secret-0123456789abcdef0123456789")
    assert exc.value.kind is TokenFailure.INVALID


def test_expiry_has_sub_second_precision(codec, freeze_time) -> None:
    identity = uuid.uuid4()
    with freeze_time("2026-01-01 12:00:00") as frozen:
        token = codec.issue(identity, SECRET, timedelta(milliseconds=500))

        frozen.tick(timedelta(milliseconds=400))
        assert codec.validate(token, SECRET) == identity

        frozen.tick(timedelta(milliseconds=200))
        with pytest.raises(TokenError) as exc:
            codec.validate(token, SECRET)
        assert exc.value.kind is TokenFailure.EXPIRED


def test_expired_token_is_reported_as_expired(codec) -> None:
    token = codec.issue(uuid.uuid4(), SECRET, timedelta(seconds=-1))

    with pytest.raises(TokenError) as exc:
        codec.validate(token, SECRET)
    assert exc.value.kind is TokenFailure.EXPIRED


@pytest.mark.parametrize("algorithm", ["HS384", "HS512"])
def test_other_hmac_algorithms_are_rejected(codec, algorithm) -> None:
    token = jwt.encode(_claims(), SECRET, algorithm=algorithm)

    with pytest.raises(TokenError) as exc:
        codec.validate(token, SECRET)
    assert exc.value.kind is TokenFailure.INVALID


def test_unsigned_token_is_rejected(codec) -> None:
    token = jwt.encode(_claims(), None, algorithm="none")

    with pytest.raises(TokenError) as exc:
        codec.validate(token, SECRET)
    assert exc.value.kind is TokenFailure.INVALID


@pytest.mark.parametrize(
    "overrides",
    [
        {"iss": "someone-else"},
        {"sub": "not-a-uuid"},
        {"sub": None},
        {"exp": None},
        {"iat": None},
        {"iss": None},
    ],
    ids=["wrong-issuer", "bad-subject", "no-sub", "no-exp", "no-iat", "no-iss"],
)
def test_bad_claims_are_invalid(codec, overrides) -> None:
    token = jwt.encode(_claims(**overrides), SECRET, algorithm="HS256")

    with pytest.raises(TokenError) as exc:
        codec.validate(token, SECRET)
    assert exc.value.kind is TokenFailure.INVALID


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c"])
def test_malformed_token_is_invalid(codec, garbage) -> None:
    with pytest.raises(TokenError) as exc:
        codec.validate(garbage, SECRET)
    assert exc.value.kind is TokenFailure.INVALID
