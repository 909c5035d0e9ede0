"""Unit tests for the Werkzeug credential hasher."""

from __future__ import annotations

import pytest

from chirpy.infra.security import WerkzeugCredentialHasher
from chirpy.services._shared.errors import HashingError, MismatchError


@pytest.fixture()
def hasher() -> WerkzeugCredentialHasher:
    return WerkzeugCredentialHasher(method="pbkdf2:sha256:1000")


def test_hash_is_salted_and_never_plaintext(hasher) -> None:
    first = hasher.hash("correct horse")
    second = hasher.hash("correct horse")

    assert "correct horse" not in first
    assert first != second
    assert first.startswith("pbkdf2:sha256:1000$")


def test_verify_accepts_matching_password(hasher) -> None:
    hasher.verify("correct horse", hasher.hash("correct horse"))


def test_verify_rejects_wrong_password(hasher) -> None:
    with pytest.raises(MismatchError):
        hasher.verify("wrong horse", hasher.hash("correct horse"))


@pytest.mark.parametrize("stored", ["", "not-a-hash", "pbkdf2:sha256$only-two"])
def test_verify_treats_malformed_hash_as_mismatch(hasher, stored) -> None:
    with pytest.raises(MismatchError):
        hasher.verify("anything", stored)


def test_default_method_is_scrypt() -> None:
    digest = WerkzeugCredentialHasher().hash("pw")
    assert digest.startswith("scrypt:")


def test_unknown_method_raises_hashing_error() -> None:
    with pytest.raises(HashingError):
        WerkzeugCredentialHasher(method="rot13").hash("pw")


def test_non_string_password_raises_hashing_error(hasher) -> None:
    with pytest.raises(HashingError):
        hasher.hash(12345)  # type: ignore[arg-type]
