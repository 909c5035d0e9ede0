"""Content policy, ownership policy and refresh-token liveness rules."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from chirpy.services._shared.errors import (
    AuthError,
    AuthFailure,
    ValidationError,
    ValidationReason,
)
from chirpy.services._shared.policies.common import authorize_ownership, is_owner
from chirpy.services._shared.policies.content import clean_body
from chirpy.services._shared.ports import RefreshTokenView

# --------------------------------------------------------------------------- #
# Content policy
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (
            "This is a kerfuffle opinion I need to share with the world",
            "This is a **** opinion I need to share with the world",
        ),
        ("I hear Mastodon is better than Chirpy. sharbert I need to migrate",
         "I hear Mastodon is better than Chirpy. **** I need to migrate"),
        ("FORNAX and Fornax", "**** and ****"),
        ("Sharbert! stays because of the punctuation", "Sharbert! stays because of the punctuation"),
        ("double  space kerfuffle", "double  space ****"),
        ("nothing to see here", "nothing to see here"),
        ("kerfufflexyz is not a banned word", "kerfufflexyz is not a banned word"),
        ("this is KERFUFFLE nonsense", "this is **** nonsense"),
    ],
)
def test_clean_body_masks_banned_words(body, expected) -> None:
    assert clean_body(body) == expected


def test_clean_body_accepts_exactly_140_characters() -> None:
    body = "a" * 140
    assert clean_body(body) == body


def test_clean_body_counts_characters_not_bytes() -> None:
    body = "é" * 140
    assert clean_body(body) == body


def test_clean_body_rejects_141_characters() -> None:
    with pytest.raises(ValidationError) as exc:
        clean_body("a" * 141)
    assert exc.value.reason is ValidationReason.TOO_LONG


# --------------------------------------------------------------------------- #
# Ownership
# --------------------------------------------------------------------------- #


def test_is_owner() -> None:
    owner = uuid.uuid4()
    assert is_owner(actor_id=owner, owner_id=owner)
    assert not is_owner(actor_id=uuid.uuid4(), owner_id=owner)
    assert not is_owner(actor_id=None, owner_id=owner)


def test_authorize_ownership_raises_forbidden() -> None:
    with pytest.raises(AuthError) as exc:
        authorize_ownership(uuid.uuid4(), uuid.uuid4())
    assert exc.value.kind is AuthFailure.FORBIDDEN


# --------------------------------------------------------------------------- #
# Refresh token liveness
# --------------------------------------------------------------------------- #

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("expires_at", "revoked_at", "active"),
    [
        (NOW + timedelta(seconds=1), None, True),
        (NOW, None, False),
        (NOW - timedelta(seconds=1), None, False),
        (NOW + timedelta(days=1), NOW - timedelta(hours=1), False),
        (NOW - timedelta(days=1), NOW - timedelta(days=2), False),
    ],
    ids=["active", "expires-now", "expired", "revoked", "expired-and-revoked"],
)
def test_refresh_token_view_is_active(expires_at, revoked_at, active) -> None:
    view = RefreshTokenView(
        token="t" * 64,
        identity_id=uuid.uuid4(),
        expires_at=expires_at,
        revoked_at=revoked_at,
    )
    assert view.is_active(NOW) is active
