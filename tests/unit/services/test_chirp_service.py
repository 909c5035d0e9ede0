"""Unit tests for ChirpService."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest

from chirpy.models.chirp import Chirp
from chirpy.services import ChirpCreateIn, ChirpListIn, ChirpService
from chirpy.services._shared.errors import (
    AuthError,
    AuthFailure,
    NotFoundError,
    ValidationError,
    ValidationReason,
)
from tests.factories.chirp import ChirpFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> ChirpService:
    return ChirpService()


def test_create_chirp_cleans_body(service) -> None:
    author = UserFactory()

    out = service.create_chirp(author.id, ChirpCreateIn(body="What a Kerfuffle day"))

    assert out.body == "What a **** day"
    assert out.user_id == author.id
    assert out.created_at.tzinfo is not None


def test_create_chirp_rejects_long_body_before_touching_storage(service, session) -> None:
    with pytest.raises(ValidationError) as exc:
        service.create_chirp(uuid.uuid4(), ChirpCreateIn(body="x" * 141))

    assert exc.value.reason is ValidationReason.TOO_LONG
    assert session.query(Chirp).count() == 0


def test_create_chirp_for_missing_author(service) -> None:
    with pytest.raises(NotFoundError):
        service.create_chirp(uuid.uuid4(), ChirpCreateIn(body="hello"))


def _seed_timeline():
    alice, bob = UserFactory(), UserFactory()
    base = datetime(2026, 1, 1, tzinfo=UTC)
    first = ChirpFactory(author=alice, created_at=base.replace(hour=1))
    second = ChirpFactory(author=bob, created_at=base.replace(hour=2))
    third = ChirpFactory(author=alice, created_at=base.replace(hour=3))
    return alice, bob, [first.id, second.id, third.id]


def test_list_chirps_oldest_first_by_default(service) -> None:
    _, _, ids = _seed_timeline()

    assert [c.id for c in service.list_chirps()] == ids


def test_list_chirps_newest_first(service) -> None:
    _, _, ids = _seed_timeline()

    assert [c.id for c in service.list_chirps(ChirpListIn(sort="desc"))] == ids[::-1]


def test_list_chirps_for_one_author(service) -> None:
    alice, _, ids = _seed_timeline()

    listed = service.list_chirps(ChirpListIn(author_id=alice.id, sort="desc"))

    assert [c.id for c in listed] == [ids[2], ids[0]]


def test_list_chirps_for_author_without_chirps(service) -> None:
    _seed_timeline()

    assert service.list_chirps(ChirpListIn(author_id=uuid.uuid4())) == []


def test_get_chirp(service) -> None:
    chirp = ChirpFactory()

    assert service.get_chirp(chirp.id).body == chirp.body

    with pytest.raises(NotFoundError):
        service.get_chirp(uuid.uuid4())


def test_delete_chirp_by_author(service, session) -> None:
    chirp = ChirpFactory()
    chirp_id, author_id = chirp.id, chirp.user_id

    service.delete_chirp(author_id, chirp_id)

    assert session.get(Chirp, chirp_id) is None


def test_delete_chirp_by_someone_else_is_forbidden(service, session) -> None:
    chirp = ChirpFactory()
    intruder = UserFactory()

    with pytest.raises(AuthError) as exc:
        service.delete_chirp(intruder.id, chirp.id)

    assert exc.value.kind is AuthFailure.FORBIDDEN
    assert session.get(Chirp, chirp.id) is not None


def test_delete_missing_chirp(service) -> None:
    with pytest.raises(NotFoundError):
        service.delete_chirp(uuid.uuid4(), uuid.uuid4())
