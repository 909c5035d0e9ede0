"""Health endpoint and request correlation."""

from __future__ import annotations

from tests.factories.user import UserFactory


def test_healthz(client) -> None:
    resp = client.get("/api/healthz")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"status": "ok", "db": "ok", "version": "dev"}
    assert resp.headers["X-Request-ID"]


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/healthz", headers={"X-Request-ID": "trace-123"})

    assert resp.headers["X-Request-ID"] == "trace-123"


def test_unknown_route_is_problem_json(client) -> None:
    resp = client.get("/api/nope", headers={"X-Request-ID": "trace-404"})

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["code"] == "not_found"
    assert body["request_id"] == "trace-404"


def test_factory_rows_stay_readable_across_requests(client) -> None:
    user = UserFactory(email="jesse@example.com")

    for _ in range(2):
        assert client.get("/api/healthz").status_code == 200
        assert user.email == "jesse@example.com"
        assert user.id is not None
