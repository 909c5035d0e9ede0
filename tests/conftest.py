"""Pytest fixtures configuring the app and an isolated transactional database layer.

Each test runs inside an outer transaction on a shared connection to an
in-memory SQLite database. Application commits only release SAVEPOINTs, so
data changes never leak between cases.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from chirpy.core.config import TestingConfig
from chirpy.core.extensions import db as _db  # Flask-SQLAlchemy instance
from chirpy.factory import create_app  # application factory under test


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    No application context is held open here: every test-client request
    pushes its own, so ``flask.g`` never leaks between requests.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    application = create_app(TestingConfig, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    pysqlite defers ``BEGIN`` on its own, which breaks SAVEPOINT nesting;
    the listeners below hand transaction control back to SQLAlchemy.
    """
    with app.app_context():
        engine = _db.engine

        if engine.dialect.name == "sqlite":

            @event.listens_for(engine, "connect")
            def _disable_pysqlite_begin(dbapi_connection, _record):  # pragma: no cover
                dbapi_connection.isolation_level = None

            @event.listens_for(engine, "begin")
            def _emit_begin(conn):  # pragma: no cover
                conn.exec_driver_sql("BEGIN")

        _db.create_all()

    yield _db

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep a dedicated connection open for the whole session."""
    with app.app_context():
        engine = db.engine
    conn = engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a scoped session joined to an outer, always rolled back transaction.

    Notes
    -----
    SQLAlchemy 2.0 recipe: ``join_transaction_mode="create_savepoint"`` turns
    every ``commit()`` issued by the code under test into a SAVEPOINT release,
    while the outer transaction is rolled back when the test ends.
    Objects are not expired on commit: request teardown removes the scoped
    session, and factory-built rows must stay readable afterwards.
    ``db.session`` is swapped so repositories and units of work use it.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
    )
    scoped = scoped_session(SessionFactory)

    original_session = db.session
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def client(app, session):
    """Return a Flask test client bound to the transactional session."""
    return app.test_client()


@pytest.fixture()
def hit_counter(app):
    """Return the application's hit counter, zeroed for the test."""
    counter = app.extensions["hit_counter"]
    counter.reset()
    return counter


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2026-01-01 12:00:00") as frozen:
    ...         frozen.tick(1.5)
    """
    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2026-01-01 12:00:00")

    return _factory


# -- Hook up Factory Boy to the transactional session ---------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)
