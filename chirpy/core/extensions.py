"""Flask extension singletons: the database, migrations and the Redis client."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

REDIS_KEY = "redis_client"

# Constraint names are stable across SQLite and PostgreSQL so services can
# match them in IntegrityError messages (e.g. ``uq_users_email``).
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)


def _connect_redis(url: str) -> redis.Redis:
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    return client


def init_app(app: Flask) -> None:
    """Bind the database and migrations; connect Redis when ``REDIS_URL`` is set.

    Importing :mod:`chirpy.models` here registers the ``users``, ``chirps``
    and ``refresh_tokens`` tables on :data:`metadata` before Alembic reads it.
    """
    db.init_app(app)

    from chirpy import models as _models  # noqa: F401

    migrate.init_app(app, db)

    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        app.extensions[REDIS_KEY] = _connect_redis(redis_url)
    else:
        app.extensions.pop(REDIS_KEY, None)


def get_redis(app: Flask | None = None) -> redis.Redis:
    """Return the Redis client of ``app`` (or of the current application)."""
    target = app if app is not None else current_app
    client = target.extensions.get(REDIS_KEY)
    if client is None:
        raise RuntimeError("Redis is not configured; set REDIS_URL.")
    return client
