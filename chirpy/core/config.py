"""Environment-selected configuration classes for the chirpy service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

#: Environment variable naming the active configuration class.
ENV_VAR: Final[str] = "APP_ENV"

#: HS256 keys shorter than this are refused outside development and tests.
MIN_JWT_SECRET_BYTES: Final[int] = 32

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read ``name`` as a flag; ``1/true/yes/y/on`` (any case) are true."""
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read ``name`` as an integer; unset or blank means ``default``.

    :raises ValueError: If the variable holds a non-integer value.
    """
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    ADMIN_PREFIX: str
        Root path for the operator blueprint (metrics and reset).
    FILESERVER_PREFIX: str
        Mount point of the static file server whose hits are counted.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET: str
        HMAC key used to sign and verify access tokens.
    JWT_ISSUER: str
        ``iss`` claim written into every access token.
    ACCESS_TOKEN_TTL: timedelta
        Lifetime of access tokens issued on login and refresh.
    REFRESH_TOKEN_TTL: timedelta
        Lifetime of opaque refresh tokens issued on login.
    PASSWORD_HASH_METHOD: str
        Werkzeug hashing method (``scrypt`` by default).
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    REDIS_URL: str | None
        When set, refresh tokens live in Redis instead of the database.
    PLATFORM: str
        Deployment platform; only ``"dev"`` allows the reset hook.
    POLKA_KEY: str
        Shared secret expected in the payment webhook ``ApiKey`` header.
    FILESERVER_ROOT: str
        Directory served under ``FILESERVER_PREFIX``.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    USE_PROXYFIX: bool
        Wrap the WSGI app in ``ProxyFix`` (``PROXYFIX_HOPS`` trusted hops).

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    ADMIN_PREFIX = "/admin"
    FILESERVER_PREFIX = "/app"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME_JWT")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chirpy")
    ACCESS_TOKEN_TTL = timedelta(seconds=env_int("ACCESS_TOKEN_TTL_SECONDS", 3600))
    REFRESH_TOKEN_TTL = timedelta(days=env_int("REFRESH_TOKEN_TTL_DAYS", 60))
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")
    POLKA_KEY = os.getenv("POLKA_KEY", "")

    # Storage
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = os.getenv("REDIS_URL") or None

    # Operator surface
    PLATFORM = os.getenv("PLATFORM", "prod")
    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", ".")

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and the ``dev`` platform so the reset hook
    is reachable.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    PLATFORM = os.getenv("PLATFORM", "dev")
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses a cheap PBKDF2 hash so request-level tests stay fast.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    REDIS_URL = None
    JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    PLATFORM = "dev"
    POLKA_KEY = "test-polka-key"
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV`` (``development`` when unset or unknown)."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def check_secrets(config: Mapping[str, Any]) -> None:
    """Refuse to run a non-debug, non-test app with a weak access-token key.

    :param config: The Flask ``app.config`` mapping.
    :raises RuntimeError: If ``JWT_SECRET`` is shorter than
        :data:`MIN_JWT_SECRET_BYTES` bytes.
    """
    if config.get("TESTING") or config.get("DEBUG"):
        return
    secret = config.get("JWT_SECRET") or ""
    if len(secret.encode()) < MIN_JWT_SECRET_BYTES:
        raise RuntimeError(
            f"JWT_SECRET must be at least {MIN_JWT_SECRET_BYTES} bytes outside development"
        )
