"""Service error to HTTP error mapping."""

from __future__ import annotations

import pytest

from chirpy.core import errors as api_errors
from chirpy.services._shared.base import INVALID_LOGIN_MESSAGE, translate_exceptions
from chirpy.services._shared.errors import (
    AuthError,
    AuthFailure,
    ConflictError,
    HashingError,
    MismatchError,
    NotFoundError,
    TokenError,
    TokenFailure,
    ValidationError,
    ValidationReason,
)


@pytest.mark.parametrize(
    ("exc", "status", "message"),
    [
        (ValidationError(ValidationReason.TOO_LONG, "Chirp is too long"), 400, "Chirp is too long"),
        (AuthError(AuthFailure.BAD_CREDENTIAL), 401, INVALID_LOGIN_MESSAGE),
        (AuthError(AuthFailure.NOT_FOUND), 401, INVALID_LOGIN_MESSAGE),
        (AuthError(AuthFailure.UNAUTHORIZED), 401, "Unauthorized"),
        (AuthError(AuthFailure.MALFORMED_HEADER), 401, "Unauthorized"),
        (TokenError(TokenFailure.EXPIRED), 401, "Unauthorized"),
        (TokenError(TokenFailure.INVALID), 401, "Unauthorized"),
        (MismatchError(), 401, "Unauthorized"),
        (AuthError(AuthFailure.FORBIDDEN), 403, "Forbidden"),
        (NotFoundError("Chirp", "x"), 404, "Chirp not found: x"),
        (ConflictError("User", "email already in use"), 409, "Conflict on User: email already in use"),
        (HashingError("boom"), 500, "Unexpected error"),
    ],
)
def test_translate_exceptions(exc, status, message) -> None:
    translated = translate_exceptions(exc)

    assert isinstance(translated, api_errors.APIError)
    assert translated.status_code == status
    assert translated.message == message


def test_non_service_errors_pass_through() -> None:
    exc = RuntimeError("boom")
    assert translate_exceptions(exc) is exc
