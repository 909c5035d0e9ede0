"""Request authentication: header extraction, token validation, ownership."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping

from chirpy.core.logger import log_auth_event
from chirpy.services._shared.errors import AuthError, AuthFailure, TokenError
from chirpy.services._shared.policies.common import authorize_ownership
from chirpy.services._shared.ports import TokenCodec

log = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "Bearer"
API_KEY_SCHEME = "ApiKey"


def _extract_credential(headers: Mapping[str, str], scheme: str) -> str:
    """
    Pull the credential following ``scheme`` from the ``Authorization`` header.

    The header must start with ``"<scheme> "`` and contain that prefix exactly
    once; the remainder is stripped and must not be empty.

    :raises AuthError: ``MALFORMED_HEADER`` otherwise.
    """
    raw = headers.get(AUTHORIZATION_HEADER)
    prefix = f"{scheme} "
    if not raw or not raw.startswith(prefix) or raw.count(prefix) != 1:
        raise AuthError(AuthFailure.MALFORMED_HEADER)
    credential = raw[len(prefix) :].strip()
    if not credential:
        raise AuthError(AuthFailure.MALFORMED_HEADER)
    return credential


class AuthorizationGuard:
    """
    Authenticate requests and gate mutations on ownership.

    :param codec: Access-token validator.
    :type codec: TokenCodec
    """

    def __init__(self, codec: TokenCodec) -> None:
        self.codec = codec

    def extract_bearer(self, headers: Mapping[str, str]) -> str:
        return _extract_credential(headers, BEARER_SCHEME)

    def extract_api_key(self, headers: Mapping[str, str]) -> str:
        return _extract_credential(headers, API_KEY_SCHEME)

    def authenticate(self, headers: Mapping[str, str], signing_secret: str) -> uuid.UUID:
        """
        Resolve the identity behind a bearer access token.

        :returns: Identity id carried in the token subject.
        :raises AuthError: ``MALFORMED_HEADER`` for a bad header,
            ``UNAUTHORIZED`` for any token failure.
        """
        token = self.extract_bearer(headers)
        try:
            return self.codec.validate(token, signing_secret)
        except TokenError as exc:
            log_auth_event(log, "access_token_rejected", reason=exc.kind.value)
            raise AuthError(AuthFailure.UNAUTHORIZED) from exc

    def authorize_ownership(self, identity_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        """
        :raises AuthError: ``FORBIDDEN`` unless ``identity_id == owner_id``.
        """
        try:
            authorize_ownership(identity_id, owner_id)
        except AuthError:
            log_auth_event(log, "forbidden", identity_id=identity_id)
            raise
