# chirpy/services/auth/service.py
from __future__ import annotations

import logging
import threading

from chirpy.core.logger import log_auth_event
from chirpy.services._shared.base import BaseService, ServiceContext
from chirpy.services._shared.errors import (
    AuthError,
    AuthFailure,
    MismatchError,
    NotFoundError,
)
from chirpy.services._shared.ports import CredentialHasher, RevocableTokenStore, TokenCodec
from chirpy.services.auth.dto import (
    AccessTokenOut,
    AuthTokenConfig,
    LoginIn,
    LoginOut,
    RefreshIn,
    RevokeIn,
)
from chirpy.services.identity.dto import UserPublicOut

log = logging.getLogger(__name__)

_DUMMY_PASSWORD = "chirpy-timing-equalizer"


# Keyed by id() so hashers need not be hashable; the entry pins the hasher
# so a recycled id never matches a different instance.
_dummy_digests: dict[int, tuple[CredentialHasher, str]] = {}
_dummy_lock = threading.Lock()


def _dummy_hash(hasher: CredentialHasher) -> str:
    """Return a digest of a throwaway password, computed once per hasher."""
    with _dummy_lock:
        cached = _dummy_digests.get(id(hasher))
    if cached is not None and cached[0] is hasher:
        return cached[1]
    digest = hasher.hash(_DUMMY_PASSWORD)
    with _dummy_lock:
        if len(_dummy_digests) >= 8:
            _dummy_digests.clear()
        _dummy_digests[id(hasher)] = (hasher, digest)
    return digest


class SessionService(BaseService):
    """
    Session lifecycle service (login / refresh / revoke).

    Access tokens come from the :class:`TokenCodec` port. Refresh tokens are
    opaque strings owned by the :class:`RevocableTokenStore`; each moves from
    *active* to either *expired* (time) or *revoked* (explicit), both terminal.
    """

    def __init__(
        self,
        *,
        hasher: CredentialHasher,
        codec: TokenCodec,
        store: RevocableTokenStore,
        token_cfg: AuthTokenConfig,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param hasher: Verifies submitted passwords.
        :param codec: Issues access tokens.
        :param store: Persists and revokes refresh tokens.
        :param token_cfg: Signing secret and lifetimes.
        """
        super().__init__(ctx=ctx)
        self.hasher = hasher
        self.codec = codec
        self.store = store
        self.cfg = token_cfg

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and open a session.

        This is the only operation that creates refresh tokens.

        :param dto: Login input.
        :returns: Access token, refresh token and the public user view.
        :raises AuthError: ``NOT_FOUND`` for an unknown email,
            ``BAD_CREDENTIAL`` for a wrong password.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(dto.email)
            if user is not None:
                user_out = UserPublicOut.from_model(user)
                stored_hash = user.password_hash

        if user is None:
            # Same hashing cost as a real verification.
            try:
                self.hasher.verify(dto.password, _dummy_hash(self.hasher))
            except MismatchError:
                pass
            log_auth_event(log, "login_failed")
            raise AuthError(AuthFailure.NOT_FOUND)

        try:
            self.hasher.verify(dto.password, stored_hash)
        except MismatchError as exc:
            log_auth_event(log, "login_failed", identity_id=user_out.id)
            raise AuthError(AuthFailure.BAD_CREDENTIAL) from exc

        access_token = self.codec.issue(user_out.id, self.cfg.signing_secret, self.cfg.access_ttl)
        refresh_token = self.store.generate()
        self.store.persist(refresh_token, user_out.id, self.cfg.refresh_ttl)

        log_auth_event(log, "login", level=logging.INFO, identity_id=user_out.id)
        return LoginOut(access_token=access_token, refresh_token=refresh_token, user=user_out)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AccessTokenOut:
        """
        Mint a new access token from an active refresh token.

        The refresh token is not rotated and stays usable until it expires
        or is revoked.

        :raises AuthError: ``UNAUTHORIZED`` when the token is unknown,
            expired or revoked, or when its owner no longer exists.
        """
        try:
            view = self.store.resolve(dto.token)
        except NotFoundError as exc:
            log_auth_event(log, "refresh_rejected", reason="not_found")
            raise AuthError(AuthFailure.UNAUTHORIZED) from exc

        if not view.is_active(self.now_utc()):
            reason = "revoked" if view.revoked_at is not None else "expired"
            log_auth_event(log, "refresh_rejected", reason=reason, identity_id=view.identity_id)
            raise AuthError(AuthFailure.UNAUTHORIZED)

        with self.ro_uow() as uow:
            owner_exists = uow.users.get(view.identity_id) is not None
        if not owner_exists:
            log_auth_event(
                log, "refresh_rejected", reason="identity_missing", identity_id=view.identity_id
            )
            raise AuthError(AuthFailure.UNAUTHORIZED)

        token = self.codec.issue(view.identity_id, self.cfg.signing_secret, self.cfg.access_ttl)
        return AccessTokenOut(token=token)

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(self, dto: RevokeIn) -> None:
        """
        Revoke a refresh token. Idempotent; unknown tokens are ignored.
        """
        try:
            self.store.revoke(dto.token)
        except NotFoundError:
            log_auth_event(log, "revoke_unknown_token", level=logging.INFO)
            return
        log_auth_event(log, "revoke", level=logging.INFO)
