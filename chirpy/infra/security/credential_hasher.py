# chirpy/infra/security/credential_hasher.py
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from chirpy.services._shared.errors import HashingError, MismatchError


@dataclass(frozen=True, slots=True)
class WerkzeugCredentialHasher:
    """
    Werkzeug adapter for the :class:`~chirpy.services._shared.ports.CredentialHasher` port.

    Digests carry their own method and salt (``method$salt$hash``), so
    changing ``method`` only affects new hashes. ``check_password_hash``
    compares with :func:`hmac.compare_digest`.

    :param method: Werkzeug hash method, e.g. ``"scrypt"`` or ``"pbkdf2:sha256"``.
    """

    method: str = "scrypt"

    def hash(self, plaintext: str) -> str:
        if not isinstance(plaintext, str):
            raise HashingError("password must be a string")
        try:
            return generate_password_hash(plaintext, method=self.method)
        except (ValueError, TypeError) as exc:
            raise HashingError("could not hash password") from exc

    def verify(self, plaintext: str, hashed: str) -> None:
        if not isinstance(plaintext, str) or not isinstance(hashed, str):
            raise MismatchError()
        try:
            matches = check_password_hash(hashed, plaintext)
        except (ValueError, TypeError) as exc:
            raise MismatchError() from exc
        if not matches:
            raise MismatchError()
