from __future__ import annotations

from typing import Protocol


class CredentialHasher(Protocol):
    """
    Port for one-way password digests.

    Implementations must use a salted, deliberately slow function and compare
    in constant time. Neither method may log its inputs.
    """

    def hash(self, plaintext: str) -> str:
        """
        :raises HashingError: If the digest cannot be produced.
        """
        ...

    def verify(self, plaintext: str, hashed: str) -> None:
        """
        :raises MismatchError: On mismatch or a malformed stored hash.
        """
        ...
