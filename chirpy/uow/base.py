"""Abstract Unit of Work contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chirpy.repositories import ChirpRepository, RefreshTokenRepository, UserRepository


class UnitOfWork(ABC):
    """
    One transactional scope shared by the ``users``, ``chirps`` and
    ``refresh_tokens`` repositories.

    Leaving the ``with`` block normally commits (read-write scopes) or
    discards (read-only scopes); leaving it with an exception rolls back.
    """

    users: UserRepository
    chirps: ChirpRepository
    refresh_tokens: RefreshTokenRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
