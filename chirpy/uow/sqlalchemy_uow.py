"""Units of Work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from chirpy.core.extensions import db
from chirpy.repositories import ChirpRepository, RefreshTokenRepository, UserRepository
from chirpy.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.chirps = ChirpRepository(session=self.session)
        self.refresh_tokens = RefreshTokenRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW on the Flask-scoped session.

    Commits when the block exits cleanly, rolls back otherwise.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only scope on the Flask-scoped session.

    Any flush attempted while the scope is open fails. A transaction started
    by the scope is rolled back on exit; a transaction that was already open
    (e.g. the test fixture's) is left untouched.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._owns_transaction = False
        self._guarded: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        session = self.session
        # Listen on the thread-local Session, never on the scoped registry.
        self._guarded = session() if isinstance(session, scoped_session) else session
        self._owns_transaction = not self._guarded.in_transaction()
        event.listen(self._guarded, "before_flush", _reject_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        guarded, self._guarded = self._guarded, None
        if guarded is None:
            return
        event.remove(guarded, "before_flush", _reject_flush)
        if self._owns_transaction:
            guarded.rollback()

    def commit(self) -> None:
        """
        :raises RuntimeError: always; read-only scopes never commit.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()


def _reject_flush(session: Session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError("Read-only UnitOfWork: flush with pending changes rejected.")
