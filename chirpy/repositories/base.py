"""Generic SQLAlchemy 2.x repository shared by the chirpy aggregates.

Repositories stay persistence-only: they never commit or roll back (the Unit
of Work does), never apply domain policies, and only order, filter or update
through per-repository whitelists.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from chirpy.core.extensions import db

E = TypeVar("E")  # mapped entity


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Split ``["-created_at", "email"]`` into ``[("created_at", True), ("email", False)]``.

    Blank tokens are dropped.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        descending = token.startswith("-")
        name = token.lstrip("-").strip()
        if name:
            parsed.append((name, descending))
    return parsed


class BaseRepository(Generic[E]):
    """Persistence primitives for one mapped model.

    Subclasses set :attr:`model` and may override the whitelist hooks
    ``_sortable_fields``, ``_filterable_fields`` and ``_updatable_fields``,
    plus ``_pk_attr`` when the key is not ``id``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The Unit of Work session, or the Flask-scoped one when none was given."""
        return self._session if self._session is not None else cast(Session, db.session)

    # -------------------------------- Hooks ---------------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        return cast(InstrumentedAttribute[Any], getattr(self.model, "id"))

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    # ------------------------------- Reading --------------------------------

    def _by_pk(self, entity_id: Any) -> Select[Any]:
        return select(self.model).where(self._pk_attr() == entity_id)

    def get(self, entity_id: Any) -> E | None:
        return cast(E | None, self.session.execute(self._by_pk(entity_id)).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get` but locks the row (``FOR UPDATE``) where the backend can."""
        stmt = self._by_pk(entity_id).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] = (),
    ) -> list[E]:
        """Return rows matching whitelisted equality ``filters`` in ``sort`` order.

        Filters whose value is ``None`` and unknown filter or sort names are
        ignored. The primary key always closes the ``ORDER BY`` so equal sort
        keys still list deterministically.
        """
        stmt = select(self.model)

        allowed_filters = self._filterable_fields()
        for name, value in (filters or {}).items():
            if value is not None and name in allowed_filters:
                stmt = stmt.where(allowed_filters[name] == value)

        allowed_sorts = self._sortable_fields()
        for name, descending in parse_sort_tokens(sort):
            column = allowed_sorts.get(name)
            if column is not None:
                stmt = stmt.order_by(column.desc() if descending else column.asc())
        stmt = stmt.order_by(self._pk_attr().asc())

        return list(self.session.execute(stmt).scalars().all())

    # ------------------------------- Writing --------------------------------

    def flush(self) -> None:
        self.session.flush()

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so defaults and the key are populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted attributes (``@validates`` hooks run) and flush.

        :raises ValueError: If a field is not in ``_updatable_fields``.
        """
        rejected = sorted(set(fields) - self._updatable_fields())
        if rejected:
            raise ValueError(f"Fields not updatable on {self.model.__name__}: {rejected}")
        for name, value in fields.items():
            setattr(instance, name, value)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def delete_all(self) -> int:
        """Bulk-delete every row and return the count.

        Bulk deletes skip ORM cascades, so callers remove dependents first.
        """
        result = self.session.execute(delete(self.model))
        return int(result.rowcount or 0)
