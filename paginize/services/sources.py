"""Data sources that can be ordered, counted and sliced."""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Select, inspect
from sqlalchemy.orm import Session

from paginize.schemas.filter import SortDirection
from paginize.services.columns import (
    Column,
    ColumnRegistry,
    registry_for_records,
    registry_for_statement,
    statement_entity,
)
from paginize.utils.db import count_rows, fetch_window

logger = logging.getLogger(__name__)

SortKey = tuple[Column, SortDirection]


@runtime_checkable
class DataSource(Protocol):
    """Anything ``paginate`` can page through."""

    def columns(self, declared: Mapping[str, Any] | None = None) -> ColumnRegistry:
        """Sortable columns, from ``declared`` when given, else from the records."""
        ...

    def order_by(self, keys: Sequence[SortKey]) -> "DataSource":
        """A new source ordered by ``keys``, first key first."""
        ...

    def count(self) -> int:
        ...

    def slice(self, offset: int, limit: int) -> list[Any]:
        ...


class SequenceSource:
    """In-memory records, materialized once and never mutated."""

    def __init__(self, records: Iterable[Any]):
        self._records = list(records)

    def columns(self, declared: Mapping[str, Any] | None = None) -> ColumnRegistry:
        if declared is not None:
            return ColumnRegistry.from_mapping(declared)
        return registry_for_records(self._records)

    def order_by(self, keys: Sequence[SortKey]) -> "SequenceSource":
        # Stable sorts applied from the least to the most significant key
        records = list(self._records)
        for column, direction in reversed(keys):
            records.sort(
                key=_nulls_first(column.getter),
                reverse=direction is SortDirection.DESCENDING,
            )
        return SequenceSource(records)

    def count(self) -> int:
        return len(self._records)

    def slice(self, offset: int, limit: int) -> list[Any]:
        return self._records[offset : offset + limit]


class QuerySource:
    """
    A deferred SELECT statement executed against a session.

    Nothing runs until ``count`` or ``slice`` is called; each is a single
    round-trip to the database.
    """

    def __init__(self, db: Session, statement: Select):
        self.db = db
        self.statement = statement

    def columns(self, declared: Mapping[str, Any] | None = None) -> ColumnRegistry:
        if declared is not None:
            return ColumnRegistry.from_mapping(declared).sql_columns()
        return registry_for_statement(self.statement)

    def order_by(self, keys: Sequence[SortKey]) -> "QuerySource":
        """
        Replace the statement's ordering with ``keys``.

        NULLs sort lowest, as they do in memory. For ``select(Model)`` the
        primary key is appended so rows with equal keys keep table order.
        """
        clauses = [_order_clause(column.expression, direction) for column, direction in keys]
        entity = statement_entity(self.statement)
        if entity is not None:
            clauses.extend(inspect(entity).primary_key)
        return QuerySource(self.db, self.statement.order_by(None).order_by(*clauses))

    def count(self) -> int:
        return count_rows(self.db, self.statement)

    def slice(self, offset: int, limit: int) -> list[Any]:
        logger.debug(f"Fetching rows {offset} to {offset + limit - 1}")
        return fetch_window(self.db, self.statement, offset, limit)


def as_source(source: Any) -> DataSource:
    """
    Wrap ``source`` as a DataSource.

    Data sources pass through untouched; any other iterable is materialized
    into a SequenceSource.

    Raises:
        TypeError: for a bare SELECT statement, which needs a session
    """
    if isinstance(source, Select):
        raise TypeError("SELECT statements need a session: use paginate_query(db, statement)")
    if isinstance(source, DataSource):
        return source
    return SequenceSource(source)


def _nulls_first(getter: Callable[[Any], Any]) -> Callable[[Any], tuple[bool, Any]]:
    def key(record: Any) -> tuple[bool, Any]:
        value = getter(record)
        return (value is not None, value)

    return key


def _order_clause(expression: Any, direction: SortDirection) -> Any:
    if direction is SortDirection.DESCENDING:
        return expression.desc().nulls_last()
    return expression.asc().nulls_first()
