"""Pagination with multi-column sorting for in-memory records and SQL queries."""

from paginize.schemas import (
    Filter,
    PagedResult,
    SortColumn,
    SortDirection,
    ValidatedFilter,
    validate_filter,
)
from paginize.services.columns import Column, ColumnRegistry, registry_for
from paginize.services.pagination import paginate, paginate_query
from paginize.services.sources import DataSource, QuerySource, SequenceSource

__version__ = "0.1.0"

__all__ = [
    "Filter",
    "PagedResult",
    "SortColumn",
    "SortDirection",
    "ValidatedFilter",
    "validate_filter",
    "Column",
    "ColumnRegistry",
    "registry_for",
    "paginate",
    "paginate_query",
    "DataSource",
    "QuerySource",
    "SequenceSource",
]
