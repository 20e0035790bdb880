"""Pydantic schemas and result containers for paging requests."""

from paginize.schemas.filter import (
    Filter,
    SortColumn,
    SortDirection,
    ValidatedFilter,
    validate_filter,
)
from paginize.schemas.paged_result import PagedResult

__all__ = [
    "Filter",
    "SortColumn",
    "SortDirection",
    "ValidatedFilter",
    "validate_filter",
    "PagedResult",
]
