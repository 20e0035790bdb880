"""Paginate and sort records from in-memory collections or SQL queries."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import Select
from sqlalchemy.orm import Session

from paginize.config import get_settings
from paginize.schemas.filter import Filter, SortColumn
from paginize.schemas.paged_result import PagedResult
from paginize.services.columns import ColumnRegistry
from paginize.services.sources import QuerySource, SortKey, as_source
from paginize.utils.pagination import (
    clamp_page,
    count_pages,
    normalize_page,
    normalize_page_size,
    page_offset,
)

logger = logging.getLogger(__name__)


def paginate(
    source: Any,
    filter: Filter | None = None,
    *,
    columns: Mapping[str, Any] | None = None,
) -> PagedResult:
    """
    Sort a source by the filter's columns and return one page of it.

    Malformed paging input is normalized rather than rejected: a missing
    filter means page 1 with the default page size and no sorting, a page
    below 1 becomes 1, a page size below 1 becomes the default, and a page
    past the end becomes the last page. With no records the requested page
    is echoed back as-is.

    Args:
        source: Iterable of records, QuerySource, or any other DataSource
        filter: Page, page size and sort columns; ``search`` is ignored
        columns: Optional ``name -> getter / SQL expression`` mapping that
            replaces the columns discovered on the records

    Returns:
        PagedResult with the page's items and pagination metadata

    Raises:
        TypeError: when sort values cannot be compared with each other
    """
    default_page_size = get_settings().default_page_size
    if filter is None:
        filter = Filter(page_size=default_page_size)

    data = as_source(source)
    sort_keys = resolve_sort_keys(data.columns(columns), filter.sort_columns)
    if sort_keys:
        data = data.order_by(sort_keys)

    page_size = normalize_page_size(filter.page_size, default_page_size)
    page = normalize_page(filter.page)

    total_count = data.count()
    total_pages = count_pages(total_count, page_size)

    if total_count == 0:
        return PagedResult(
            page_index=page,
            page_size=page_size,
            total_count=0,
            total_pages=0,
            items=[],
        )

    page_index = clamp_page(page, total_pages)
    if page_index != page:
        logger.debug(f"Page {page} is past the last page, serving page {page_index}")

    return PagedResult(
        page_index=page_index,
        page_size=page_size,
        total_count=total_count,
        total_pages=total_pages,
        items=data.slice(page_offset(page_index, page_size), page_size),
    )


def paginate_query(
    db: Session,
    statement: Select,
    filter: Filter | None = None,
    *,
    columns: Mapping[str, Any] | None = None,
) -> PagedResult:
    """
    Paginate a SELECT statement without loading more than one page.

    Ordering, counting and slicing all run in the database: one COUNT query
    and one windowed query per call.

    Example:
        result = paginate_query(db, select(Bill).where(Bill.congress == 118), filter)
    """
    return paginate(QuerySource(db, statement), filter, columns=columns)


def resolve_sort_keys(
    registry: ColumnRegistry,
    sort_columns: Sequence[SortColumn] | None,
) -> list[SortKey]:
    """
    Resolve sort columns against a registry, in priority order.

    Columns that do not resolve are dropped; the rest keep their order.
    """
    keys = []
    for sort_column in sort_columns or ():
        column = registry.resolve(sort_column.column)
        if column is None:
            logger.debug(f"Ignoring unknown sort column '{sort_column.column}'")
            continue
        keys.append((column, sort_column.direction))
    return keys
