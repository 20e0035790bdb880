"""FastAPI dependencies for reading paging parameters from a request."""

from fastapi import Query

from paginize.schemas.filter import Filter, SortColumn


async def get_filter(
    search: str | None = Query(None, description="Search term, passed through to the endpoint"),
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    page_size: int = Query(10, ge=1, description="Number of items per page"),
    sort: list[str] = Query(
        [], description="Sort columns in priority order, as 'column' or 'column:desc'"
    ),
) -> Filter:
    """
    Build a Filter from query parameters.

    Out-of-range pages and page sizes are rejected with 422 here, at the
    request boundary, instead of being normalized later:
        @router.get("")
        async def list_items(filter: Filter = Depends(get_filter), db: Session = Depends(get_db)):
            return paginate_query(db, select(Item), filter)
    """
    return Filter(
        search=search,
        page=page,
        page_size=page_size,
        sort_columns=[SortColumn.parse(value) for value in sort if value.strip()] or None,
    )
