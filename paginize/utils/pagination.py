"""Page arithmetic shared by every data source."""


def normalize_page(page: int) -> int:
    """Pages below 1 fall back to the first page."""
    return page if page >= 1 else 1


def normalize_page_size(page_size: int, default: int) -> int:
    """Page sizes below 1 fall back to ``default``."""
    return page_size if page_size >= 1 else default


def count_pages(total: int, page_size: int) -> int:
    """
    Calculate the number of pages needed for ``total`` items.

    Args:
        total: Total number of items
        page_size: Number of items per page (must be >= 1)

    Returns:
        Ceiling of total / page_size, or 0 when there are no items
    """
    if total <= 0:
        return 0
    return (total + page_size - 1) // page_size


def clamp_page(page: int, total_pages: int) -> int:
    """
    Pull a page past the end back to the last page.

    With no pages at all the requested page is returned as-is.
    """
    return min(page, total_pages) if total_pages > 0 else page


def page_offset(page: int, page_size: int) -> int:
    """Zero-based index of the first item on a 1-based page."""
    return (page - 1) * page_size
