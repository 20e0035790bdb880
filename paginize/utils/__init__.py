"""Utility functions and helpers."""

from paginize.utils.db import count_rows, fetch_window
from paginize.utils.pagination import (
    clamp_page,
    count_pages,
    normalize_page,
    normalize_page_size,
    page_offset,
)

__all__ = [
    "count_rows",
    "fetch_window",
    "clamp_page",
    "count_pages",
    "normalize_page",
    "normalize_page_size",
    "page_offset",
]
