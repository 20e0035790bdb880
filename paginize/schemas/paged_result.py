"""Result container for paginated queries."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class PagedResult(Generic[T]):
    """One page of records plus the metadata describing where it sits."""

    page_index: int = 0
    page_size: int = 0
    total_count: int = 0
    total_pages: int = 0
    items: list[T] = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        """Whether a page exists before this one."""
        return self.total_count > 0 and self.page_index > 1

    @property
    def has_next(self) -> bool:
        """Whether a page exists after this one."""
        return self.page_index < self.total_pages

    def map(self, func: Callable[[T], U]) -> "PagedResult[U]":
        """Return a copy with ``func`` applied to every item, e.g. ORM rows to response schemas."""
        return PagedResult(
            page_index=self.page_index,
            page_size=self.page_size,
            total_count=self.total_count,
            total_pages=self.total_pages,
            items=[func(item) for item in self.items],
        )
