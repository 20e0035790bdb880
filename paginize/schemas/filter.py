"""Pydantic schemas for paging and sorting requests."""

from enum import Enum
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SortDirection(str, Enum):
    """Direction applied to a single sort column."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: object) -> "SortDirection":
        """Only a case-insensitive 'desc' sorts descending; anything else is ascending."""
        if isinstance(value, str) and value.lower() == "desc":
            return cls.DESCENDING
        return cls.ASCENDING


class SortColumn(BaseModel):
    """A column name and the direction to sort it in."""

    model_config = ConfigDict(frozen=True)

    column: str = Field("", description="Record field to sort by, matched case-insensitively")
    direction: SortDirection = Field(
        SortDirection.ASCENDING,
        validation_alias=AliasChoices("direction", "order"),
        description="'asc' or 'desc'",
    )

    @field_validator("direction", mode="before")
    @classmethod
    def _coerce_direction(cls, value: object) -> SortDirection:
        return SortDirection.parse(value)

    @classmethod
    def parse(cls, text: str) -> "SortColumn":
        """
        Build a sort column from ``column`` or ``column:direction`` text.

        Examples:
            SortColumn.parse("name")        -> name ascending
            SortColumn.parse("price:desc")  -> price descending
        """
        column, _, direction = text.partition(":")
        return cls(column=column.strip(), direction=direction.strip())

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING


class Filter(BaseModel):
    """
    Paging and sorting parameters for a single ``paginate`` call.

    Non-positive ``page`` and ``page_size`` values are accepted here and
    normalized by the pagination service rather than rejected.
    """

    search: str | None = Field(
        None, description="Search term for callers that narrow the source themselves"
    )
    page: int = Field(1, description="Page number (1-based)")
    page_size: int = Field(
        10,
        validation_alias=AliasChoices("page_size", "pageSize"),
        description="Number of items per page",
    )
    sort_columns: list[SortColumn] | None = Field(
        None,
        validation_alias=AliasChoices("sort_columns", "sortColumns"),
        description="Columns to sort by, in priority order",
    )


class ValidatedFilter(Filter):
    """Filter that rejects a page or page size below 1."""

    page: int = Field(1, ge=1, description="Page number (1-based)")
    page_size: int = Field(
        10,
        ge=1,
        validation_alias=AliasChoices("page_size", "pageSize"),
        description="Number of items per page",
    )


def validate_filter(filter: Filter) -> ValidatedFilter:
    """
    Check a filter against the page and page size ranges.

    Raises:
        pydantic.ValidationError: naming each field that is out of range
    """
    return ValidatedFilter.model_validate(filter.model_dump())
