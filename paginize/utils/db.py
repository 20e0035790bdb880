"""Database utility functions for SELECT statements."""

from typing import Any
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


def count_rows(db: Session, statement: Select) -> int:
    """
    Count the rows a statement would return.

    Ordering never changes a count, so it is dropped before wrapping the
    statement in a subquery.

    Args:
        db: Database session
        statement: SELECT statement to count

    Returns:
        Number of rows
    """
    count_query = select(func.count()).select_from(statement.order_by(None).subquery())
    return db.execute(count_query).scalar() or 0


def fetch_window(db: Session, statement: Select, offset: int, limit: int) -> list[Any]:
    """
    Execute a statement restricted to ``limit`` rows starting at ``offset``.

    Statements selecting a single entity or column return plain values;
    anything wider returns rows.
    """
    query = statement.offset(offset).limit(limit)
    if len(statement.column_descriptions) == 1:
        return list(db.scalars(query).all())
    return list(db.execute(query).all())
