"""Shared test fixtures for paginize tests."""

from collections.abc import Generator
from dataclasses import dataclass
from datetime import datetime

import pytest
from sqlalchemy import Engine, String, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from paginize import paginate, paginate_query
from paginize.config import get_settings


class Base(DeclarativeBase):
    """Base class for test ORM models."""
    pass


class FruitRecord(Base):
    """Fruit stored in the test database."""

    __tablename__ = "fruits"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    created_date: Mapped[datetime]
    price: Mapped[float]
    is_active: Mapped[bool]
    grade: Mapped[str | None] = mapped_column(String(1))

    @property
    def label(self) -> str:
        return f"{self.name} ({self.price:.2f})"


@dataclass
class Fruit:
    """Fruit held in memory."""

    id: int
    name: str
    created_date: datetime
    price: float
    is_active: bool
    grade: str | None = None


FRUIT_ROWS = [
    (1, "Apple", datetime(2023, 1, 1), 1.50, True, "B"),
    (2, "Banana", datetime(2023, 1, 2), 0.75, True, None),
    (3, "Cherry", datetime(2023, 1, 3), 2.25, False, "A"),
    (4, "Date", datetime(2023, 1, 4), 3.00, True, None),
    (5, "Elderberry", datetime(2023, 1, 5), 4.50, False, "A"),
    (6, "Fig", datetime(2023, 1, 6), 2.75, True, "C"),
    (7, "Grape", datetime(2023, 1, 7), 1.25, True, None),
    (8, "Honeydew", datetime(2023, 1, 8), 3.75, False, "B"),
    (9, "Kiwi", datetime(2023, 1, 9), 2.00, True, "A"),
    (10, "Lemon", datetime(2023, 1, 10), 1.00, True, "C"),
]


def names(result) -> list[str]:
    """Names of the fruits on a page."""
    return [item.name for item in result.items]


@pytest.fixture
def fruits() -> list[Fruit]:
    """The ten test fruits as in-memory records, in id order."""
    return [Fruit(*row) for row in FRUIT_ROWS]


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the test schema."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Database session bound to the in-memory engine."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def fruit_table(db_session) -> Session:
    """Insert the ten test fruits in id order."""
    fields = ("id", "name", "created_date", "price", "is_active", "grade")
    db_session.add_all(FruitRecord(**dict(zip(fields, row))) for row in FRUIT_ROWS)
    db_session.commit()
    return db_session


@pytest.fixture(params=["memory", "query"])
def paginate_fruits(request, fruits, fruit_table):
    """Paginate the test fruits from a list or from the database."""
    if request.param == "memory":
        return lambda filter: paginate(fruits, filter)
    return lambda filter: paginate_query(fruit_table, select(FruitRecord), filter)


@pytest.fixture
def clean_settings() -> Generator[None, None, None]:
    """Drop cached settings before and after a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
