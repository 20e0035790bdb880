"""Column registries: resolve sort column names to value accessors."""

import dataclasses
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import cached_property, lru_cache
from inspect import get_annotations
from operator import attrgetter, methodcaller
from typing import Any

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select, inspect
from sqlalchemy.orm import Mapper, QueryableAttribute

Getter = Callable[[Any], Any]

_LIBRARY_PACKAGES = {"pydantic", "sqlalchemy"}


@dataclass(frozen=True)
class Column:
    """A sortable column: how to read it in Python and, optionally, in SQL."""

    name: str
    getter: Getter
    expression: Any = None  # ColumnElement or ORM attribute usable in ORDER BY


class ColumnRegistry(Mapping[str, Column]):
    """
    Case-insensitive lookup of sortable columns by name.

    Matching is exact apart from case: no prefixes, no dotted paths.
    Names starting with an underscore are never registered, and when two
    names differ only by case the first one registered wins.
    """

    def __init__(self, columns: Iterable[Column] = ()):
        self._columns: dict[str, Column] = {}
        for column in columns:
            if column.name.startswith("_"):
                continue
            self._columns.setdefault(column.name.lower(), column)

    def __getitem__(self, name: str) -> Column:
        return self._columns[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"<ColumnRegistry {sorted(self._columns)}>"

    def resolve(self, name: str | None) -> Column | None:
        """Return the column registered under ``name``, or None."""
        if not name:
            return None
        return self._columns.get(name.lower())

    def sql_columns(self) -> "ColumnRegistry":
        """The subset of columns that can be ordered by in SQL."""
        return ColumnRegistry(c for c in self._columns.values() if c.expression is not None)

    @classmethod
    def from_mapping(cls, columns: Mapping[str, Any]) -> "ColumnRegistry":
        """
        Build a registry from ``name -> spec`` pairs.

        A spec may be a ``Column``, a SQLAlchemy expression / ORM attribute,
        or any callable taking a record and returning its value.
        """
        return cls(_column_from_spec(name, spec) for name, spec in columns.items())


def _column_from_spec(name: str, spec: Any) -> Column:
    if isinstance(spec, Column):
        return dataclasses.replace(spec, name=name)
    if isinstance(spec, (ColumnElement, QueryableAttribute)):
        key = getattr(spec, "key", None) or name
        return Column(name, attrgetter(key), spec)
    if callable(spec):
        return Column(name, spec)
    raise TypeError(f"Cannot build sort column {name!r} from {spec!r}")


@lru_cache(maxsize=256)
def registry_for(record_type: type) -> ColumnRegistry:
    """
    Build the column registry for a record type.

    A type declaring ``__sort_columns__`` (name -> getter or SQL expression)
    gets exactly those columns. Otherwise the columns are the type's fields
    (SQLAlchemy mapped columns, dataclass fields, pydantic fields, named
    tuple fields, or class annotations and slots) followed by its public
    properties.
    """
    declared = getattr(record_type, "__sort_columns__", None)
    if declared is not None:
        return ColumnRegistry.from_mapping(declared)
    return ColumnRegistry([*_field_columns(record_type), *_property_columns(record_type)])


def registry_for_record(record: Any) -> ColumnRegistry:
    """
    Build the column registry for a sample record.

    Covers what the type alone cannot show: the keys of a mapping and the
    instance attributes of a plain object.
    """
    if isinstance(record, Mapping):
        return ColumnRegistry(
            Column(key, methodcaller("get", key)) for key in record if isinstance(key, str)
        )

    registry = registry_for(type(record))
    if getattr(type(record), "__sort_columns__", None) is not None or not hasattr(record, "__dict__"):
        return registry
    instance_columns = [Column(name, _optional_attr(name)) for name in vars(record)]
    return ColumnRegistry([*registry.values(), *instance_columns])


def registry_for_records(records: Iterable[Any]) -> ColumnRegistry:
    """
    Build the column registry for a batch of records.

    Mapping keys and instance attributes are collected from every record,
    so a column only some records carry still resolves; the rest read it
    as None.
    """
    columns: list[Column] = []
    seen: set[type] = set()
    for record in records:
        # Records without per-instance keys share their type's registry
        if not isinstance(record, Mapping) and not hasattr(record, "__dict__"):
            if type(record) in seen:
                continue
            seen.add(type(record))
        columns.extend(registry_for_record(record).values())
    return ColumnRegistry(columns)


def _optional_attr(name: str) -> Getter:
    return lambda record: getattr(record, name, None)


def registry_for_statement(statement: Select) -> ColumnRegistry:
    """
    Build the column registry for a SELECT statement.

    ``select(Model)`` resolves against the mapped class; any other statement
    resolves against its selected columns. Only SQL-orderable columns are kept.
    """
    entity = statement_entity(statement)
    if entity is not None:
        return registry_for(entity).sql_columns()

    return ColumnRegistry(
        Column(column.key, attrgetter(column.key), column)
        for column in statement.selected_columns
    )


def statement_entity(statement: Select) -> type | None:
    """The mapped class of a single-entity ``select(Model)``, if any."""
    descriptions = statement.column_descriptions
    if len(descriptions) != 1:
        return None
    entity = descriptions[0]["entity"]
    if entity is not None and descriptions[0]["expr"] is entity:
        return entity
    return None


# -----------------------------------------------------------------------------
# Introspection ---------------------------------------------------------------
# -----------------------------------------------------------------------------


def _field_columns(record_type: type) -> Iterator[Column]:
    mapper = inspect(record_type, raiseerr=False)
    if isinstance(mapper, Mapper):
        for attr in mapper.column_attrs:
            yield Column(attr.key, attrgetter(attr.key), getattr(record_type, attr.key))
        return

    for name in _field_names(record_type):
        yield Column(name, attrgetter(name))


def _field_names(record_type: type) -> list[str]:
    if dataclasses.is_dataclass(record_type):
        return [f.name for f in dataclasses.fields(record_type)]
    if issubclass(record_type, BaseModel):
        return [*record_type.model_fields, *record_type.model_computed_fields]
    if issubclass(record_type, tuple) and hasattr(record_type, "_fields"):
        return list(record_type._fields)

    names = []
    for klass in reversed(record_type.__mro__):
        if klass is object:
            continue
        names.extend(get_annotations(klass))
        slots = klass.__dict__.get("__slots__", ())
        names.extend((slots,) if isinstance(slots, str) else slots)
    return names


def _property_columns(record_type: type) -> Iterator[Column]:
    for klass in record_type.__mro__:
        # BaseModel, DeclarativeBase and friends expose their own properties
        if klass is object or klass.__module__.partition(".")[0] in _LIBRARY_PACKAGES:
            continue
        for name, value in vars(klass).items():
            if isinstance(value, (property, cached_property)):
                yield Column(name, attrgetter(name))
