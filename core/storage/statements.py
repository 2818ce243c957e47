"""
CQL statement values.

Repositories describe what they want as small immutable objects; the storage
clients decide how to run them (prepared statements against Cassandra, or a
direct interpretation in :mod:`core.storage.memory`).
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

VISIBILITY_COLUMN = "visible"

ASC = "ASC"
DESC = "DESC"


@dataclass(frozen=True)
class Select:
    table: str
    columns: Tuple[str, ...]
    where: Tuple[Tuple[str, object], ...] = ()
    order_by: Optional[Tuple[str, str]] = None
    limit: Optional[int] = None
    allow_filtering: bool = False

    @property
    def params(self):
        return [value for _, value in self.where]

    def to_cql(self):
        cql = f"SELECT {', '.join(self.columns)} FROM {self.table}"
        if self.where:
            cql += " WHERE " + " AND ".join(f"{column} = ?" for column, _ in self.where)
        if self.order_by:
            cql += f" ORDER BY {self.order_by[0]} {self.order_by[1]}"
        if self.limit is not None:
            cql += f" LIMIT {int(self.limit)}"
        if self.allow_filtering:
            cql += " ALLOW FILTERING"
        return cql


@dataclass(frozen=True)
class Insert:
    table: str
    values: Tuple[Tuple[str, object], ...]
    if_not_exists: bool = False

    @property
    def params(self):
        return [value for _, value in self.values]

    def to_cql(self):
        columns = ", ".join(column for column, _ in self.values)
        markers = ", ".join("?" for _ in self.values)
        cql = f"INSERT INTO {self.table} ({columns}) VALUES ({markers})"
        if self.if_not_exists:
            cql += " IF NOT EXISTS"
        return cql

    def as_dict(self):
        return dict(self.values)


@dataclass(frozen=True)
class Update:
    table: str
    assignments: Tuple[Tuple[str, object], ...]
    where: Tuple[Tuple[str, object], ...] = field(default=())
    if_exists: bool = False

    @property
    def params(self):
        return [value for _, value in self.assignments] + [value for _, value in self.where]

    def to_cql(self):
        sets = ", ".join(f"{column} = ?" for column, _ in self.assignments)
        keys = " AND ".join(f"{column} = ?" for column, _ in self.where)
        cql = f"UPDATE {self.table} SET {sets} WHERE {keys}"
        if self.if_exists:
            cql += " IF EXISTS"
        return cql


def insert(table, values: dict, if_not_exists=False) -> Insert:
    return Insert(table=table, values=tuple(values.items()), if_not_exists=if_not_exists)


def update(table, key: dict, if_exists=False, **assignments) -> Update:
    return Update(
        table=table,
        assignments=tuple(assignments.items()),
        where=tuple(key.items()),
        if_exists=if_exists,
    )


def full_scan(table, columns) -> Select:
    return Select(table=table, columns=tuple(columns))


def partition_query(table, columns, partition: dict, order_by=None, visible=None, limit=None) -> Select:
    """
    Query one partition, ordered by its clustering identifier.

    ``visible`` is tri-state. ``None`` keeps the query on the primary index;
    ``True`` or ``False`` adds an equality predicate on the visibility column,
    which is not part of the key, so the query also needs ALLOW FILTERING.
    """
    where = tuple(partition.items())
    allow_filtering = False
    if visible is not None:
        if not isinstance(visible, bool):
            raise TypeError(f"visible must be a bool or None, got {type(visible).__name__}")
        where += ((VISIBILITY_COLUMN, visible),)
        allow_filtering = True

    return Select(
        table=table,
        columns=tuple(columns),
        where=where,
        order_by=order_by,
        limit=limit,
        allow_filtering=allow_filtering,
    )
