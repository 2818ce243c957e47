from dataclasses import dataclass
from typing import Tuple

from core.storage.statements import ASC


@dataclass(frozen=True)
class Table:
    """Definition of one wide-column table, keyed for a single access pattern."""

    name: str
    columns: Tuple[Tuple[str, str], ...]
    partition_key: Tuple[str, ...]
    clustering: Tuple[Tuple[str, str], ...] = ()

    @property
    def column_names(self):
        return tuple(name for name, _ in self.columns)

    @property
    def clustering_columns(self):
        return tuple(name for name, _ in self.clustering)

    @property
    def primary_key(self):
        return self.partition_key + self.clustering_columns

    def create_cql(self, keyspace=None):
        qualified = f"{keyspace}.{self.name}" if keyspace else self.name
        columns = ",\n    ".join(f"{name} {cql_type}" for name, cql_type in self.columns)
        partition = ", ".join(self.partition_key)
        key = f"(({partition})"
        if self.clustering_columns:
            key += ", " + ", ".join(self.clustering_columns)
        key += ")"
        cql = f"CREATE TABLE IF NOT EXISTS {qualified} (\n    {columns},\n    PRIMARY KEY {key}\n)"
        if any(order != ASC for _, order in self.clustering):
            ordering = ", ".join(f"{name} {order}" for name, order in self.clustering)
            cql += f" WITH CLUSTERING ORDER BY ({ordering})"
        return cql

    def drop_cql(self, keyspace=None):
        qualified = f"{keyspace}.{self.name}" if keyspace else self.name
        return f"DROP TABLE IF EXISTS {qualified}"


def create_keyspace_cql(keyspace, replication_factor=1):
    return (
        f"CREATE KEYSPACE IF NOT EXISTS {keyspace} "
        f"WITH replication = {{'class': 'SimpleStrategy', 'replication_factor': {int(replication_factor)}}}"
    )
