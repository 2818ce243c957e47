"""
In-memory stand-in for Cassandra, used for local development and tests
(``CASSANDRA_BACKEND=memory``).

It interprets the statement objects from :mod:`core.storage.statements`
with the semantics the application relies on: rows live in partitions,
partitions are sorted by their clustering columns, INSERT and UPDATE are
upserts, ``IF NOT EXISTS`` reports ``[applied]``, filtering on a non-key
column requires ALLOW FILTERING, and reads are paged with an opaque cursor.
Batches are applied statement by statement with no rollback.
"""

import logging
import threading
from collections import deque

from core.exceptions import StorageUnavailable
from core.storage.client import DEFAULT_FETCH_SIZE, BatchResult, Page, StorageClient
from core.storage.statements import DESC, Insert, Select, Update
from core.storage.timeuuid import sort_key

logger = logging.getLogger(__name__)

# Most recent statements kept in InMemoryStorageClient.requests
REQUEST_LOG_SIZE = 1000


class InMemoryStorageClient(StorageClient):
    def __init__(self, tables=(), fetch_size=DEFAULT_FETCH_SIZE):
        self.fetch_size = fetch_size
        self.tables = {}
        self._data = {}
        self._lock = threading.RLock()
        self.connected = False
        # Statements against these tables raise StorageUnavailable
        self.failing_tables = set()
        self.requests = deque(maxlen=REQUEST_LOG_SIZE)
        self.register(tables)

    def register(self, tables):
        with self._lock:
            for table in tables:
                self.tables[table.name] = table
                self._data.setdefault(table.name, {})

    def connect(self):
        self.connected = True
        logger.info("Using in-memory storage backend")
        return self

    def close(self):
        self.connected = False

    def create_schema(self, tables):
        self.register(tables)

    def drop_schema(self, tables):
        with self._lock:
            for table in tables:
                self.tables.pop(table.name, None)
                self._data.pop(table.name, None)

    def truncate(self):
        with self._lock:
            for name in self._data:
                self._data[name] = {}
            self.requests.clear()
            self.failing_tables.clear()

    def row_count(self, table_name):
        with self._lock:
            return sum(len(partition) for partition in self._data[table_name].values())

    # ---------- execution ----------

    def execute(self, statement, fetch_size=None, paging_state=None) -> Page:
        with self._lock:
            self._check(statement)
            self.requests.append((statement, paging_state))
            if isinstance(statement, Select):
                return self._select(statement, fetch_size, paging_state)
            if isinstance(statement, Insert):
                return Page(rows=self._insert(statement))
            if isinstance(statement, Update):
                return Page(rows=self._update(statement))
            raise StorageUnavailable(f"Unsupported statement {statement!r}")

    def execute_batch(self, statements) -> BatchResult:
        with self._lock:
            for statement in statements:
                self.execute(statement)
        return BatchResult(statements=len(statements), tables=tuple(s.table for s in statements))

    def _check(self, statement):
        if not self.connected:
            raise StorageUnavailable("Storage client is not connected")
        if statement.table not in self.tables:
            raise StorageUnavailable(f"unconfigured table {statement.table}")
        if statement.table in self.failing_tables:
            raise StorageUnavailable(f"Simulated failure on table {statement.table}")

    def _table(self, name):
        return self.tables[name], self._data[name]

    def _split_key(self, table, values: dict):
        missing = [column for column in table.primary_key if values.get(column) is None]
        if missing:
            raise StorageUnavailable(f"Missing primary key columns {missing} for {table.name}")
        partition = tuple(values[column] for column in table.partition_key)
        clustering = tuple(values[column] for column in table.clustering_columns)
        return partition, clustering

    def _insert(self, statement):
        table, data = self._table(statement.table)
        values = statement.as_dict()
        partition_key, clustering_key = self._split_key(table, values)
        partition = data.setdefault(partition_key, {})

        if statement.if_not_exists:
            existing = partition.get(clustering_key)
            if existing is not None:
                return [{"[applied]": False, **existing}]
            partition[clustering_key] = dict(values)
            return [{"[applied]": True}]

        partition.setdefault(clustering_key, {}).update(values)
        return []

    def _update(self, statement):
        table, data = self._table(statement.table)
        key = dict(statement.where)
        partition_key, clustering_key = self._split_key(table, key)
        if statement.if_exists:
            row = data.get(partition_key, {}).get(clustering_key)
            if row is None:
                return [{"[applied]": False}]
            row.update(dict(statement.assignments))
            return [{"[applied]": True}]

        row = data.setdefault(partition_key, {}).setdefault(clustering_key, dict(key))
        row.update(dict(statement.assignments))
        return []

    def _select(self, statement, fetch_size, paging_state):
        table, data = self._table(statement.table)
        where = dict(statement.where)

        partition_values = {c: where[c] for c in table.partition_key if c in where}
        if partition_values and len(partition_values) != len(table.partition_key):
            raise StorageUnavailable(f"Partial partition key restriction on {table.name}")
        filters = {c: v for c, v in where.items() if c not in table.primary_key}
        if filters and not statement.allow_filtering:
            raise StorageUnavailable(
                "Cannot execute this query as it might involve data filtering; use ALLOW FILTERING"
            )

        if partition_values:
            partition_key = tuple(partition_values[c] for c in table.partition_key)
            partitions = [data.get(partition_key, {})]
        else:
            partitions = list(data.values())

        rows = []
        for partition in partitions:
            ordered = sorted(partition.items(), key=lambda item: tuple(sort_key(v) for v in item[0]))
            if table.clustering and table.clustering[0][1] == DESC:
                ordered.reverse()
            if statement.order_by and partition_values:
                column, direction = statement.order_by
                declared = dict(table.clustering).get(column)
                if declared is None:
                    raise StorageUnavailable(f"Order by is only supported on clustering columns, got {column}")
                if declared != direction:
                    ordered.reverse()
            for _, row in ordered:
                if all(row.get(c) == v for c, v in where.items()):
                    rows.append({column: row.get(column) for column in statement.columns})

        if statement.limit is not None:
            rows = rows[: statement.limit]

        fetch_size = fetch_size or DEFAULT_FETCH_SIZE
        start = int(paging_state.decode()) if paging_state else 0
        end = start + fetch_size
        next_state = str(end).encode() if end < len(rows) else None
        return Page(rows=rows[start:end], paging_state=next_state)
