import logging

from core.managers.storage_manager import get_storage
from core.storage import statements
from core.storage.timeuuid import to_external

logger = logging.getLogger(__name__)


def external_row(row: dict) -> dict:
    """Map store-native identifier values to their string form."""
    return {column: to_external(value) for column, value in row.items()}


class BaseRepository:
    def __init__(self, table, storage=None):
        self.table = table
        self._storage = storage

    @property
    def storage(self):
        if self._storage is not None:
            return self._storage
        return get_storage()

    # ---------- reads ----------

    def fetch_all(self, statement, row_mapper=external_row) -> list:
        """
        Drain every page of ``statement`` and return the mapped rows in query
        order. A failure on any page aborts the read; no partial list is ever
        returned.
        """
        rows = []
        pages = 0
        for page in self.storage.pages(statement, fetch_size=self.storage.fetch_size):
            pages += 1
            rows.extend(row_mapper(row) for row in page.rows)
        logger.debug(f"{statement.table}: read {len(rows)} rows in {pages} page(s)")
        return rows

    def fetch_one(self, statement, row_mapper=external_row):
        page = self.storage.execute(statement)
        if not page.rows:
            return None
        return row_mapper(page.rows[0])

    def get_partition(self, partition: dict, order_by=None, visible=None, row_mapper=external_row) -> list:
        query = statements.partition_query(
            self.table.name,
            self.table.column_names,
            partition,
            order_by=order_by,
            visible=visible,
        )
        return self.fetch_all(query, row_mapper=row_mapper)

    def get_all(self, row_mapper=external_row) -> list:
        return self.fetch_all(statements.full_scan(self.table.name, self.table.column_names), row_mapper=row_mapper)

    # ---------- writes ----------

    def insert(self, **values):
        self.storage.execute(statements.insert(self.table.name, values))
        return values

    def insert_if_not_exists(self, **values) -> bool:
        page = self.storage.execute(statements.insert(self.table.name, values, if_not_exists=True))
        return bool(page.rows and page.rows[0].get("[applied]"))

    def update_columns(self, key: dict, if_exists=False, **assignments):
        """
        Targeted update of ``assignments`` only. With ``if_exists`` a missing
        key is left alone instead of being created; either way the caller gets
        the same result back, so a missing row is never reported as an error.
        """
        page = self.storage.execute(statements.update(self.table.name, key, if_exists=if_exists, **assignments))
        if if_exists and page.rows and not page.rows[0].get("[applied]"):
            logger.debug(f"{self.table.name}: no row for {key}, update skipped")
        return {**key, **assignments}
