import logging
from dataclasses import dataclass
from typing import Callable

from core.exceptions import StorageUnavailable
from core.managers.storage_manager import get_storage
from core.storage import statements
from core.storage.client import BatchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Projection:
    """One physical row shape of a logical fact."""

    table: object
    shape: Callable[[dict], dict]

    def statement(self, fact):
        return statements.insert(self.table.name, self.shape(fact))


class DenormalizedWriter:
    """
    Writes one logical fact as several physical rows (one per projection) in a
    single unlogged batch.

    The batch is one round trip but not a transaction: if it fails, any
    subset of the projections may already be stored and the views disagree.
    Callers get a single pass/fail signal, the :class:`BatchResult` or a
    :class:`StorageUnavailable`.
    """

    def __init__(self, *projections, storage=None):
        self.projections = projections
        self._storage = storage

    @property
    def storage(self):
        if self._storage is not None:
            return self._storage
        return get_storage()

    def statements_for(self, fact: dict):
        return [projection.statement(fact) for projection in self.projections]

    def write(self, fact: dict) -> BatchResult:
        batch = self.statements_for(fact)
        try:
            result = self.storage.execute_batch(batch)
        except StorageUnavailable:
            logger.error(f"Denormalized write to {[s.table for s in batch]} failed, projections may be inconsistent")
            raise
        logger.info(f"Denormalized write of {result.statements} rows to {', '.join(result.tables)}")
        return result
