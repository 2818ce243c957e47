import logging
import threading
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from cassandra import DriverException
from cassandra.query import BatchStatement, BatchType, dict_factory

from core.exceptions import StorageUnavailable
from core.storage.schema import create_keyspace_cql

logger = logging.getLogger(__name__)

DEFAULT_FETCH_SIZE = 500


@dataclass
class Page:
    """One bounded fetch: the rows plus the cursor to resume from, if any."""

    rows: List[dict] = field(default_factory=list)
    paging_state: Optional[bytes] = None

    @property
    def has_more(self):
        return bool(self.paging_state)


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of an unlogged multi-statement write.

    Returned only when the coordinator accepted the whole batch. Unlogged
    batches span partitions without atomicity, so a failure reported as
    :class:`StorageUnavailable` may still have applied some statements; there
    is no per-statement status.
    """

    statements: int
    tables: tuple = ()
    atomic: bool = False


class StorageClient:
    """
    Long-lived handle on the wide-column store. One instance per process,
    opened with :meth:`connect` at startup and released with :meth:`close`.
    """

    fetch_size = DEFAULT_FETCH_SIZE

    def connect(self):
        raise NotImplementedError

    def close(self):
        raise NotImplementedError

    def execute(self, statement, fetch_size=None, paging_state=None) -> Page:
        raise NotImplementedError

    def execute_batch(self, statements) -> BatchResult:
        raise NotImplementedError

    def create_schema(self, tables):
        raise NotImplementedError

    def drop_schema(self, tables):
        raise NotImplementedError

    def pages(self, statement, fetch_size=None) -> Iterator[Page]:
        """
        Cursor-driven page source. Each page is requested only after the
        previous one has been received; iterating again restarts from the
        first page.
        """
        fetch_size = fetch_size or self.fetch_size
        paging_state = None
        while True:
            page = self.execute(statement, fetch_size=fetch_size, paging_state=paging_state)
            yield page
            if not page.has_more:
                return
            paging_state = page.paging_state

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class CassandraStorageClient(StorageClient):
    def __init__(
        self,
        contact_points=("127.0.0.1",),
        port=9042,
        keyspace="dataset_message_management",
        local_dc="datacenter1",
        username=None,
        password=None,
        request_timeout=10.0,
        fetch_size=DEFAULT_FETCH_SIZE,
        replication_factor=1,
        session=None,
    ):
        self.contact_points = list(contact_points)
        self.port = port
        self.keyspace = keyspace
        self.local_dc = local_dc
        self.username = username
        self.password = password
        self.request_timeout = request_timeout
        self.fetch_size = fetch_size
        self.replication_factor = replication_factor
        self.cluster = None
        self.session = session
        self._prepared = {}
        self._prepare_lock = threading.Lock()
        self._errors = (DriverException,)

    def connect(self):
        from cassandra.auth import PlainTextAuthProvider
        from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile, NoHostAvailable
        from cassandra.policies import DCAwareRoundRobinPolicy

        self._errors = (DriverException, NoHostAvailable)
        if self.session is not None:
            return self

        profile = ExecutionProfile(
            load_balancing_policy=DCAwareRoundRobinPolicy(local_dc=self.local_dc),
            row_factory=dict_factory,
            request_timeout=self.request_timeout,
        )
        auth_provider = None
        if self.username:
            auth_provider = PlainTextAuthProvider(username=self.username, password=self.password)

        self.cluster = Cluster(
            contact_points=self.contact_points,
            port=self.port,
            auth_provider=auth_provider,
            execution_profiles={EXEC_PROFILE_DEFAULT: profile},
        )
        try:
            self.session = self.cluster.connect()
        except self._errors as exc:
            raise StorageUnavailable(f"Could not connect to Cassandra at {self.contact_points}: {exc}") from exc

        if self.keyspace in self.cluster.metadata.keyspaces:
            self.session.set_keyspace(self.keyspace)
        else:
            logger.warning(f"Keyspace '{self.keyspace}' does not exist yet, run 'flask storage init-schema'")

        logger.info(f"Connected to Cassandra {self.contact_points} (keyspace={self.keyspace})")
        return self

    def close(self):
        if self.cluster is not None:
            self.cluster.shutdown()
            logger.info("Cassandra connection closed")
        self.cluster = None
        self.session = None
        self._prepared.clear()

    def _require_session(self):
        if self.session is None:
            raise StorageUnavailable("Storage client is not connected")
        return self.session

    def _prepare(self, cql):
        prepared = self._prepared.get(cql)
        if prepared is None:
            with self._prepare_lock:
                prepared = self._prepared.get(cql)
                if prepared is None:
                    prepared = self._require_session().prepare(cql)
                    self._prepared[cql] = prepared
        return prepared

    def execute(self, statement, fetch_size=None, paging_state=None) -> Page:
        session = self._require_session()
        cql = statement.to_cql()
        try:
            bound = self._prepare(cql).bind(statement.params)
            if fetch_size:
                bound.fetch_size = fetch_size
            result = session.execute(bound, paging_state=paging_state)
        except self._errors as exc:
            raise StorageUnavailable(f"Query failed [{cql}]: {exc}") from exc

        return Page(rows=list(result.current_rows), paging_state=result.paging_state)

    def execute_batch(self, statements) -> BatchResult:
        session = self._require_session()
        batch = BatchStatement(batch_type=BatchType.UNLOGGED)
        tables = tuple(statement.table for statement in statements)
        try:
            for statement in statements:
                batch.add(self._prepare(statement.to_cql()), statement.params)
            session.execute(batch)
        except self._errors as exc:
            raise StorageUnavailable(f"Batch write to {', '.join(tables)} failed: {exc}") from exc

        return BatchResult(statements=len(statements), tables=tables)

    def _run_ddl(self, cql):
        try:
            self._require_session().execute(cql)
        except self._errors as exc:
            raise StorageUnavailable(f"Schema statement failed [{cql}]: {exc}") from exc

    def create_schema(self, tables):
        self._run_ddl(create_keyspace_cql(self.keyspace, self.replication_factor))
        self._require_session().set_keyspace(self.keyspace)
        for table in tables:
            self._run_ddl(table.create_cql(self.keyspace))
            logger.info(f"Table {self.keyspace}.{table.name} ready")

    def drop_schema(self, tables):
        for table in tables:
            self._run_ddl(table.drop_cql(self.keyspace))
            logger.info(f"Table {self.keyspace}.{table.name} dropped")
