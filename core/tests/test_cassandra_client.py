from unittest.mock import MagicMock

import pytest
from cassandra import DriverException

from core.exceptions import StorageUnavailable
from core.storage import client as client_module
from core.storage import statements
from core.storage.client import CassandraStorageClient
from core.storage.schema import Table

MARKS = Table(name="marks", columns=(("owner", "text"), ("user", "text")), partition_key=("owner",))


@pytest.fixture
def session():
    session = MagicMock()
    result = MagicMock()
    result.current_rows = [{"owner": "a", "user": "u"}]
    result.paging_state = b"next"
    session.execute.return_value = result
    return session


@pytest.fixture
def client(session):
    return CassandraStorageClient(keyspace="ks", fetch_size=10, session=session)


def test_execute_binds_prepared_statement(client, session):
    query = statements.partition_query("marks", ("owner", "user"), {"owner": "a"})
    page = client.execute(query, fetch_size=10)

    session.prepare.assert_called_once_with("SELECT owner, user FROM marks WHERE owner = ?")
    prepared = session.prepare.return_value
    prepared.bind.assert_called_once_with(["a"])
    bound = prepared.bind.return_value
    assert bound.fetch_size == 10
    session.execute.assert_called_once_with(bound, paging_state=None)
    assert page.rows == [{"owner": "a", "user": "u"}]
    assert page.paging_state == b"next"


def test_paging_state_is_passed_through(client, session):
    query = statements.full_scan("marks", ("owner",))
    client.execute(query, paging_state=b"cursor")
    assert session.execute.call_args.kwargs["paging_state"] == b"cursor"


def test_statements_are_prepared_once(client, session):
    query = statements.full_scan("marks", ("owner",))
    client.execute(query)
    client.execute(query)
    assert session.prepare.call_count == 1


def test_pages_stop_when_cursor_is_exhausted(client, session):
    last = MagicMock(current_rows=[{"owner": "b"}], paging_state=None)
    first = MagicMock(current_rows=[{"owner": "a"}], paging_state=b"p1")
    session.execute.side_effect = [first, last]

    pages = list(client.pages(statements.full_scan("marks", ("owner",))))
    assert [page.rows for page in pages] == [[{"owner": "a"}], [{"owner": "b"}]]
    assert session.execute.call_args_list[1].kwargs["paging_state"] == b"p1"


def test_driver_errors_become_storage_unavailable(client, session):
    session.execute.side_effect = DriverException("timeout")
    with pytest.raises(StorageUnavailable):
        client.execute(statements.full_scan("marks", ("owner",)))


def test_execute_without_session():
    with pytest.raises(StorageUnavailable):
        CassandraStorageClient().execute(statements.full_scan("marks", ("owner",)))


def test_batch_is_unlogged(client, session, monkeypatch):
    batch_class = MagicMock()
    monkeypatch.setattr(client_module, "BatchStatement", batch_class)
    writes = [
        statements.insert("marks", {"owner": "a", "user": "u"}),
        statements.insert("other", {"owner": "a"}),
    ]

    result = client.execute_batch(writes)

    batch_class.assert_called_once_with(batch_type=client_module.BatchType.UNLOGGED)
    batch = batch_class.return_value
    assert batch.add.call_count == 2
    session.execute.assert_called_once_with(batch)
    assert result.statements == 2
    assert result.tables == ("marks", "other")
    assert result.atomic is False


def test_batch_failure(client, session, monkeypatch):
    monkeypatch.setattr(client_module, "BatchStatement", MagicMock())
    session.execute.side_effect = DriverException("write timeout")
    with pytest.raises(StorageUnavailable):
        client.execute_batch([statements.insert("marks", {"owner": "a", "user": "u"})])


def test_create_schema(client, session):
    client.create_schema([MARKS])
    executed = [call.args[0] for call in session.execute.call_args_list]
    assert executed[0].startswith("CREATE KEYSPACE IF NOT EXISTS ks")
    assert executed[1].startswith("CREATE TABLE IF NOT EXISTS ks.marks")
    session.set_keyspace.assert_called_once_with("ks")


def test_close_forgets_prepared_statements(client, session):
    client.execute(statements.full_scan("marks", ("owner",)))
    client.close()
    assert client.session is None
    assert client._prepared == {}
