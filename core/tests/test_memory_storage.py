import pytest

from core.exceptions import StorageUnavailable
from core.storage import statements
from core.storage.memory import REQUEST_LOG_SIZE, InMemoryStorageClient
from core.storage.schema import Table
from core.storage.statements import ASC, DESC
from core.storage.timeuuid import new_timeuuid

EVENTS = Table(
    name="events",
    columns=(("owner", "text"), ("id_event", "timeuuid"), ("body", "text"), ("visible", "boolean")),
    partition_key=("owner",),
    clustering=(("id_event", DESC),),
)
MARKS = Table(
    name="marks",
    columns=(("owner", "text"), ("user", "text")),
    partition_key=("owner",),
    clustering=(("user", ASC),),
)


@pytest.fixture
def storage():
    client = InMemoryStorageClient(tables=(EVENTS, MARKS), fetch_size=3)
    client.connect()
    yield client
    client.close()


def _add_events(storage, owner, count, visible=True):
    ids = []
    for index in range(count):
        id_event = new_timeuuid()
        storage.execute(
            statements.insert("events", {"owner": owner, "id_event": id_event, "body": f"e{index}", "visible": visible})
        )
        ids.append(id_event)
    return ids


def _query(owner="a", **kwargs):
    return statements.partition_query("events", EVENTS.column_names, {"owner": owner}, **kwargs)


def test_rows_come_back_in_clustering_order(storage):
    ids = _add_events(storage, "a", 5)
    rows = [row for page in storage.pages(_query()) for row in page.rows]
    assert [row["id_event"] for row in rows] == list(reversed(ids))


def test_order_by_opposite_direction_reverses(storage):
    ids = _add_events(storage, "a", 4)
    rows = [row for page in storage.pages(_query(order_by=("id_event", ASC))) for row in page.rows]
    assert [row["id_event"] for row in rows] == ids


def test_paging_follows_cursor(storage):
    _add_events(storage, "a", 7)
    pages = list(storage.pages(_query()))

    assert [len(page.rows) for page in pages] == [3, 3, 1]
    assert [state for _, state in list(storage.requests)[-3:]] == [None, pages[0].paging_state, pages[1].paging_state]
    assert not pages[-1].has_more


def test_exact_multiple_of_page_size(storage):
    _add_events(storage, "a", 6)
    assert [len(page.rows) for page in storage.pages(_query())] == [3, 3]


def test_empty_partition_is_one_empty_page(storage):
    pages = list(storage.pages(_query(owner="nobody")))
    assert len(pages) == 1
    assert pages[0].rows == []


def test_visibility_filter(storage):
    _add_events(storage, "a", 2, visible=True)
    _add_events(storage, "a", 1, visible=False)

    hidden = [row for page in storage.pages(_query(visible=False)) for row in page.rows]
    shown = [row for page in storage.pages(_query(visible=True)) for row in page.rows]
    assert len(hidden) == 1
    assert len(shown) == 2


def test_non_key_filter_needs_allow_filtering(storage):
    query = statements.Select(table="events", columns=("body",), where=(("owner", "a"), ("visible", True)))
    with pytest.raises(StorageUnavailable):
        storage.execute(query)


def test_limit(storage):
    ids = _add_events(storage, "a", 4)
    page = storage.execute(_query(limit=1))
    assert [row["id_event"] for row in page.rows] == [ids[-1]]


def test_insert_is_upsert(storage):
    storage.execute(statements.insert("marks", {"owner": "a", "user": "u"}))
    storage.execute(statements.insert("marks", {"owner": "a", "user": "u"}))
    assert storage.row_count("marks") == 1


def test_insert_if_not_exists(storage):
    first = storage.execute(statements.insert("marks", {"owner": "a", "user": "u"}, if_not_exists=True))
    second = storage.execute(statements.insert("marks", {"owner": "a", "user": "u"}, if_not_exists=True))
    assert first.rows[0]["[applied]"] is True
    assert second.rows[0]["[applied]"] is False


def test_update_of_missing_row_creates_it(storage):
    id_event = new_timeuuid()
    storage.execute(statements.update("events", {"owner": "a", "id_event": id_event}, visible=False))
    rows = storage.execute(_query()).rows
    assert rows == [{"owner": "a", "id_event": id_event, "body": None, "visible": False}]


def test_update_changes_only_assigned_columns(storage):
    (id_event,) = _add_events(storage, "a", 1)
    storage.execute(statements.update("events", {"owner": "a", "id_event": id_event}, visible=False))
    row = storage.execute(_query()).rows[0]
    assert row["body"] == "e0"
    assert row["visible"] is False


def test_batch_failure_leaves_earlier_statements_applied(storage):
    storage.failing_tables.add("events")
    batch = [
        statements.insert("marks", {"owner": "a", "user": "u"}),
        statements.insert("events", {"owner": "a", "id_event": new_timeuuid(), "body": "x", "visible": True}),
    ]
    with pytest.raises(StorageUnavailable):
        storage.execute_batch(batch)
    assert storage.row_count("marks") == 1
    assert storage.row_count("events") == 0


def test_batch_result(storage):
    result = storage.execute_batch([statements.insert("marks", {"owner": "a", "user": "u"})])
    assert result.statements == 1
    assert result.tables == ("marks",)
    assert result.atomic is False


def test_unknown_table(storage):
    with pytest.raises(StorageUnavailable):
        storage.execute(statements.full_scan("missing", ("a",)))


def test_disconnected_client_fails(storage):
    storage.close()
    with pytest.raises(StorageUnavailable):
        storage.execute(_query())


def test_missing_primary_key(storage):
    with pytest.raises(StorageUnavailable):
        storage.execute(statements.insert("marks", {"owner": "a"}))


def test_truncate(storage):
    _add_events(storage, "a", 2)
    storage.failing_tables.add("marks")
    storage.truncate()
    assert storage.row_count("events") == 0
    assert len(storage.requests) == 0
    assert storage.failing_tables == set()


def test_update_if_exists_skips_missing_row(storage):
    missing = {"owner": "a", "id_event": new_timeuuid()}
    page = storage.execute(statements.update("events", missing, if_exists=True, visible=False))
    assert page.rows == [{"[applied]": False}]
    assert storage.row_count("events") == 0


def test_update_if_exists_changes_existing_row(storage):
    (id_event,) = _add_events(storage, "a", 1)
    key = {"owner": "a", "id_event": id_event}
    page = storage.execute(statements.update("events", key, if_exists=True, visible=False))
    assert page.rows == [{"[applied]": True}]
    assert storage.execute(_query()).rows[0]["visible"] is False


def test_request_log_is_bounded(storage):
    for _ in range(REQUEST_LOG_SIZE + 10):
        storage.execute(_query())
    assert len(storage.requests) == REQUEST_LOG_SIZE
