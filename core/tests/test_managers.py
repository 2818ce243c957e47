import logging

import pytest

from app import create_app
from core.managers.logging_manager import HANDLER_NAME
from core.managers.storage_manager import StorageManager, get_storage
from core.storage.memory import InMemoryStorageClient


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    StorageManager(app).close()


def test_testing_app_uses_memory_backend(app):
    storage = get_storage(app)
    assert isinstance(storage, InMemoryStorageClient)
    assert storage.fetch_size == 25
    assert {"comment_ds", "dataset_vote", "download_by_dataset", "message_by_conversation"} <= set(storage.tables)


def test_health(app):
    response = app.test_client().get("/api/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_unknown_route_is_json(app):
    response = app.test_client().get("/api/does_not_exist")
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_logging_handlers_are_not_duplicated(app):
    create_app("testing")
    named = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
    assert len(named) == 1


def test_unknown_backend(app):
    app.config["CASSANDRA_BACKEND"] = "sqlite"
    with pytest.raises(ValueError):
        StorageManager(app).build_client()


def test_get_storage_before_init(app):
    StorageManager(app).close()
    with pytest.raises(RuntimeError):
        get_storage(app)


def test_schema_commands(app):
    storage = get_storage(app)
    runner = app.test_cli_runner()

    with app.app_context():
        result = runner.invoke(args=["storage", "drop-schema", "--yes"])
        assert result.exit_code == 0, result.output
        assert storage.tables == {}

        result = runner.invoke(args=["storage", "init-schema"])
        assert result.exit_code == 0, result.output
        assert "comment_ds" in storage.tables


def test_schema_commands_leave_other_apps_alone(app):
    other = create_app("testing")
    other_storage = get_storage(other)
    runner = app.test_cli_runner()

    with other.app_context():
        with app.app_context():
            result = runner.invoke(args=["storage", "drop-schema", "--yes"])
        assert result.exit_code == 0, result.output

    assert get_storage(app).tables == {}
    assert "comment_ds" in other_storage.tables
    StorageManager(other).close()
