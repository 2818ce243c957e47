import atexit
import logging

import click
from flask import current_app
from flask.cli import AppGroup

from core.storage.client import CassandraStorageClient
from core.storage.memory import InMemoryStorageClient

logger = logging.getLogger(__name__)

EXTENSION_KEY = "storage"


def get_storage(app=None):
    """The storage client opened for ``app`` (or the current app) at startup."""
    app = app or current_app
    try:
        return app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError("Storage is not initialised, was StorageManager.init_storage() called?") from None


class StorageManager:
    """
    Owns the process-wide storage client: built once in ``create_app``,
    shared by every request, closed on shutdown.
    """

    def __init__(self, app, tables=()):
        self.app = app
        self.tables = list(tables)

    def build_client(self):
        config = self.app.config
        backend = config.get("CASSANDRA_BACKEND", "cassandra")
        if backend == "memory":
            return InMemoryStorageClient(tables=self.tables, fetch_size=config["CASSANDRA_FETCH_SIZE"])
        if backend == "cassandra":
            return CassandraStorageClient(
                contact_points=config["CASSANDRA_CONTACT_POINTS"],
                port=config["CASSANDRA_PORT"],
                keyspace=config["CASSANDRA_KEYSPACE"],
                local_dc=config["CASSANDRA_LOCAL_DC"],
                username=config.get("CASSANDRA_USERNAME"),
                password=config.get("CASSANDRA_PASSWORD"),
                request_timeout=config["CASSANDRA_REQUEST_TIMEOUT"],
                fetch_size=config["CASSANDRA_FETCH_SIZE"],
                replication_factor=config["CASSANDRA_REPLICATION_FACTOR"],
            )
        raise ValueError(f"Unknown CASSANDRA_BACKEND '{backend}'")

    def init_storage(self):
        client = self.build_client()
        client.connect()
        self.app.extensions[EXTENSION_KEY] = client
        atexit.register(client.close)
        self.register_commands()
        return client

    def close(self):
        client = self.app.extensions.pop(EXTENSION_KEY, None)
        if client is not None:
            client.close()

    def register_commands(self):
        storage_cli = AppGroup("storage", help="Manage the wide-column schema.")
        tables = self.tables

        @storage_cli.command("init-schema", help="Create the keyspace and every module table.")
        def init_schema():
            get_storage().create_schema(tables)
            click.echo(click.style(f"Created {len(tables)} tables.", fg="green"))

        @storage_cli.command("drop-schema", help="Drop every module table.")
        @click.confirmation_option(prompt="This deletes all comments, votes and messages. Continue?")
        def drop_schema():
            get_storage().drop_schema(tables)
            click.echo(click.style(f"Dropped {len(tables)} tables.", fg="yellow"))

        self.app.cli.add_command(storage_cli)
