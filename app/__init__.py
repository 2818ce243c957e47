import os

from flask import Flask

from core.configuration.configuration import get_app_version
from core.managers.config_manager import ConfigManager
from core.managers.error_handler_manager import ErrorHandlerManager
from core.managers.logging_manager import LoggingManager
from core.managers.module_manager import ModuleManager
from core.managers.storage_manager import StorageManager


def create_app(config_name=None):
    app = Flask(__name__)
    app.json.sort_keys = False

    # Load configuration according to environment
    config_manager = ConfigManager(app)
    config_manager.load_config(config_name=config_name or os.getenv("FLASK_ENV", "development"))

    # Set up logging
    logging_manager = LoggingManager(app)
    logging_manager.setup_logging()

    # Register modules
    module_manager = ModuleManager(app)
    module_manager.register_modules()

    # Open the shared storage client
    storage_manager = StorageManager(app, tables=module_manager.collect_tables())
    storage_manager.init_storage()

    # Initialize error handler manager
    error_handler_manager = ErrorHandlerManager(app)
    error_handler_manager.register_error_handlers()

    @app.route("/api/health", methods=["GET"])
    def health():
        return {"status": "ok", "version": get_app_version()}

    return app
