import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from core.exceptions import AppError, StorageUnavailable

logger = logging.getLogger(__name__)


class ErrorHandlerManager:
    def __init__(self, app):
        self.app = app

    def register_error_handlers(self):
        @self.app.errorhandler(StorageUnavailable)
        def handle_storage_unavailable(error):
            logger.exception(f"Storage error: {error}")
            return jsonify(error.to_dict()), error.status_code

        @self.app.errorhandler(AppError)
        def handle_app_error(error):
            logger.info(f"Rejected request: {error}")
            return jsonify(error.to_dict()), error.status_code

        @self.app.errorhandler(HTTPException)
        def handle_http_exception(error):
            return jsonify({"error": error.description}), error.code

        @self.app.errorhandler(500)
        def internal_server_error(error):
            logger.exception(f"Unhandled error: {error}")
            return jsonify({"error": "Error"}), 500
