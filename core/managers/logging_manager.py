import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
HANDLER_NAME = "app"


class LoggingManager:
    def __init__(self, app):
        self.app = app

    def setup_logging(self):
        formatter = logging.Formatter(LOG_FORMAT)
        level = self.app.config.get("LOG_LEVEL", "INFO")

        root = logging.getLogger()
        root.setLevel(level)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        handlers = [stream_handler]

        log_file = self.app.config.get("LOG_FILE")
        if log_file:
            file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        for handler in list(root.handlers):
            if handler.get_name() == HANDLER_NAME:
                root.removeHandler(handler)
        for handler in handlers:
            handler.set_name(HANDLER_NAME)
            root.addHandler(handler)
        self.app.logger.setLevel(level)
        # cassandra-driver is chatty at INFO about topology changes
        logging.getLogger("cassandra").setLevel(logging.WARNING)
