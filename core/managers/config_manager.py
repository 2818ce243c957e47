import os

from dotenv import load_dotenv

# Load environment variables before the config classes read them
load_dotenv()


def _split(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigManager:
    def __init__(self, app):
        self.app = app

    def load_config(self, config_name="development"):
        if config_name == "testing":
            self.app.config.from_object(TestingConfig)
        elif config_name == "production":
            self.app.config.from_object(ProductionConfig)
        else:
            self.app.config.from_object(DevelopmentConfig)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev_test_key_1234567890abcdefghijklmnopqrstu")
    WTF_CSRF_ENABLED = False

    CASSANDRA_BACKEND = os.getenv("CASSANDRA_BACKEND", "cassandra")
    CASSANDRA_CONTACT_POINTS = _split(os.getenv("CASSANDRA_CONTACT_POINTS", "127.0.0.1"))
    CASSANDRA_PORT = int(os.getenv("CASSANDRA_PORT", "9042"))
    CASSANDRA_LOCAL_DC = os.getenv("CASSANDRA_LOCAL_DC", "datacenter1")
    CASSANDRA_KEYSPACE = os.getenv("CASSANDRA_KEYSPACE", "dataset_message_management")
    CASSANDRA_USERNAME = os.getenv("CASSANDRA_USERNAME")
    CASSANDRA_PASSWORD = os.getenv("CASSANDRA_PASSWORD")
    CASSANDRA_REQUEST_TIMEOUT = float(os.getenv("CASSANDRA_REQUEST_TIMEOUT", "10"))
    CASSANDRA_FETCH_SIZE = int(os.getenv("CASSANDRA_FETCH_SIZE", "500"))
    CASSANDRA_REPLICATION_FACTOR = int(os.getenv("CASSANDRA_REPLICATION_FACTOR", "1"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE", "app.log")


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    CASSANDRA_BACKEND = "memory"
    # small pages so that tests cross page boundaries
    CASSANDRA_FETCH_SIZE = 25
    LOG_FILE = None


class ProductionConfig(Config):
    DEBUG = False
