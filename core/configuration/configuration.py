import os
from importlib.metadata import PackageNotFoundError, version


def get_app_version():
    env_version = os.getenv("APP_VERSION")
    if env_version:
        return env_version
    try:
        return version("dataset-social")
    except PackageNotFoundError:
        return "dev"
