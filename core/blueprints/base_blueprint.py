from flask import Blueprint

API_PREFIX = "/api"


class BaseBlueprint(Blueprint):
    """JSON API blueprint; every module's routes are served under /api."""

    def __init__(self, name, import_name, url_prefix=API_PREFIX, **kwargs):
        super().__init__(name, import_name, url_prefix=url_prefix, **kwargs)
