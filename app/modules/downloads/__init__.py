from core.blueprints.base_blueprint import BaseBlueprint

downloads_bp = BaseBlueprint("downloads", __name__)

from . import routes  # noqa: E402,F401
