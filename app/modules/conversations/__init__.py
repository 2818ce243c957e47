from core.blueprints.base_blueprint import BaseBlueprint

conversations_bp = BaseBlueprint("conversations", __name__)

from . import routes  # noqa: E402,F401
