from core.blueprints.base_blueprint import BaseBlueprint

comments_bp = BaseBlueprint("comments", __name__)

from . import routes  # noqa: E402,F401
