from core.blueprints.base_blueprint import BaseBlueprint

votes_bp = BaseBlueprint("votes", __name__)

from . import routes  # noqa: E402,F401
