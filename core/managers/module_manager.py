import importlib
import logging
import os

logger = logging.getLogger(__name__)


class ModuleManager:
    """
    Discovers the packages under ``app/modules``. Each one exposes a
    ``<name>_bp`` blueprint in its ``__init__`` and may declare its tables in
    ``models.TABLES``.
    """

    def __init__(self, app, modules_package="app.modules"):
        self.app = app
        self.modules_package = modules_package
        package = importlib.import_module(modules_package)
        self.modules_dir = os.path.dirname(package.__file__)

    def module_names(self):
        names = []
        for entry in sorted(os.listdir(self.modules_dir)):
            path = os.path.join(self.modules_dir, entry)
            if entry.startswith("_") or not os.path.isdir(path):
                continue
            if os.path.exists(os.path.join(path, "__init__.py")):
                names.append(entry)
        return names

    def register_modules(self):
        for name in self.module_names():
            module = importlib.import_module(f"{self.modules_package}.{name}")
            blueprint = getattr(module, f"{name}_bp", None)
            if blueprint is None:
                continue
            self.app.register_blueprint(blueprint)
            logger.debug(f"Registered module '{name}'")

    def collect_tables(self):
        tables = []
        for name in self.module_names():
            try:
                models = importlib.import_module(f"{self.modules_package}.{name}.models")
            except ModuleNotFoundError as exc:
                if exc.name != f"{self.modules_package}.{name}.models":
                    raise
                continue
            tables.extend(getattr(models, "TABLES", ()))
        return tables
