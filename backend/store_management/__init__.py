# backend/store_management/__init__.py
from flask import Flask

from .config import Config
from .extensions import db
from .logging_config import configure_logging


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)

    # Import models so metadata is complete before create_all()
    from . import models  # noqa: F401
    # Registers the audit-stamping session hooks
    from . import unit_of_work  # noqa: F401

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
