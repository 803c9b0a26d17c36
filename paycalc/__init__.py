"""Salary Calculator Flask Application Factory."""

import logging
from typing import Optional

from flask import Flask

from paycalc.config import Settings, get_global_settings
from paycalc.database.base import create_tables, init_engine


def configure_logging(level: str) -> None:
    """Apply the configured log level to the package loggers."""
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logging.getLogger("paycalc").setLevel(level)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Settings to use instead of the global environment settings

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = settings or get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["DATABASE_URL"] = settings.db_url
    app.config["DEFAULT_CITY"] = settings.default_city
    app.config["SHARE_BASE_URL"] = settings.share_base_url
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"

    configure_logging(settings.log_level)
    app.logger.setLevel(settings.log_level)

    # Record store
    init_engine(settings)
    create_tables()

    # Register blueprints
    from paycalc.blueprints.calculator import calculator_bp
    from paycalc.blueprints.health import health_bp
    from paycalc.blueprints.records import records_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(calculator_bp)
    app.register_blueprint(records_bp)

    return app
