"""
Application Initialization Module
Initializes the Flask app with all infrastructure components
"""
import os
from flask import Flask
from config import get_config
from logging_config import setup_logging
from security import setup_security
from health_checks import register_health_checks
from extensions import limiter
from database.connection import configure_database, init_db, is_db_configured
from portal import register_blueprints
import logging

logger = logging.getLogger(__name__)


def create_app(config_class=None):
    """
    Application factory that creates and configures Flask app with all infrastructure

    Args:
        config_class: Configuration class; defaults to the one selected by FLASK_ENV

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    config_class = config_class or get_config()
    app.config.from_object(config_class)

    setup_logging(app)

    logger.info("=" * 60)
    logger.info("Initializing Boat Dealer Portal API")
    logger.info("=" * 60)
    logger.info(f"Environment: {os.environ.get('FLASK_ENV', 'development')}")
    logger.info(f"Debug mode: {app.debug}")

    # Setup security (CORS, headers, error handlers)
    setup_security(app, app.config)

    limiter.init_app(app)

    initialize_database(app)

    register_health_checks(app)
    register_blueprints(app)

    logger.info("Application initialization complete")
    logger.info("=" * 60)

    return app


def initialize_database(app):
    """
    Point the persistence layer at DATABASE_URL. Without one the app still
    starts; data routes answer 503 until it is configured.

    Args:
        app: Flask application instance
    """
    configure_database(app.config.get('DATABASE_URL'))

    if not is_db_configured():
        logger.warning("No DATABASE_URL configured - running without storage")
        return

    if app.config.get('AUTO_CREATE_TABLES'):
        init_db()
        logger.info("Database tables ensured")
    else:
        logger.info("Database configured (schema managed by Alembic)")
