"""
Boat Dealer Portal - Application Package

This package contains the HTTP layer:
- api/: Route handlers (Flask Blueprints), all under /api
- utils/: Response envelope, image inspection, notification helpers

The app factory and core Flask setup remain in app_init.py at the project root.
Business logic and persistence live in services/ and database/.
"""

import logging

logger = logging.getLogger(__name__)

# Import blueprints
from portal.api.dealer import dealer_bp
from portal.api.quotes import quotes_bp
from portal.api.orders import orders_bp
from portal.api.service import service_bp
from portal.api.dealer_tools import dealer_tools_bp
from portal.api.admin import admin_bp
from portal.api.content import content_bp
from portal.api.uploads import uploads_bp

BLUEPRINTS = (
    dealer_bp,
    quotes_bp,
    orders_bp,
    service_bp,
    dealer_tools_bp,
    admin_bp,
    content_bp,
    uploads_bp,
)


def register_blueprints(app):
    """
    Register all API blueprints with the Flask app.
    Called from create_app() in app_init.py.

    Args:
        app: Flask application instance
    """
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
    logger.info(f"Registered {len(BLUEPRINTS)} API blueprints")


__all__ = ['register_blueprints', 'BLUEPRINTS', 'dealer_bp', 'quotes_bp', 'orders_bp', 'service_bp',
           'dealer_tools_bp', 'admin_bp', 'content_bp', 'uploads_bp']
