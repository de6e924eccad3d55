"""
Security Utilities & Middleware
CORS, response headers, JSON error envelopes and request logging for the API
"""
import os
import secrets
from typing import Dict, Any
from flask import Flask, request, jsonify, Response
from flask_cors import CORS
import logging

logger = logging.getLogger(__name__)

# Dealer screens must never show a cached price list or order status
NO_CACHE_HEADERS = {
    'Cache-Control': 'no-store, no-cache, must-revalidate, proxy-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
}

QUIET_PATHS = ('/api/health', '/api/ping')


class SecurityConfig:
    """Security configuration and validation"""

    @staticmethod
    def generate_secret_key() -> str:
        """
        Generate a cryptographically secure secret key

        Returns:
            Hex-encoded secret key
        """
        return secrets.token_hex(32)

    @staticmethod
    def validate_secret_key(secret_key: str) -> bool:
        """
        Validate that secret key is sufficiently secure

        Args:
            secret_key: Secret key to validate

        Returns:
            True if key is secure, False otherwise
        """
        if not secret_key:
            return False

        # Minimum 32 characters for 128-bit security
        if len(secret_key) < 32:
            logger.warning("Secret key is too short (minimum 32 characters)")
            return False

        weak_keys = ['dev', 'test', 'secret', 'password', '12345']
        if any(weak in secret_key.lower() for weak in weak_keys):
            logger.warning("Secret key appears to be weak or default")
            return False

        return True

    @staticmethod
    def ensure_secret_key(config: Dict[str, Any]) -> str:
        """
        Ensure a secure secret key is configured

        Args:
            config: Application configuration dictionary

        Returns:
            Secure secret key
        """
        secret_key = config.get('SECRET_KEY')

        if not secret_key or not SecurityConfig.validate_secret_key(secret_key):
            if os.environ.get('FLASK_ENV') == 'production':
                logger.error("No secure SECRET_KEY in production! Generating one...")
                logger.error("Add SECRET_KEY to environment variables for persistence!")

            secret_key = SecurityConfig.generate_secret_key()
            logger.warning(f"Generated new secret key (length: {len(secret_key)})")

        return secret_key


def setup_security_headers(app: Flask):
    """
    Add security headers to all responses, and anti-cache headers to /api/ ones

    Args:
        app: Flask application instance
    """
    @app.after_request
    def add_security_headers(response: Response) -> Response:
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        # HTTPS only outside development
        if not app.debug:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        # JSON only, nothing here should ever be rendered as a page
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"

        if request.path.startswith('/api/'):
            for header, value in NO_CACHE_HEADERS.items():
                response.headers[header] = value

        return response

    logger.info("Security headers configured")


def setup_cors(app: Flask, config: Dict[str, Any]):
    """
    Configure CORS for the dealer and admin front ends

    Args:
        app: Flask application instance
        config: Application configuration dictionary
    """
    cors_origins = config.get('CORS_ORIGINS', ['*'])
    cors_methods = config.get('CORS_METHODS', ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'])
    cors_headers = config.get('CORS_ALLOW_HEADERS', ['Content-Type', 'Authorization'])

    if not app.debug and '*' in cors_origins:
        logger.warning("Using wildcard CORS in production! Set CORS_ORIGINS environment variable.")

    CORS(
        app,
        resources={r'/api/*': {'origins': cors_origins}},
        methods=cors_methods,
        allow_headers=cors_headers,
        expose_headers=['X-Data-Updated', 'X-Data-Updated-Type'],
        max_age=3600
    )

    logger.info(f"CORS configured: origins={cors_origins}")


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


def setup_error_handlers(app: Flask):
    """
    Render Flask-level errors (unknown route, wrong method, oversized body,
    rate limit) in the same {success, error} envelope the routes use

    Args:
        app: Flask application instance
    """
    @app.errorhandler(400)
    def bad_request(error):
        return _error('Bad request', 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return _error('Authentication required', 401)

    @app.errorhandler(403)
    def forbidden(error):
        return _error('Forbidden', 403)

    @app.errorhandler(404)
    def not_found(error):
        return _error('Not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _error('Method not allowed', 405)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return _error('The uploaded file or request is too large', 413)

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        logger.warning(f"Rate limit exceeded: {request.method} {request.path} from {request.remote_addr}")
        return _error('Too many requests. Please try again later.', 429)

    @app.errorhandler(500)
    def internal_server_error(error):
        logger.error(f"Internal server error: {error}", exc_info=True)
        message = str(getattr(error, 'original_exception', None) or error) if app.debug else 'Internal server error'
        return _error(message, 500)

    @app.errorhandler(503)
    def service_unavailable(error):
        return _error('Service temporarily unavailable', 503)

    logger.info("Error handlers registered")


def setup_request_logging(app: Flask):
    """
    Setup request/response logging

    Args:
        app: Flask application instance
    """
    @app.before_request
    def log_request():
        if request.path in QUIET_PATHS:
            return

        logger.info(
            f"Request: {request.method} {request.path} "
            f"from {request.remote_addr}"
        )

    @app.after_request
    def log_response(response: Response) -> Response:
        if request.path in QUIET_PATHS:
            return response

        logger.info(
            f"Response: {request.method} {request.path} "
            f"status={response.status_code} "
            f"size={response.content_length}"
        )

        return response

    logger.info("Request logging configured")


def validate_environment_variables(required_vars: list, app: Flask):
    """
    Validate that required environment variables are set

    Args:
        required_vars: List of required environment variable names
        app: Flask application instance
    """
    missing_vars = [var for var in required_vars if not os.environ.get(var)]

    for var in missing_vars:
        logger.warning(f"Missing environment variable: {var}")

    if missing_vars and not app.debug:
        logger.error(f"Missing required environment variables in production: {missing_vars}")

    return len(missing_vars) == 0


def setup_security(app: Flask, config: Dict[str, Any]):
    """
    Setup all security features for the application

    Args:
        app: Flask application instance
        config: Application configuration dictionary
    """
    logger.info("Configuring application security...")

    app.secret_key = SecurityConfig.ensure_secret_key(config)

    setup_cors(app, config)
    setup_security_headers(app)
    setup_error_handlers(app)
    setup_request_logging(app)

    if not app.debug and not app.testing:
        validate_environment_variables(
            ['SECRET_KEY', 'DATABASE_URL', 'UPLOADCARE_PUBLIC_KEY'],
            app
        )

    logger.info("Security configuration complete")
