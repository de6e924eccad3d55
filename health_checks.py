"""
Health Check & Monitoring Endpoints
Provides endpoints for deployment health checks and monitoring
"""
import os
import sys
import time
import psutil
from datetime import datetime
from typing import Dict, Any
from flask import Blueprint, current_app, jsonify
import logging

from database.connection import DatabaseNotConfiguredError, check_db_connection, is_db_configured

logger = logging.getLogger(__name__)

SERVICE_NAME = 'boat-dealer-portal'
SERVICE_VERSION = '1.0.0'

# Create Blueprint for health check routes
health_bp = Blueprint('health', __name__)

# Track application start time
START_TIME = time.time()


def get_system_metrics() -> Dict[str, Any]:
    """
    Get basic process metrics

    Returns:
        Dictionary of process metrics
    """
    try:
        process = psutil.Process()

        return {
            'cpu_percent': process.cpu_percent(interval=0.1),
            'memory_mb': round(process.memory_info().rss / 1024 / 1024, 2),
            'memory_percent': round(process.memory_percent(), 2),
            'threads': process.num_threads(),
            'open_files': len(process.open_files()),
        }
    except Exception as e:
        logger.warning(f"Failed to get system metrics: {e}")
        return {}


def get_uptime() -> Dict[str, Any]:
    """
    Get application uptime

    Returns:
        Dictionary with uptime information
    """
    uptime_seconds = time.time() - START_TIME

    return {
        'uptime_seconds': round(uptime_seconds, 2),
        'uptime_minutes': round(uptime_seconds / 60, 2),
        'uptime_hours': round(uptime_seconds / 3600, 2),
        'started_at': datetime.fromtimestamp(START_TIME).isoformat()
    }


def check_database() -> Dict[str, Any]:
    """
    Check that DATABASE_URL is set and the database answers a trivial query

    Returns:
        Dictionary with configured / connected flags and any error
    """
    status = {'configured': is_db_configured(), 'connected': False}
    if not status['configured']:
        status['error'] = 'DATABASE_URL not set'
        return status

    try:
        status['connected'] = check_db_connection()
    except (DatabaseNotConfiguredError, RuntimeError) as e:
        status['error'] = str(e)
    return status


def check_services(app) -> Dict[str, bool]:
    """Which optional integrations are configured"""
    return {
        'uploadcare': bool(app.config.get('UPLOADCARE_PUBLIC_KEY')),
        'smtp': bool(app.config.get('SMTP_HOST') and app.config.get('SMTP_USER')),
    }


def check_filesystem(app) -> Dict[str, Any]:
    """
    Check that the log directory exists and is writable (skipped in testing,
    where logs only go to the console)
    """
    log_dir = app.config.get('LOG_DIR', 'logs')
    dir_path = os.path.join(os.getcwd(), log_dir)
    exists = os.path.exists(dir_path)
    writable = os.access(dir_path, os.W_OK) if exists else False

    return {
        log_dir: {
            'exists': exists,
            'writable': writable,
            'healthy': (exists and writable) or bool(app.config.get('TESTING'))
        }
    }


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint
    Returns 200 if application is running
    """
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.utcnow().isoformat(),
        'service': SERVICE_NAME
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """
    Readiness probe endpoint
    Returns 200 only when the database is reachable
    """
    database = check_database()
    filesystem = check_filesystem(current_app)
    filesystem_healthy = all(status['healthy'] for status in filesystem.values())

    is_ready = database['connected'] and filesystem_healthy

    response = {
        'status': 'ready' if is_ready else 'not_ready',
        'timestamp': datetime.utcnow().isoformat(),
        'checks': {
            'database': database,
            'filesystem': filesystem,
            'filesystem_healthy': filesystem_healthy
        }
    }

    if not is_ready:
        logger.warning(f"Readiness check failed: {response['checks']}")

    return jsonify(response), 200 if is_ready else 503


@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """
    Basic metrics endpoint
    Returns process metrics and application statistics
    """
    response = {
        'timestamp': datetime.utcnow().isoformat(),
        'service': SERVICE_NAME,
        'version': SERVICE_VERSION,
        'environment': os.environ.get('FLASK_ENV', 'production'),
        'uptime': get_uptime(),
        'system': get_system_metrics(),
        'services': check_services(current_app),
        'database_configured': is_db_configured(),
        'python_version': sys.version.split()[0]
    }

    return jsonify(response), 200


@health_bp.route('/ping', methods=['GET'])
def ping():
    """
    Simple ping endpoint
    Returns immediate response for basic connectivity tests
    """
    return 'pong', 200


def register_health_checks(app):
    """
    Register health check blueprint with Flask app

    Args:
        app: Flask application instance
    """
    app.register_blueprint(health_bp, url_prefix='/api')
    logger.info("Health check endpoints registered")
    logger.info("Available endpoints: /api/health, /api/ready, /api/metrics, /api/ping")
