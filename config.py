"""
Centralized Configuration for the Boat Dealer Portal
Manages environment-specific settings, secrets, and service configurations.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _normalize_database_url(url):
    """Render/Heroku hand out postgres:// URLs, SQLAlchemy wants postgresql://"""
    if url and url.startswith('postgres://'):
        return url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    """Base configuration with defaults"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(32).hex()
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB max request body
    JSON_SORT_KEYS = False

    # CORS Settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
    CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
    CORS_ALLOW_HEADERS = ['Content-Type', 'Authorization', 'X-Requested-With']

    # Database Settings
    DATABASE_URL = _normalize_database_url(os.environ.get('DATABASE_URL'))
    AUTO_CREATE_TABLES = os.environ.get('AUTO_CREATE_TABLES', 'false').lower() == 'true'

    # Admin portal
    DEFAULT_ADMIN_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD', 'drakkar')

    # Image uploads (Uploadcare)
    UPLOADCARE_PUBLIC_KEY = os.environ.get('UPLOADCARE_PUBLIC_KEY') or os.environ.get('NEXT_PUBLIC_UPLOADCARE_PUBLIC_KEY')
    UPLOADCARE_UPLOAD_URL = os.environ.get('UPLOADCARE_UPLOAD_URL', 'https://upload.uploadcare.com/base/')
    UPLOADCARE_CDN_URL = os.environ.get('UPLOADCARE_CDN_URL', 'https://ucarecdn.com')
    UPLOAD_TIMEOUT = int(os.environ.get('UPLOAD_TIMEOUT', '30'))  # seconds
    MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB

    # Email (SMTP)
    SMTP_HOST = os.environ.get('SMTP_HOST', '')
    SMTP_PORT = int(os.environ.get('SMTP_PORT', '587'))
    SMTP_USER = os.environ.get('SMTP_USER', '')
    SMTP_PASSWORD = os.environ.get('SMTP_PASSWORD', '')
    FROM_EMAIL = os.environ.get('FROM_EMAIL', 'noreply@drakkarboats.com')

    # Rate Limiting
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '1000 per hour')
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True
    LOGIN_RATE_LIMIT = os.environ.get('LOGIN_RATE_LIMIT', '10 per minute')
    UPLOAD_RATE_LIMIT = os.environ.get('UPLOAD_RATE_LIMIT', '30 per minute')

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_FILE = os.environ.get('LOG_FILE', 'dealer_portal.log')
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development-specific configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'
    CORS_ORIGINS = ['*']
    AUTO_CREATE_TABLES = True


class ProductionConfig(Config):
    """Production-specific configuration"""
    DEBUG = False
    TESTING = False
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'https://portal.drakkarboats.com').split(',')
    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    """Testing-specific configuration"""
    DEBUG = True
    TESTING = True
    DATABASE_URL = 'sqlite://'
    AUTO_CREATE_TABLES = True
    RATELIMIT_ENABLED = False
    UPLOADCARE_PUBLIC_KEY = 'test-public-key'
    SMTP_HOST = ''
    SMTP_USER = ''


# Configuration selector
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config():
    """Get configuration based on FLASK_ENV environment variable"""
    env = os.environ.get('FLASK_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)
