"""
Configuration settings for different environments
"""
import os
import logging
import secrets
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _database_url():
    """Return DATABASE_URL fixed up for SQLAlchemy, or a local SQLite file"""
    url = os.environ.get('DATABASE_URL', '')
    if not url:
        return 'sqlite:///varmepumpe.db'
    # Heroku-style URLs use the scheme SQLAlchemy 2.x no longer accepts
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _require_in_production(var_name, default):
    """Return env var value. Outside development, warn loudly if still using default."""
    value = os.environ.get(var_name, '')
    if value:
        return value
    if os.environ.get('FLASK_ENV', 'development') != 'development':
        logging.getLogger(__name__).warning(
            "%s is using an insecure default. Set it via environment variable!", var_name
        )
    return default


class Config:
    """Base configuration"""
    SECRET_KEY = _require_in_production('SECRET_KEY', 'dev-only-' + secrets.token_hex(16))
    API_PREFIX = '/api'

    # Database
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }

    # Session cookie (server-side user id via Flask-Login)
    SESSION_COOKIE_NAME = 'sessionId'
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    REMEMBER_COOKIE_DURATION = timedelta(hours=24)

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Accounts
    PASSWORD_MIN_LENGTH = int(os.environ.get('PASSWORD_MIN_LENGTH', 6))
    RESET_TOKEN_TTL = timedelta(hours=1)
    INSTALLER_AUTO_APPROVE = os.environ.get('INSTALLER_AUTO_APPROVE', 'true').lower() in ['true', 'on', '1']
    SUPERADMIN_EMAIL = os.environ.get('SUPERADMIN_EMAIL', 'admin@varmepumpetilsynet.no')

    # Postal code import
    MAX_IMPORT_ERRORS = 10

    # Geocoding
    GEOCODER_TIMEOUT = float(os.environ.get('GEOCODER_TIMEOUT', 5))
    KARTVERKET_URL = 'https://ws.geonorge.no/adresser/v1/sok'
    NOMINATIM_URL = 'https://nominatim.openstreetmap.org/search'
    GEOCODER_USER_AGENT = os.environ.get('GEOCODER_USER_AGENT', 'varmepumpetilsynet/1.0')

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_HEADERS_ENABLED = True
    AUTH_RATE_LIMIT = os.environ.get('AUTH_RATE_LIMIT', '10 per minute')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Enforce HTTPS
    SESSION_COOKIE_SECURE = True

    # Production-specific settings
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,
        'max_overflow': 40,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
