"""
Testing configuration for the varmepumpe backend
"""
import os
from .settings import Config


class TestingConfig(Config):
    """Testing configuration with isolated database and safe defaults"""

    TESTING = True
    DEBUG = False
    SECRET_KEY = 'test-secret-key'

    # Use in-memory SQLite for fast tests
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'TEST_DATABASE_URL',
        'sqlite:///:memory:'
    )
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # The test client talks plain HTTP
    SESSION_COOKIE_SECURE = False

    # Disable rate limiting in tests
    RATELIMIT_ENABLED = False

    # Registration behaviour under test is explicit per test
    INSTALLER_AUTO_APPROVE = True

    # Never wait on a real geocoder
    GEOCODER_TIMEOUT = 1

    # Logging
    LOG_LEVEL = 'WARNING'

    # CORS - allow local frontends in tests
    CORS_ORIGINS = ['http://localhost:5173', 'http://localhost:3000']
