from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from datetime import datetime, timezone
import logging
import os

db = SQLAlchemy()
login_manager = LoginManager()


def create_app(config_name=None):
    """Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    from varmepumpe.config import config
    app.config.from_object(config[config_name])

    _configure_logging(app)

    from varmepumpe.middleware.request_id import RequestIdMiddleware
    app.wsgi_app = RequestIdMiddleware(app.wsgi_app)

    # Initialize extensions
    from varmepumpe.extensions import limiter
    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    from varmepumpe.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from varmepumpe.blueprints.auth import auth_bp
    from varmepumpe.blueprints.service_requests import service_requests_bp
    from varmepumpe.blueprints.installers import installers_bp
    from varmepumpe.blueprints.service_areas import service_areas_bp
    from varmepumpe.blueprints.customers import customers_bp
    from varmepumpe.blueprints.admin import admin_bp
    from varmepumpe.blueprints.postal_codes import postal_codes_bp
    from varmepumpe.blueprints.geo import geo_bp

    api_prefix = app.config['API_PREFIX']
    app.register_blueprint(auth_bp, url_prefix=api_prefix)
    app.register_blueprint(service_requests_bp, url_prefix=f'{api_prefix}/service-requests')
    app.register_blueprint(installers_bp, url_prefix=f'{api_prefix}/installers')
    app.register_blueprint(service_areas_bp, url_prefix=f'{api_prefix}/service-areas')
    app.register_blueprint(customers_bp, url_prefix=api_prefix)
    app.register_blueprint(admin_bp, url_prefix=f'{api_prefix}/admin')
    app.register_blueprint(postal_codes_bp, url_prefix=f'{api_prefix}/postal-codes')
    app.register_blueprint(geo_bp, url_prefix=api_prefix)

    from varmepumpe.cli import register_commands
    register_commands(app)

    # Health check endpoints
    def health():
        return jsonify({
            'status': 'healthy',
            'service': 'varmepumpe-backend',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'environment': config_name,
        }), 200

    app.add_url_rule('/health', 'health', health)
    app.add_url_rule(f'{api_prefix}/health', 'api_health', health)

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        if config_name == 'production':
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    return app


def _configure_logging(app):
    """Attach a request-id aware handler to the root logger"""
    from varmepumpe.middleware.request_id import RequestIdFilter

    root = logging.getLogger()
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    root.setLevel(level)

    # create_app runs once per test; keep a single handler
    for handler in root.handlers:
        if getattr(handler, '_varmepumpe', False):
            return

    handler = logging.StreamHandler()
    handler._varmepumpe = True
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s'
    ))
    root.addHandler(handler)
