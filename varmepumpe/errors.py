"""
API error hierarchy and the handlers that turn it into JSON responses.

Services raise these exceptions; nothing below the blueprint layer builds
HTTP responses itself.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code = 500

    def __init__(self, message, field=None, errors=None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = errors

    def to_dict(self):
        payload = {'error': self.message}
        if self.field:
            payload['field'] = self.field
        if self.errors:
            payload['errors'] = self.errors
        return payload

    def __repr__(self):
        return f'{self.__class__.__name__}(message={self.message!r})'


class ValidationError(APIError):
    """Request body failed validation; ``errors`` maps field -> message"""
    status_code = 400

    def __init__(self, errors, message=None):
        if message is None:
            # Surface the first problem as the headline message
            message = next(iter(errors.values())) if errors else 'Invalid data'
        super().__init__(message, errors=errors)


class ConflictError(APIError):
    """A unique field is already taken"""
    status_code = 400


class AuthenticationError(APIError):
    status_code = 401


class PermissionDenied(APIError):
    status_code = 403


class NotFoundError(APIError):
    status_code = 404


def register_error_handlers(app):
    """Install JSON error handlers on the app"""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if error.code == 429:
            return jsonify({
                'error': 'Too many requests. Please try again later.',
            }), 429
        return jsonify({'error': error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception('Unhandled error: %s', error)
        return jsonify({'error': 'Internal server error'}), 500
