"""
Request ID middleware for request tracing and logging
"""
import logging
import uuid

from flask import has_request_context, request


class RequestIdMiddleware:
    """
    WSGI middleware that gives every request an id.

    An incoming X-Request-ID header is reused so ids survive a proxy hop;
    the id is echoed back in the response headers.
    """

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        request_id = environ.get('HTTP_X_REQUEST_ID') or uuid.uuid4().hex
        environ['request_id'] = request_id

        def custom_start_response(status, headers, exc_info=None):
            headers.append(('X-Request-ID', request_id))
            return start_response(status, headers, exc_info)

        return self.app(environ, custom_start_response)


class RequestIdFilter(logging.Filter):
    """Stamp log records with the id of the request being served ('-' outside one)"""

    def filter(self, record):
        request_id = '-'
        if has_request_context():
            request_id = request.environ.get('request_id', '-')
        record.request_id = request_id
        return True
