import logging
import traceback

from flask import jsonify, request, current_app
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from cp_analytics.extensions import db
from cp_analytics.responses import error_response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error rendered as ``{code, message, details}`` with an HTTP status."""

    status_code = 400
    code = 'BAD_REQUEST'

    def __init__(self, message, code=None, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details if details is not None else {}

    def to_dict(self):
        return {
            'code': self.code,
            'message': self.message,
            'details': self.details,
        }


class ValidationError(ApiError):
    status_code = 422
    code = 'VALIDATION_ERROR'

    def __init__(self, errors, message='Validation failed'):
        super().__init__(message, details=errors)
        self.errors = errors


class NotFoundError(ApiError):
    status_code = 404
    code = 'NOT_FOUND'


class ForbiddenError(ApiError):
    status_code = 403
    code = 'FORBIDDEN'

    def __init__(self, message='Access denied'):
        super().__init__(message)


def register_error_handlers(app):
    """Map exceptions to the JSON error envelope."""

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        logger.warning(f'Integrity error at {request.path}: {e.orig}')
        return error_response('DUPLICATE_ENTRY', 'Resource already exists', 409)

    @app.errorhandler(OperationalError)
    def handle_operational_error(e):
        db.session.rollback()
        logger.error(f'Database unavailable at {request.path}: {e.orig}')
        return error_response(
            'SERVICE_UNAVAILABLE',
            'Database connection failed. Please try again later.',
            503,
        )

    @app.errorhandler(404)
    def handle_not_found(e):
        return error_response(
            'NOT_FOUND', f'Route {request.method} {request.path} not found', 404
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        code = (e.name or 'HTTP_ERROR').upper().replace(' ', '_')
        return error_response(code, e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        logger.exception(f'Unhandled error at {request.method} {request.path}')
        details = {}
        if current_app.debug:
            details = {'stack': traceback.format_exc()}
        return error_response(
            'INTERNAL_ERROR', str(e) or 'Internal server error', 500, details
        )
