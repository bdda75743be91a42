"""Error taxonomy shared by the stores, services and HTTP layer.

Every error the API reports deliberately is an :class:`ApiError`; the Flask
error handler turns it into ``{"error": message}`` with ``status_code``.
"""
from flask import jsonify, request
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    message = "Missing required fields"


class DuplicateEmail(ApiError):
    status_code = 400
    message = "Email already registered"


class InvalidCredentials(ApiError):
    # Same message for unknown email and wrong password
    status_code = 400
    message = "Invalid credentials"


class Unauthenticated(ApiError):
    status_code = 401
    message = "Invalid token"


class NotFound(ApiError):
    status_code = 404
    message = "Task not found"


class StoreFailure(ApiError):
    status_code = 500
    message = "Internal Server Error"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        return jsonify(error=exc.message), exc.status_code

    @app.errorhandler(404)
    def not_found(_):
        if request.path.startswith("/api"):
            return jsonify(error="API route not found"), 404
        return jsonify(error="Not Found"), 404

    @app.errorhandler(405)
    def method_not_allowed(_):
        return jsonify(error="Method Not Allowed"), 405

    @app.errorhandler(500)
    def server_error(exc):
        original = getattr(exc, "original_exception", None)
        if original is not None and not isinstance(original, HTTPException):
            app.logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=original)
        return jsonify(error="Internal Server Error"), 500
