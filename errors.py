from flask import jsonify
from werkzeug.exceptions import HTTPException

from gateway import GatewayError


class ApiError(Exception):
    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def api_error(e):
        return jsonify({"error": e.message}), e.status

    @app.errorhandler(GatewayError)
    def gateway_error(e):
        # store message goes out as-is
        return jsonify({"error": e.message}), 500

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Something broke on our end"}), 500
