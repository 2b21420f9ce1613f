import logging

from flask import jsonify
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

from shop_admin.errors import ApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Render every error as a JSON body with an ``error`` message."""

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(e):
        return jsonify({"error": "Invalid request", "errors": e.messages}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
