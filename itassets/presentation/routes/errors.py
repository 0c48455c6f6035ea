"""
Error handlers mapping domain exceptions to JSON responses
"""

from flask import jsonify
from itassets.buisness.core.errors import (
    DuplicateInvoiceNumber,
    NotFound,
    PrefixCollision,
    PrefixLockedError,
    TransactionConflict,
)
from itassets.logger import get_logger

logger = get_logger("itassets.routes.errors")

STATUS_BY_ERROR = (
    (NotFound, 404),
    (PrefixCollision, 409),
    (PrefixLockedError, 409),
    (DuplicateInvoiceNumber, 409),
    (TransactionConflict, 503),
)


def error_response(error: Exception, status: int):
    return jsonify({'error': type(error).__name__, 'message': str(error)}), status


def register_error_handlers(app):
    for error_cls, status in STATUS_BY_ERROR:
        def handler(error, status=status):
            logger.warning(f"Rejected request: {type(error).__name__}: {error}")
            return error_response(error, status)
        app.register_error_handler(error_cls, handler)

    @app.errorhandler(ValueError)
    def handle_value_error(error):
        logger.info(f"Validation failed: {error}")
        return error_response(error, 400)
