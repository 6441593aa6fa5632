"""Error handling utilities for JSON endpoints."""
import logging
from functools import wraps
from typing import Callable, Any

from flask import current_app, jsonify

from ..config import Config
from ..exceptions import ValidationFailure


def endpoint_error_handler(func: Callable) -> Callable:
    """Map endpoint failures onto JSON error responses.

    ``ValidationFailure`` becomes a 400 with its generic message. Anything
    else becomes a 500; the fault text is included only in development.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except ValidationFailure as e:
            logging.info(f"Rejected request in {func.__name__}: {e}")
            return jsonify({"error": str(e)}), e.status_code
        except Exception as e:
            logging.error(f"Error processing request in {func.__name__}: {e}", exc_info=True)
            body = {"error": "Internal server error"}
            if Config.is_development(current_app.config.get("APP_ENV")):
                body["message"] = str(e)
            return jsonify(body), 500
    return wrapper
