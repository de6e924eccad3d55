"""
JSON envelope helpers shared by every API blueprint.

Every endpoint answers {success, data?|error?}. The api_errors decorator is
the error boundary of a route: domain exceptions become their HTTP status,
anything unexpected is logged and becomes a 500 carrying the message.
"""

import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from database.connection import DatabaseNotConfiguredError
from services.errors import AccessDeniedError, AuthenticationError, NotFoundError
from services.image_upload import ImageUploadError
from validators import ValidationError

logger = logging.getLogger(__name__)


def success_response(data: Any = None, status: int = 200, message: str = None, **extra):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    body.update(extra)
    return jsonify(body), status


def error_response(message: str, status: int = 400, **extra):
    body = {'success': False, 'error': message}
    body.update(extra)
    return jsonify(body), status


def get_json_body(allow_list: bool = False):
    """Parsed JSON body; raises ValidationError for anything but an object (or list)."""
    data = request.get_json(silent=True)
    if isinstance(data, dict) or (allow_list and isinstance(data, list)):
        return data
    raise ValidationError("Request body must be a JSON object")


def mark_data_updated(result, data_type: str):
    """Stamp an admin mutation response so open dealer screens know to refresh."""
    response, status = result
    timestamp = datetime.now(timezone.utc).isoformat()
    response.headers['X-Data-Updated'] = timestamp
    response.headers['X-Data-Updated-Type'] = data_type
    return response, status


def api_errors(f: Callable) -> Callable:
    """
    Error boundary for API routes

    Usage:
        @bp.route('/save-quote', methods=['POST'])
        @api_errors
        def save_quote():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except HTTPException:
            raise
        except ValidationError as e:
            logger.info(f"Validation failed on {request.path}: {e.message}")
            extra = {'field': e.field} if e.field else {}
            return error_response(e.message, 400, **extra)
        except (NotFoundError, AuthenticationError, AccessDeniedError) as e:
            return error_response(str(e), e.status_code)
        except ImageUploadError as e:
            return error_response(e.message, e.status_code)
        except DatabaseNotConfiguredError as e:
            logger.error(f"{request.method} {request.path} needs a database: {e}")
            return error_response(str(e), 503)
        except Exception as e:
            logger.error(f"Error in {request.method} {request.path}: {e}", exc_info=True)
            return error_response(str(e), 500)

    return decorated_function
