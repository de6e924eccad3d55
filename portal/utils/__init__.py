"""
Utilities Package

Shared helpers for the API blueprints.
"""

from portal.utils.image_utils import inspect_image
from portal.utils.notifications import deliver_notification, send_notification
from portal.utils.responses import (
    api_errors,
    error_response,
    success_response,
    get_json_body,
    mark_data_updated,
)

__all__ = [
    'inspect_image',
    'deliver_notification',
    'send_notification',
    'api_errors',
    'error_response',
    'success_response',
    'get_json_body',
    'mark_data_updated',
]
