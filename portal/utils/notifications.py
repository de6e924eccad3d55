"""
Best-effort notification email after a dealer saves an order or service
request. Failures are logged and never reach the caller.
"""

import logging
from typing import Dict

from flask import current_app

from database.connection import get_db_session
from services.email_service import EmailService
from services.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = ('order', 'service_request')


def get_email_service() -> EmailService:
    return EmailService(current_app.config)


def deliver_notification(kind: str, record: Dict) -> bool:
    """Mail `record` to the configured notification address. Returns True when sent."""
    with get_db_session() as session:
        recipient = SettingsRepository(session).get_notification_email()

    service = get_email_service()
    if kind == 'order':
        return service.send_order_notification(record, recipient)
    return service.send_service_request_notification(record, recipient)


def send_notification(kind: str, record: Dict) -> bool:
    try:
        return deliver_notification(kind, record)
    except Exception as e:
        logger.warning(f"Could not send {kind} notification: {e}")
        return False
