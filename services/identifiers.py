"""
Human-readable identifiers for quotes, orders and service requests.

Format: PREFIX-YYYYMMDD-XXXXXX where the suffix is six random hex digits.
The unique column constraints remain the final guard against a collision.
"""
import secrets
from datetime import datetime
from typing import Optional

QUOTE_PREFIX = 'QUO'
ORDER_PREFIX = 'ORD'
SERVICE_REQUEST_PREFIX = 'SR'


def generate_identifier(prefix: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.utcnow()
    return f"{prefix}-{now:%Y%m%d}-{secrets.token_hex(3).upper()}"


def generate_quote_id() -> str:
    return generate_identifier(QUOTE_PREFIX)


def generate_order_id() -> str:
    return generate_identifier(ORDER_PREFIX)


def generate_service_request_id() -> str:
    return generate_identifier(SERVICE_REQUEST_PREFIX)
