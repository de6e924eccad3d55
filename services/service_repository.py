"""
Service Repository - service requests and the admin/dealer message thread on each.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from database.models import ServiceMessage, ServiceRequest
from services.errors import AccessDeniedError
from validators import ValidationError, is_blank

logger = logging.getLogger(__name__)

SENDER_TYPES = ('admin', 'dealer')
MAX_MESSAGE_LENGTH = 2000


class ServiceRepository:
    """Repository for service requests and their messages."""

    def __init__(self, session: Session):
        self.session = session

    def create_request(self, record: Dict) -> Dict:
        request = ServiceRequest(**record)
        self.session.add(request)
        self.session.flush()
        logger.info(f"Created service request: {request.request_id} for dealer {request.dealer_id}")
        return request.to_dict()

    def list_requests(self, dealer_id: Optional[str] = None) -> List[Dict]:
        query = self.session.query(ServiceRequest)
        if dealer_id:
            query = query.filter(ServiceRequest.dealer_id == dealer_id)
        requests = query.order_by(ServiceRequest.created_at.desc(), ServiceRequest.id.desc()).all()
        return [r.to_dict() for r in requests]

    def delete_request(self, request_id: str) -> bool:
        request = self.session.query(ServiceRequest).filter(
            ServiceRequest.request_id == str(request_id)
        ).first()
        if not request:
            return False
        self.session.query(ServiceMessage).filter(
            ServiceMessage.service_request_id == request.request_id
        ).delete(synchronize_session=False)
        self.session.delete(request)
        self.session.flush()
        logger.info(f"Deleted service request: {request_id}")
        return True

    # =========================================================================
    # MESSAGES
    # =========================================================================

    def list_messages(self, service_request_id: str) -> List[Dict]:
        messages = self.session.query(ServiceMessage).filter(
            ServiceMessage.service_request_id == service_request_id
        ).order_by(ServiceMessage.created_at.asc(), ServiceMessage.id.asc()).all()
        return [m.to_dict() for m in messages]

    def create_message(self, service_request_id: str, sender_type: str, sender_name: str, message: str) -> Dict:
        if any(is_blank(v) for v in (service_request_id, sender_type, sender_name, message)):
            raise ValidationError("All fields are required")
        if not isinstance(sender_name, str) or not isinstance(message, str):
            raise ValidationError("Sender name and message must be text", 'message')
        if sender_type not in SENDER_TYPES:
            raise ValidationError("Invalid sender type", 'senderType')
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValidationError(f"Message is too long (max {MAX_MESSAGE_LENGTH} characters)", 'message')

        entry = ServiceMessage(
            service_request_id=service_request_id,
            sender_type=sender_type,
            sender_name=sender_name.strip(),
            message=message.strip()
        )
        self.session.add(entry)
        self.session.flush()
        logger.info(f"New {sender_type} message on service request {service_request_id}")
        return entry.to_dict()

    def delete_message(self, message_id, sender_type: str) -> bool:
        if is_blank(message_id):
            raise ValidationError("Message ID is required", 'messageId')
        if sender_type != 'admin':
            raise AccessDeniedError("Unauthorized - only admin can delete messages")

        try:
            key = int(message_id)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid messageId: {message_id}", 'messageId')

        entry = self.session.get(ServiceMessage, key)
        if not entry:
            return False
        self.session.delete(entry)
        self.session.flush()
        logger.info(f"Deleted service message: {message_id}")
        return True
