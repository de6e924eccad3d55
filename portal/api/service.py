"""
After-Sales Routes Blueprint

Handles service requests and their message threads:
- /api/save-service-request: Open a service request for a dealer
- /api/get-dealer-service-requests: A dealer's service requests
- /api/service-messages: List (GET), post (POST) and delete (DELETE, admin only)
"""

import logging

from flask import Blueprint, request

from database.connection import get_db_session
from portal.utils.notifications import send_notification
from portal.utils.responses import api_errors, error_response, get_json_body, success_response
from services.dealers_repository import DealersRepository
from services.errors import NotFoundError
from services.identifiers import generate_service_request_id
from services.quote_mapper import service_request_payload_to_record, service_request_to_wire
from services.service_repository import ServiceRepository
from validators import sanitize_string

logger = logging.getLogger(__name__)

service_bp = Blueprint('service_bp', __name__, url_prefix='/api')


@service_bp.route('/save-service-request', methods=['POST'])
@api_errors
def save_service_request():
    """Resolve the dealer by id, falling back to name, then store the request"""
    data = get_json_body()

    with get_db_session() as session:
        dealer = DealersRepository(session).resolve_dealer(
            data.get('dealer_id'), data.get('dealerName')
        )
        if dealer is None:
            logger.warning(
                f"Dealer not found for service request (id={data.get('dealer_id')}, name={data.get('dealerName')})"
            )
            raise NotFoundError("Dealer not found")

        request_id = sanitize_string(data.get('requestId'), 50) or generate_service_request_id()
        record = service_request_payload_to_record(data, dealer.id, request_id)
        saved = ServiceRepository(session).create_request(record)

    send_notification('service_request', saved)

    return success_response(saved, message="Service request saved successfully!", serviceRequest=saved)


@service_bp.route('/get-dealer-service-requests', methods=['GET'])
@api_errors
def get_dealer_service_requests():
    dealer_id = request.args.get('dealerId')
    if not dealer_id:
        return error_response("dealerId is required", 400)

    with get_db_session() as session:
        dealer = DealersRepository(session).get_dealer(dealer_id)
        if dealer is None:
            return success_response([], message="Dealer not found")
        requests = ServiceRepository(session).list_requests(dealer_id)
        return success_response([service_request_to_wire(r, dealer.name) for r in requests])


# ============================================================================
# SERVICE MESSAGES
# ============================================================================

@service_bp.route('/service-messages', methods=['GET'])
@api_errors
def list_service_messages():
    service_request_id = request.args.get('serviceRequestId')
    if not service_request_id:
        return error_response("Service request ID is required", 400)

    with get_db_session() as session:
        messages = ServiceRepository(session).list_messages(service_request_id)
    return success_response(messages, messages=messages)


@service_bp.route('/service-messages', methods=['POST'])
@api_errors
def create_service_message():
    data = get_json_body()
    with get_db_session() as session:
        entry = ServiceRepository(session).create_message(
            data.get('serviceRequestId'),
            data.get('senderType'),
            data.get('senderName'),
            data.get('message')
        )
    return success_response(entry, message="Message sent successfully")


@service_bp.route('/service-messages', methods=['DELETE'])
@api_errors
def delete_service_message():
    """Only the admin side may delete messages"""
    message_id = request.args.get('messageId')
    sender_type = request.args.get('senderType')

    with get_db_session() as session:
        deleted = ServiceRepository(session).delete_message(message_id, sender_type)
    if not deleted:
        return error_response("Message not found", 404)
    return success_response(message="Message deleted successfully")
