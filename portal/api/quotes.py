"""
Quote Routes Blueprint

Handles dealer quotes:
- /api/save-quote: Create a quote from the dealer quote builder
- /api/get-dealer-quotes: A dealer's quotes, newest first
- /api/accept-quote: Convert a quote into an order
"""

import logging

from flask import Blueprint, request

from database.connection import get_db_session
from portal.utils.responses import api_errors, error_response, get_json_body, success_response
from services.dealers_repository import DealersRepository
from services.errors import NotFoundError
from services.identifiers import generate_quote_id
from services.quote_mapper import quote_payload_to_record, quote_to_wire, validate_quote_payload
from services.sales_repository import SalesRepository
from validators import ValidationError, sanitize_string, validate_uuid

logger = logging.getLogger(__name__)

quotes_bp = Blueprint('quotes_bp', __name__, url_prefix='/api')


@quotes_bp.route('/save-quote', methods=['POST'])
@api_errors
def save_quote():
    """Validate, map and store a new quote"""
    data = get_json_body()
    # Nothing touches the database until the payload is known to be complete
    validate_quote_payload(data)

    quote_id = sanitize_string(data.get('quoteId'), 50) or generate_quote_id()
    record = quote_payload_to_record(data, quote_id)

    with get_db_session() as session:
        if DealersRepository(session).get_dealer(record['dealer_id']) is None:
            raise NotFoundError("Dealer not found")
        saved = SalesRepository(session).create_quote(record)

    return success_response(
        {'id': saved['id'], 'quote_id': saved['quote_id'], 'dealer_id': saved['dealer_id']},
        message="Quote generated successfully!",
        quoteId=quote_id
    )


@quotes_bp.route('/get-dealer-quotes', methods=['GET'])
@api_errors
def get_dealer_quotes():
    dealer_id = request.args.get('dealerId')
    if not dealer_id:
        return error_response("dealerId is required", 400)

    is_valid, error = validate_uuid(dealer_id)
    if not is_valid:
        raise ValidationError(error, 'dealerId')

    with get_db_session() as session:
        dealer = DealersRepository(session).get_dealer(dealer_id)
        if dealer is None:
            return success_response([])
        quotes = SalesRepository(session).list_quotes(dealer_id)
        return success_response([quote_to_wire(q, dealer.name) for q in quotes])


@quotes_bp.route('/accept-quote', methods=['POST'])
@api_errors
def accept_quote():
    """Turn a pending quote into a new order in one transaction"""
    data = get_json_body()
    quote_id = data.get('quoteId')
    if not quote_id:
        return error_response("Quote ID is required", 400)

    with get_db_session() as session:
        order = SalesRepository(session).accept_quote(quote_id)

    return success_response(order, message="Quote converted to order successfully!")
