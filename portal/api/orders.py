"""
Order Routes Blueprint

- /api/save-order: Create an order directly (e.g. sold from factory production)
- /api/get-dealer-orders: A dealer's orders, newest first
"""

import logging

from flask import Blueprint, request

from database.connection import get_db_session
from portal.utils.notifications import send_notification
from portal.utils.responses import api_errors, error_response, get_json_body, success_response
from services.content_repository import ContentRepository
from services.dealers_repository import DealersRepository
from services.quote_mapper import order_payload_to_record, order_to_wire
from services.sales_repository import SalesRepository

logger = logging.getLogger(__name__)

orders_bp = Blueprint('orders_bp', __name__, url_prefix='/api')


def _remove_from_factory_production(item_id):
    """A sold production slot leaves the line; the order stands either way."""
    try:
        with get_db_session() as session:
            ContentRepository(session).remove_factory_production_if_present(item_id)
    except Exception as e:
        logger.error(f"Error removing factory production item {item_id}: {e}")


@orders_bp.route('/save-order', methods=['POST'])
@api_errors
def save_order():
    data = get_json_body()
    record = order_payload_to_record(data)

    with get_db_session() as session:
        order = SalesRepository(session).create_order(record)

    factory_production_id = data.get('factoryProductionId')
    if factory_production_id:
        _remove_from_factory_production(factory_production_id)

    send_notification('order', order)

    return success_response(order, message="Order created successfully!")


@orders_bp.route('/get-dealer-orders', methods=['GET'])
@api_errors
def get_dealer_orders():
    dealer_id = request.args.get('dealerId')
    if not dealer_id:
        return error_response("dealerId is required", 400)

    with get_db_session() as session:
        dealer = DealersRepository(session).get_dealer(dealer_id)
        if dealer is None:
            return success_response([], message="Dealer not found")
        orders = SalesRepository(session).list_orders(dealer_id)
        return success_response([order_to_wire(o, dealer.name) for o in orders])
