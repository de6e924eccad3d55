"""
Dealer Tools Routes Blueprint

Handles the dealer's own working data:
- /api/dealer-pricing: Dealer sale prices per catalog item (GET/POST/DELETE)
- /api/dealer-inventory: Stock boats (GET/POST with action/PUT/DELETE)
- /api/boat-sales: MSRP sheet per boat model (GET/POST/DELETE)
"""

import logging

from flask import Blueprint, request

from database.connection import get_db_session
from portal.utils.responses import api_errors, error_response, get_json_body, success_response
from services.dealer_tools_repository import DealerToolsRepository
from validators import ValidationError

logger = logging.getLogger(__name__)

dealer_tools_bp = Blueprint('dealer_tools_bp', __name__, url_prefix='/api')

INVENTORY_ACTIONS = ('add', 'update', 'delete')


# ============================================================================
# DEALER PRICING
# ============================================================================

@dealer_tools_bp.route('/dealer-pricing', methods=['GET'])
@api_errors
def list_dealer_pricing():
    dealer_id = request.args.get('dealer_id')
    if not dealer_id:
        return error_response("dealer_id is required", 400)

    with get_db_session() as session:
        pricing = DealerToolsRepository(session).list_pricing(dealer_id)
    return success_response(pricing)


@dealer_tools_bp.route('/dealer-pricing', methods=['POST'])
@api_errors
def save_dealer_pricing():
    """Upsert one price; out-of-range numbers are rejected with 400"""
    data = get_json_body()
    with get_db_session() as session:
        saved = DealerToolsRepository(session).save_pricing(data)
    return success_response(saved, message=f"Price saved for dealer {saved['dealer_id']}")


@dealer_tools_bp.route('/dealer-pricing', methods=['DELETE'])
@api_errors
def delete_dealer_pricing():
    # With dealer_id given, a dealer can only delete their own prices
    with get_db_session() as session:
        deleted = DealerToolsRepository(session).delete_pricing(
            request.args.get('id'), request.args.get('dealer_id')
        )
    if not deleted:
        return error_response("Price not found", 404)
    return success_response(message="Dealer price deleted successfully")


# ============================================================================
# DEALER INVENTORY
# ============================================================================

@dealer_tools_bp.route('/dealer-inventory', methods=['GET'])
@api_errors
def list_dealer_inventory():
    with get_db_session() as session:
        items = DealerToolsRepository(session).list_inventory(
            request.args.get('dealerId'), request.args.get('dealerName')
        )
    return success_response(items)


def _update_inventory(repo, data):
    item = repo.update_inventory(data.get('id'), data)
    if item is None:
        return error_response("Inventory item not found", 404)
    return success_response(item)


def _delete_inventory(repo, item_id):
    if not repo.delete_inventory(item_id):
        return error_response("Inventory item not found", 404)
    return success_response()


@dealer_tools_bp.route('/dealer-inventory', methods=['POST'])
@api_errors
def dealer_inventory_action():
    """Dispatch on body.action: add, update or delete"""
    data = get_json_body()
    action = data.get('action')
    if action not in INVENTORY_ACTIONS:
        raise ValidationError("Invalid action", 'action')

    with get_db_session() as session:
        repo = DealerToolsRepository(session)
        if action == 'add':
            return success_response(repo.add_inventory(data))
        if action == 'update':
            return _update_inventory(repo, data)
        return _delete_inventory(repo, data.get('id'))


@dealer_tools_bp.route('/dealer-inventory', methods=['PUT'])
@api_errors
def update_dealer_inventory():
    data = get_json_body()
    with get_db_session() as session:
        return _update_inventory(DealerToolsRepository(session), data)


@dealer_tools_bp.route('/dealer-inventory', methods=['DELETE'])
@api_errors
def delete_dealer_inventory():
    with get_db_session() as session:
        return _delete_inventory(DealerToolsRepository(session), request.args.get('id'))


# ============================================================================
# BOAT SALES
# ============================================================================

@dealer_tools_bp.route('/boat-sales', methods=['GET'])
@api_errors
def list_boat_sales():
    dealer_name = request.args.get('dealer')
    if not dealer_name:
        return error_response("Dealer name is required", 400)

    with get_db_session() as session:
        sales = DealerToolsRepository(session).list_boat_sales(dealer_name)
    return success_response(sales)


@dealer_tools_bp.route('/boat-sales', methods=['POST'])
@api_errors
def save_boat_sale():
    data = get_json_body()
    with get_db_session() as session:
        sale = DealerToolsRepository(session).save_boat_sale(data)
    return success_response(sale)


@dealer_tools_bp.route('/boat-sales', methods=['DELETE'])
@api_errors
def delete_boat_sale():
    with get_db_session() as session:
        deleted = DealerToolsRepository(session).delete_boat_sale(
            request.args.get('id'), request.args.get('dealer')
        )
    if not deleted:
        return error_response("Boat sale not found", 404)
    return success_response()
