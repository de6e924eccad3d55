"""
Dealer Account Routes Blueprint

Handles dealer login and account details:
- /api/dealer-auth: Portal login (email, password, lang)
- /api/get-dealer-details: Dealer profile
- /api/change-dealer-password: Password change
- /api/get-dealer-config: Catalog as the dealer sees it (country filter + pricing)
"""

import logging

from flask import Blueprint, current_app, request

from database.connection import get_db_session
from extensions import limiter
from portal.utils.responses import api_errors, error_response, get_json_body, success_response
from services.auth_service import authenticate_dealer, change_dealer_password
from services.dealer_config import build_dealer_config
from services.dealers_repository import DealersRepository

logger = logging.getLogger(__name__)

dealer_bp = Blueprint('dealer_bp', __name__, url_prefix='/api')


def _login_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '10 per minute')


@dealer_bp.route('/dealer-auth', methods=['POST'])
@limiter.limit(_login_limit)
@api_errors
def dealer_auth():
    """Log a dealer into one language portal"""
    data = get_json_body()
    with get_db_session() as session:
        dealer = authenticate_dealer(
            session,
            data.get('email'),
            data.get('password'),
            data.get('lang')
        )
    return success_response(dealer, dealer=dealer)


@dealer_bp.route('/get-dealer-details', methods=['POST'])
@api_errors
def get_dealer_details():
    data = get_json_body()
    dealer_id = data.get('dealerId')
    if not dealer_id:
        return error_response("Dealer ID is required", 400)

    with get_db_session() as session:
        dealer = DealersRepository(session).get_dealer(dealer_id)
        if dealer is None:
            return error_response("Dealer not found", 404)
        return success_response(dealer.to_dict())


@dealer_bp.route('/change-dealer-password', methods=['POST'])
@api_errors
def change_password():
    data = get_json_body()
    with get_db_session() as session:
        change_dealer_password(
            session,
            data.get('dealerId'),
            data.get('currentPassword'),
            data.get('newPassword')
        )
    return success_response(message="Password changed successfully")


@dealer_bp.route('/get-dealer-config', methods=['GET'])
@api_errors
def get_dealer_config():
    """Catalog filtered by the dealer's country and decorated with their prices"""
    dealer_id = request.args.get('dealer_id') or request.args.get('dealerId')
    with get_db_session() as session:
        config = build_dealer_config(session, dealer_id)
    return success_response(config)
