"""
Admin Panel Routes Blueprint

Handles the administrator screens:
- /api/admin-auth, /api/change-admin-password: Shared admin password
- /api/get-admin-data: Every catalog, dealer, order and ticket in one payload
- /api/save-admin-data: Bulk upsert of catalogs, dealers and order statuses
- /api/delete-admin-data: Delete one row by type + id
- /api/save-display-order: Drag-and-drop ordering
- /api/notification-email: Where order/service notifications are sent
- /api/send-email-notification: Send a notification on demand

Mutations stamp X-Data-Updated headers so open dealer screens refresh.
"""

import logging

from flask import Blueprint, current_app

from database.connection import get_db_session
from extensions import limiter
from portal.utils.notifications import NOTIFICATION_TYPES, deliver_notification
from portal.utils.responses import (
    api_errors, error_response, get_json_body, mark_data_updated, success_response
)
from services.auth_service import change_admin_password, verify_admin_password
from services.catalog_repository import CATALOG_MODELS, CatalogRepository
from services.content_repository import ContentRepository
from services.dealers_repository import DealersRepository
from services.sales_repository import SalesRepository
from services.service_repository import ServiceRepository
from services.settings_repository import SettingsRepository
from validators import ValidationError, is_blank, validate_email

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin_bp', __name__, url_prefix='/api')

# save-admin-data payload key -> catalog table
CATALOG_PAYLOAD_KEYS = {
    'enginePackages': 'engine_packages',
    'hullColors': 'hull_colors',
    'upholsteryPackages': 'upholstery_packages',
    'additionalOptions': 'additional_options',
    'boatModels': 'boat_models',
}

DELETABLE_TYPES = tuple(CATALOG_MODELS) + ('dealers', 'orders', 'service_requests')


def _default_admin_password():
    return current_app.config.get('DEFAULT_ADMIN_PASSWORD', 'drakkar')


def _login_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '10 per minute')


# ============================================================================
# ADMIN PASSWORD
# ============================================================================

@admin_bp.route('/admin-auth', methods=['POST'])
@limiter.limit(_login_limit)
@api_errors
def admin_auth():
    data = get_json_body()
    with get_db_session() as session:
        verify_admin_password(session, data.get('password'), _default_admin_password())
    return success_response()


@admin_bp.route('/change-admin-password', methods=['POST'])
@api_errors
def change_password():
    data = get_json_body()
    with get_db_session() as session:
        change_admin_password(
            session,
            data.get('currentPassword'),
            data.get('newPassword'),
            _default_admin_password()
        )
    return success_response(message="Admin password changed successfully")


# ============================================================================
# BULK DATA
# ============================================================================

@admin_bp.route('/get-admin-data', methods=['GET'])
@api_errors
def get_admin_data():
    """Everything the admin panel renders, in display order"""
    with get_db_session() as session:
        catalog = CatalogRepository(session)
        content = ContentRepository(session)
        result = {key: catalog.list_items(table) for key, table in CATALOG_PAYLOAD_KEYS.items()}
        result.update({
            'dealers': DealersRepository(session).list_dealers(),
            'orders': SalesRepository(session).list_orders(),
            'serviceRequests': ServiceRepository(session).list_requests(),
            'marketingContent': content.list_marketing_content(),
            'marketingManuals': content.list_documents('manuals'),
            'marketingWarranties': content.list_documents('warranties'),
            'factoryProduction': content.list_factory_production(),
        })

    logger.info(
        f"Admin data loaded: {len(result['boatModels'])} boat models, "
        f"{len(result['dealers'])} dealers, {len(result['orders'])} orders"
    )
    return success_response(result)


@admin_bp.route('/save-admin-data', methods=['POST'])
@api_errors
def save_admin_data():
    """
    Upsert whichever lists are present. All of them land in one transaction,
    so a bad dealer email leaves the catalogs untouched too.
    """
    data = get_json_body()
    updated = []

    if data.get('mode') == 'upsert':
        with get_db_session() as session:
            catalog = CatalogRepository(session)
            for key, table in CATALOG_PAYLOAD_KEYS.items():
                if data.get(key) is not None:
                    catalog.save_items(table, data[key])
                    updated.append(table)
            if data.get('dealers') is not None:
                DealersRepository(session).save_dealers(data['dealers'])
                updated.append('dealers')
            if data.get('orders') is not None:
                SalesRepository(session).save_order_statuses(data['orders'])
                updated.append('orders')

    logger.info(f"Admin data saved: {', '.join(updated) or 'nothing'}")
    return mark_data_updated(success_response(updated=updated), ','.join(updated) or 'none')


@admin_bp.route('/delete-admin-data', methods=['POST'])
@api_errors
def delete_admin_data():
    data = get_json_body()
    data_type = data.get('type')
    item_id = data.get('id')

    if data_type not in DELETABLE_TYPES:
        raise ValidationError(f"Invalid data type: {data_type}", 'type')
    if is_blank(item_id):
        raise ValidationError("ID is required", 'id')

    with get_db_session() as session:
        if data_type in CATALOG_MODELS:
            deleted = CatalogRepository(session).delete_item(data_type, item_id)
        elif data_type == 'dealers':
            deleted = DealersRepository(session).delete_dealer(item_id)
        elif data_type == 'orders':
            deleted = SalesRepository(session).delete_order(item_id)
        else:
            deleted = ServiceRepository(session).delete_request(item_id)

    if not deleted:
        return error_response("Item not found", 404)
    return mark_data_updated(success_response(message="Item deleted successfully!"), data_type)


@admin_bp.route('/save-display-order', methods=['POST'])
@api_errors
def save_display_order():
    data = get_json_body()
    data_type = data.get('type')
    items = data.get('items')
    if not data_type or not isinstance(items, list):
        return error_response("Invalid parameters", 400)

    with get_db_session() as session:
        updated = CatalogRepository(session).update_display_order(data_type, items)

    return mark_data_updated(success_response(updated=updated), data_type)


# ============================================================================
# NOTIFICATIONS
# ============================================================================

@admin_bp.route('/notification-email', methods=['GET'])
@api_errors
def get_notification_email():
    with get_db_session() as session:
        email = SettingsRepository(session).get_notification_email()
    return success_response({'email': email}, email=email)


@admin_bp.route('/notification-email', methods=['POST'])
@api_errors
def set_notification_email():
    data = get_json_body()
    email = data.get('email')
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required", 'email')

    is_valid, error = validate_email(email)
    if not is_valid:
        raise ValidationError(error, 'email')

    with get_db_session() as session:
        SettingsRepository(session).set_notification_email(email.strip())
    return success_response(message="Notification email updated successfully")


@admin_bp.route('/send-email-notification', methods=['POST'])
@api_errors
def send_email_notification():
    data = get_json_body()
    kind = data.get('type')
    record = data.get('data')

    if kind not in NOTIFICATION_TYPES:
        raise ValidationError("Invalid notification type", 'type')
    if not isinstance(record, dict):
        raise ValidationError("Notification data is required", 'data')

    if not deliver_notification(kind, record):
        return error_response("Email notification was not sent", 400)
    return success_response(message="Email notification sent")
