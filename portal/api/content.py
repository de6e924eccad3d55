"""
Factory & Marketing Routes Blueprint

- /api/factory-production: Boats on the production line (GET/POST/DELETE)
- /api/marketing-content: Banner content shown on dealer dashboards
- /api/marketing-manuals, /api/marketing-warranties: Owner documents
"""

import logging

from flask import Blueprint, request

from database.connection import get_db_session
from portal.utils.responses import api_errors, error_response, get_json_body, success_response
from services.content_repository import ContentRepository

logger = logging.getLogger(__name__)

content_bp = Blueprint('content_bp', __name__, url_prefix='/api')


def _not_found_unless(deleted: bool):
    if not deleted:
        return error_response("Item not found", 404)
    return success_response()


# ============================================================================
# FACTORY PRODUCTION
# ============================================================================

@content_bp.route('/factory-production', methods=['GET'])
@api_errors
def list_factory_production():
    with get_db_session() as session:
        items = ContentRepository(session).list_factory_production()
    return success_response(items)


@content_bp.route('/factory-production', methods=['POST'])
@api_errors
def save_factory_production():
    """Accepts one item or a list; blank completion dates are stored as null"""
    data = get_json_body(allow_list=True)
    with get_db_session() as session:
        saved = ContentRepository(session).save_factory_production(data)
    return success_response(saved)


@content_bp.route('/factory-production', methods=['DELETE'])
@api_errors
def delete_factory_production():
    item_id = request.args.get('id')
    if not item_id:
        return error_response("ID is required", 400)
    with get_db_session() as session:
        deleted = ContentRepository(session).delete_factory_production(item_id)
    return _not_found_unless(deleted)


# ============================================================================
# MARKETING CONTENT
# ============================================================================

@content_bp.route('/marketing-content', methods=['GET'])
@api_errors
def list_marketing_content():
    with get_db_session() as session:
        items = ContentRepository(session).list_marketing_content()
    return success_response(items)


@content_bp.route('/marketing-content', methods=['POST'])
@api_errors
def save_marketing_content():
    data = get_json_body()
    with get_db_session() as session:
        item = ContentRepository(session).save_marketing_content(data)
    return success_response(item)


@content_bp.route('/marketing-content', methods=['DELETE'])
@api_errors
def delete_marketing_content():
    item_id = request.args.get('id')
    if not item_id:
        return error_response("ID is required", 400)
    with get_db_session() as session:
        deleted = ContentRepository(session).delete_marketing_content(item_id)
    return _not_found_unless(deleted)


# ============================================================================
# MANUALS & WARRANTIES
# ============================================================================

def _list_documents(kind):
    with get_db_session() as session:
        items = ContentRepository(session).list_documents(kind)
    return success_response(items)


def _save_document(kind):
    data = get_json_body()
    with get_db_session() as session:
        item = ContentRepository(session).save_document(kind, data)
    return success_response(item)


def _delete_document(kind):
    item_id = request.args.get('id')
    if not item_id:
        return error_response("ID is required", 400)
    with get_db_session() as session:
        deleted = ContentRepository(session).delete_document(kind, item_id)
    return _not_found_unless(deleted)


@content_bp.route('/marketing-manuals', methods=['GET', 'POST', 'DELETE'])
@api_errors
def marketing_manuals():
    if request.method == 'GET':
        return _list_documents('manuals')
    if request.method == 'POST':
        return _save_document('manuals')
    return _delete_document('manuals')


@content_bp.route('/marketing-warranties', methods=['GET', 'POST', 'DELETE'])
@api_errors
def marketing_warranties():
    if request.method == 'GET':
        return _list_documents('warranties')
    if request.method == 'POST':
        return _save_document('warranties')
    return _delete_document('warranties')
