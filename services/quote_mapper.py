"""
Quote / Order field mapping.

Dealer screens post a nested, camelCase payload (customer object, totalUsd,
dealerId); storage is flat snake_case columns. These functions translate in
both directions and default every optional field so nothing undefined
reaches the database.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from validators import ValidationError, is_blank, parse_date, sanitize_string, to_float, validate_uuid


# (path into the payload, field name reported back to the client), checked in order
REQUIRED_QUOTE_FIELDS = (
    (('customer', 'name'), 'customerName'),
    (('customer', 'email'), 'customerEmail'),
    (('customer', 'phone'), 'customerPhone'),
    (('model',), 'boatModel'),
    (('engine',), 'enginePackage'),
    (('hull_color',), 'hullColor'),
    (('dealerId',), 'dealerId'),
)

REQUIRED_ORDER_FIELDS = ('order_id', 'dealer_id', 'customer_name', 'customer_email')

# Columns copied verbatim when a quote is converted to an order
SALE_FIELDS = (
    'dealer_id',
    'customer_name', 'customer_email', 'customer_phone',
    'customer_address', 'customer_city', 'customer_state', 'customer_zip', 'customer_country',
    'boat_model', 'engine_package', 'hull_color', 'upholstery_package', 'additional_options',
    'payment_method', 'deposit_amount', 'additional_notes',
    'total_usd', 'total_brl',
)

DATE_DISPLAY_FORMAT = '%d/%m/%Y'


def _lookup(payload: Dict[str, Any], path) -> Any:
    value = payload
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _text(value: Any) -> str:
    return sanitize_string(value) if value is not None else ''


def _options(value: Any) -> List:
    return list(value) if isinstance(value, list) else []


def _display_date(iso_value: Optional[str]) -> str:
    if not iso_value:
        return ''
    try:
        return datetime.fromisoformat(iso_value).strftime(DATE_DISPLAY_FORMAT)
    except ValueError:
        return iso_value


# =============================================================================
# QUOTES
# =============================================================================

def validate_quote_payload(payload: Dict[str, Any]) -> None:
    """
    Raise ValidationError for the first missing required field, then for a
    dealerId that is not a canonical UUID.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    for path, field in REQUIRED_QUOTE_FIELDS:
        if is_blank(_lookup(payload, path)):
            raise ValidationError(f"Missing required field: {field}", field)

    is_valid, error = validate_uuid(payload.get('dealerId'))
    if not is_valid:
        raise ValidationError(error, 'dealerId')


def quote_payload_to_record(payload: Dict[str, Any], quote_id: str) -> Dict[str, Any]:
    """Flatten a validated quote payload into Quote column values."""
    customer = payload.get('customer') or {}

    return {
        'quote_id': quote_id,
        'dealer_id': payload['dealerId'],
        'customer_name': _text(customer.get('name')),
        'customer_email': _text(customer.get('email')),
        'customer_phone': _text(customer.get('phone')),
        'customer_address': _text(customer.get('address')),
        'customer_city': _text(customer.get('city')),
        'customer_state': _text(customer.get('state')),
        'customer_zip': _text(customer.get('zip')),
        'customer_country': _text(customer.get('country')),
        'boat_model': _text(payload.get('model')),
        'engine_package': _text(payload.get('engine')),
        'hull_color': _text(payload.get('hull_color')),
        'upholstery_package': _text(payload.get('upholstery_package')),
        'additional_options': _options(payload.get('options')),
        'payment_method': _text(payload.get('payment_method')),
        'deposit_amount': to_float(payload.get('deposit_amount')),
        'additional_notes': _text(payload.get('additional_notes')),
        'total_usd': to_float(payload.get('totalUsd')),
        'total_brl': to_float(payload.get('totalBrl')),
        'status': 'pending',
        'valid_until': parse_date(payload.get('validUntil'), 'validUntil'),
    }


def quote_to_order_record(quote: Dict[str, Any], order_id: str) -> Dict[str, Any]:
    """Copy a stored quote into Order column values with a fresh id and status."""
    record = {field: quote.get(field) for field in SALE_FIELDS}
    record['additional_options'] = _options(record.get('additional_options'))
    record['order_id'] = order_id
    record['status'] = 'pending'
    return record


def quote_to_wire(quote: Dict[str, Any], dealer_name: str) -> Dict[str, Any]:
    """Shape a stored quote for the dealer's quote list."""
    return {
        'quoteId': quote['quote_id'],
        'dealer': dealer_name,
        'customer': {
            'name': quote.get('customer_name') or '',
            'email': quote.get('customer_email') or '',
            'phone': quote.get('customer_phone') or '',
            'address': quote.get('customer_address') or '',
            'city': quote.get('customer_city') or '',
            'state': quote.get('customer_state') or '',
            'zip': quote.get('customer_zip') or '',
            'country': quote.get('customer_country') or '',
        },
        'model': quote.get('boat_model') or '',
        'engine': quote.get('engine_package') or '',
        'hull_color': quote.get('hull_color') or '',
        'upholstery_package': quote.get('upholstery_package') or '',
        'options': quote.get('additional_options') or [],
        'paymentMethod': quote.get('payment_method') or '',
        'depositAmount': quote.get('deposit_amount') or 0,
        'additionalNotes': quote.get('additional_notes') or '',
        'date': _display_date(quote.get('created_at')),
        'status': quote.get('status') or 'pending',
        'totalUsd': quote.get('total_usd') or 0,
        'totalBrl': quote.get('total_brl') or 0,
        'validUntil': quote.get('valid_until'),
    }


# =============================================================================
# ORDERS
# =============================================================================

def order_payload_to_record(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a direct save-order payload (already snake_case) onto Order columns.
    Raises ValidationError naming every missing required field.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    missing = [field for field in REQUIRED_ORDER_FIELDS if is_blank(payload.get(field))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing[0])

    record = {'order_id': _text(payload['order_id'])}
    for field in SALE_FIELDS:
        value = payload.get(field)
        if field == 'additional_options':
            record[field] = _options(value)
        elif field in ('deposit_amount', 'total_usd', 'total_brl'):
            record[field] = to_float(value)
        else:
            record[field] = _text(value)
    record['status'] = _text(payload.get('status')) or 'pending'
    return record


def order_to_wire(order: Dict[str, Any], dealer_name: str) -> Dict[str, Any]:
    """Shape a stored order for the dealer's order list."""
    return {
        'orderId': order['order_id'],
        'dealer': dealer_name,
        'customer': {
            'name': order.get('customer_name') or '',
            'email': order.get('customer_email') or '',
            'phone': order.get('customer_phone') or '',
        },
        'model': order.get('boat_model') or '',
        'engine': order.get('engine_package') or '',
        'hull_color': order.get('hull_color') or '',
        'upholstery_package': order.get('upholstery_package') or '',
        'options': order.get('additional_options') or [],
        'date': _display_date(order.get('created_at')),
        'status': order.get('status') or 'pending',
        'totalUsd': order.get('total_usd') or 0,
        'totalBrl': order.get('total_brl') or 0,
        'customerAddress': order.get('customer_address') or '',
        'customerCity': order.get('customer_city') or '',
        'customerState': order.get('customer_state') or '',
        'customerZip': order.get('customer_zip') or '',
        'customerCountry': order.get('customer_country') or '',
        'paymentMethod': order.get('payment_method') or '',
        'depositAmount': order.get('deposit_amount') or 0,
        'additionalNotes': order.get('additional_notes') or '',
    }


# =============================================================================
# SERVICE REQUESTS
# =============================================================================

def service_request_payload_to_record(payload: Dict[str, Any], dealer_id: str, request_id: str) -> Dict[str, Any]:
    return {
        'request_id': request_id,
        'dealer_id': dealer_id,
        'customer_name': _text(payload.get('customer_name')),
        'customer_email': _text(payload.get('customer_email')),
        'customer_phone': _text(payload.get('customer_phone')),
        'customer_address': _text(payload.get('customer_address')),
        'boat_model': _text(payload.get('boat_model')),
        'hull_id': _text(payload.get('hull_id')),
        'purchase_date': parse_date(payload.get('purchase_date'), 'purchase_date'),
        'engine_hours': _text(payload.get('engine_hours')),
        'request_type': _text(payload.get('request_type')),
        'issues': _options(payload.get('issues')),
        'status': (_text(payload.get('status')) or 'open').lower(),
    }


def service_request_to_wire(request: Dict[str, Any], dealer_name: str) -> Dict[str, Any]:
    return {
        'id': request['request_id'],
        'customer': request.get('customer_name') or '',
        'model': request.get('boat_model') or '',
        'type': request.get('request_type') or '',
        'date': _display_date(request.get('created_at')),
        'status': request.get('status') or 'open',
        'dealer': dealer_name,
        'issues': request.get('issues') or [],
        'customerEmail': request.get('customer_email') or '',
        'customerPhone': request.get('customer_phone') or '',
        'customerAddress': request.get('customer_address') or '',
        'hullId': request.get('hull_id') or '',
        'purchaseDate': request.get('purchase_date'),
        'engineHours': request.get('engine_hours') or '',
    }
