"""
SQLAlchemy models for the Boat Dealer Portal.
Defines dealers, sales records, service tickets, catalogs and marketing content.
"""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Text, Integer, Float, DateTime, Date, JSON,
    Index, UniqueConstraint
)
from sqlalchemy.dialects.postgresql import JSONB
from database.connection import Base

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), 'postgresql')


def generate_uuid():
    """Generate a new UUID."""
    return str(uuid.uuid4())


def _iso(value):
    return value.isoformat() if value else None


# =============================================================================
# DEALERS
# =============================================================================

class Dealer(Base):
    """A boat sales outlet; the tenant every quote, order and ticket belongs to."""
    __tablename__ = 'dealers'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    phone = Column(String(50), default='')
    address = Column(String(255), default='')
    city = Column(String(100), default='')
    state = Column(String(100), default='')
    zip_code = Column(String(20), default='')
    country = Column(String(100), default='All')
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('ix_dealers_email', 'email'),
    )

    def to_dict(self, include_sensitive=False):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone or '',
            'address': self.address or '',
            'city': self.city or '',
            'state': self.state or '',
            'zip_code': self.zip_code or '',
            'country': self.country or 'All',
            'display_order': self.display_order or 0,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }
        if include_sensitive:
            data['password'] = self.password
        return data


# =============================================================================
# QUOTES & ORDERS
# =============================================================================

class SaleRecordMixin:
    """Columns shared by quotes and orders (customer, configuration, payment, totals)."""

    dealer_id = Column(String(36), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), default='')
    customer_address = Column(String(255), default='')
    customer_city = Column(String(100), default='')
    customer_state = Column(String(100), default='')
    customer_zip = Column(String(20), default='')
    customer_country = Column(String(100), default='')
    boat_model = Column(String(255), default='')
    engine_package = Column(String(255), default='')
    hull_color = Column(String(255), default='')
    upholstery_package = Column(String(255), default='')
    additional_options = Column(JSONType, default=list)
    payment_method = Column(String(100), default='')
    deposit_amount = Column(Float, default=0)
    additional_notes = Column(Text, default='')
    total_usd = Column(Float, default=0)
    total_brl = Column(Float, default=0)
    status = Column(String(50), default='pending')
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def _sale_fields(self):
        return {
            'dealer_id': self.dealer_id,
            'customer_name': self.customer_name,
            'customer_email': self.customer_email,
            'customer_phone': self.customer_phone or '',
            'customer_address': self.customer_address or '',
            'customer_city': self.customer_city or '',
            'customer_state': self.customer_state or '',
            'customer_zip': self.customer_zip or '',
            'customer_country': self.customer_country or '',
            'boat_model': self.boat_model or '',
            'engine_package': self.engine_package or '',
            'hull_color': self.hull_color or '',
            'upholstery_package': self.upholstery_package or '',
            'additional_options': self.additional_options or [],
            'payment_method': self.payment_method or '',
            'deposit_amount': self.deposit_amount or 0,
            'additional_notes': self.additional_notes or '',
            'total_usd': self.total_usd or 0,
            'total_brl': self.total_brl or 0,
            'status': self.status,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class Quote(SaleRecordMixin, Base):
    """A priced configuration awaiting the customer's decision."""
    __tablename__ = 'quotes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    quote_id = Column(String(50), unique=True, nullable=False)
    valid_until = Column(Date, nullable=True)

    def to_dict(self):
        data = {'id': self.id, 'quote_id': self.quote_id}
        data.update(self._sale_fields())
        data['valid_until'] = _iso(self.valid_until)
        return data


class Order(SaleRecordMixin, Base):
    """A confirmed purchase. Orders converted from quotes keep no link back."""
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(50), unique=True, nullable=False)

    def to_dict(self):
        data = {'id': self.id, 'order_id': self.order_id}
        data.update(self._sale_fields())
        return data


# =============================================================================
# SERVICE REQUESTS
# =============================================================================

class ServiceRequest(Base):
    """Post-sale support or warranty ticket for a specific boat."""
    __tablename__ = 'service_requests'

    id = Column(Integer, primary_key=True, autoincrement=True)
    request_id = Column(String(50), unique=True, nullable=False)
    dealer_id = Column(String(36), nullable=False, index=True)
    customer_name = Column(String(255), default='')
    customer_email = Column(String(255), default='')
    customer_phone = Column(String(50), default='')
    customer_address = Column(String(255), default='')
    boat_model = Column(String(255), default='')
    hull_id = Column(String(100), default='')
    purchase_date = Column(Date, nullable=True)
    engine_hours = Column(String(50), default='')
    request_type = Column(String(100), default='')
    issues = Column(JSONType, default=list)
    status = Column(String(50), default='open')
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'request_id': self.request_id,
            'dealer_id': self.dealer_id,
            'customer_name': self.customer_name or '',
            'customer_email': self.customer_email or '',
            'customer_phone': self.customer_phone or '',
            'customer_address': self.customer_address or '',
            'boat_model': self.boat_model or '',
            'hull_id': self.hull_id or '',
            'purchase_date': _iso(self.purchase_date),
            'engine_hours': self.engine_hours or '',
            'request_type': self.request_type or '',
            'issues': self.issues or [],
            'status': self.status,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class ServiceMessage(Base):
    """A message in the admin/dealer conversation attached to a service request."""
    __tablename__ = 'service_messages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_request_id = Column(String(50), nullable=False, index=True)
    sender_type = Column(String(20), nullable=False)
    sender_name = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'service_request_id': self.service_request_id,
            'sender_type': self.sender_type,
            'sender_name': self.sender_name,
            'message': self.message,
            'created_at': _iso(self.created_at)
        }


# =============================================================================
# CATALOG
# =============================================================================

class CatalogItemMixin:
    """Bilingual name, two-currency price and display position."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    name_pt = Column(String(255), default='')
    usd = Column(Float, default=0)
    brl = Column(Float, default=0)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Extra columns per table, serialized by to_dict()
    extra_fields = ()

    def to_dict(self):
        data = {
            'id': self.id,
            'name': self.name,
            'name_pt': self.name_pt or '',
            'usd': self.usd or 0,
            'brl': self.brl or 0,
            'display_order': self.display_order or 0,
        }
        for field in self.extra_fields:
            value = getattr(self, field)
            if field in ('compatible_models', 'countries'):
                value = value or []
            data[field] = value
        data['created_at'] = _iso(self.created_at)
        data['updated_at'] = _iso(self.updated_at)
        return data


class BoatModel(CatalogItemMixin, Base):
    __tablename__ = 'boat_models'


class EnginePackage(CatalogItemMixin, Base):
    __tablename__ = 'engine_packages'

    compatible_models = Column(JSONType, default=list)
    countries = Column(JSONType, default=lambda: ['All'])
    extra_fields = ('compatible_models', 'countries')


class HullColor(CatalogItemMixin, Base):
    __tablename__ = 'hull_colors'

    compatible_models = Column(JSONType, default=list)
    extra_fields = ('compatible_models',)


class UpholsteryPackage(CatalogItemMixin, Base):
    __tablename__ = 'upholstery_packages'

    compatible_models = Column(JSONType, default=list)
    extra_fields = ('compatible_models',)


class AdditionalOption(CatalogItemMixin, Base):
    __tablename__ = 'additional_options'

    category = Column(String(100), default='')
    compatible_models = Column(JSONType, default=list)
    countries = Column(JSONType, default=lambda: ['All'])
    extra_fields = ('category', 'compatible_models', 'countries')


# =============================================================================
# DEALER TOOLS (pricing, inventory, sales)
# =============================================================================

class DealerPricing(Base):
    """A dealer's own sale price and margin for one catalog item."""
    __tablename__ = 'dealer_pricing'

    id = Column(Integer, primary_key=True, autoincrement=True)
    dealer_id = Column(String(36), nullable=False)
    item_type = Column(String(50), nullable=False)
    item_id = Column(String(50), nullable=False)
    item_name = Column(String(255), nullable=False)
    sale_price_usd = Column(Float, default=0)
    sale_price_brl = Column(Float, default=0)
    margin_percentage = Column(Float, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('dealer_id', 'item_type', 'item_id', name='uq_dealer_pricing_item'),
        Index('ix_dealer_pricing_dealer', 'dealer_id'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'dealer_id': self.dealer_id,
            'item_type': self.item_type,
            'item_id': self.item_id,
            'item_name': self.item_name,
            'sale_price_usd': self.sale_price_usd or 0,
            'sale_price_brl': self.sale_price_brl or 0,
            'margin_percentage': self.margin_percentage or 0,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class DealerInventory(Base):
    """Boats a dealer has in stock."""
    __tablename__ = 'dealer_inventory'

    id = Column(Integer, primary_key=True, autoincrement=True)
    dealer_id = Column(String(36), default='')
    dealer_name = Column(String(255), nullable=False)
    boat_model = Column(String(255), nullable=False)
    boat_color = Column(String(255), nullable=False)
    engine_package = Column(String(255), nullable=False)
    cost_price = Column(Float, default=0)
    sale_price = Column(Float, default=0)
    status = Column(String(50), default='available')
    date_added = Column(Date, nullable=True)
    notes = Column(Text, default='')
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'dealer_id': self.dealer_id or '',
            'dealer_name': self.dealer_name,
            'boat_model': self.boat_model,
            'boat_color': self.boat_color,
            'engine_package': self.engine_package,
            'cost_price': self.cost_price or 0,
            'sale_price': self.sale_price or 0,
            'status': self.status,
            'date_added': _iso(self.date_added),
            'notes': self.notes or '',
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class BoatSale(Base):
    """Dealer-level MSRP for a boat model in four currencies."""
    __tablename__ = 'boat_sales'

    id = Column(Integer, primary_key=True, autoincrement=True)
    dealer_name = Column(String(255), nullable=False)
    boat_model = Column(String(255), nullable=False)
    sale_price_usd = Column(Float, default=0)
    sale_price_eur = Column(Float, default=0)
    sale_price_brl = Column(Float, default=0)
    sale_price_gbp = Column(Float, default=0)
    currency = Column(String(10), default='USD')
    margin_percentage = Column(Float, default=0)
    notes = Column(Text, default='')
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('dealer_name', 'boat_model', name='uq_boat_sales_dealer_model'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'dealer_name': self.dealer_name,
            'boat_model': self.boat_model,
            'sale_price_usd': self.sale_price_usd or 0,
            'sale_price_eur': self.sale_price_eur or 0,
            'sale_price_brl': self.sale_price_brl or 0,
            'sale_price_gbp': self.sale_price_gbp or 0,
            'currency': self.currency or 'USD',
            'margin_percentage': self.margin_percentage or 0,
            'notes': self.notes or '',
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


# =============================================================================
# FACTORY & MARKETING
# =============================================================================

class FactoryProduction(Base):
    """A boat on the factory line, shown to dealers as available stock-to-be."""
    __tablename__ = 'factory_production'

    id = Column(Integer, primary_key=True, autoincrement=True)
    boat_model = Column(String(255), default='')
    engine_package = Column(String(255), default='')
    hull_color = Column(String(255), default='')
    upholstery_package = Column(String(255), default='')
    additional_options = Column(JSONType, default=list)
    total_value_usd = Column(Float, default=0)
    total_value_brl = Column(Float, default=0)
    status = Column(String(50), default='planning')
    expected_completion_date = Column(Date, nullable=True)
    notes = Column(Text, default='')
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'boat_model': self.boat_model or '',
            'engine_package': self.engine_package or '',
            'hull_color': self.hull_color or '',
            'upholstery_package': self.upholstery_package or '',
            'additional_options': self.additional_options or [],
            'total_value_usd': self.total_value_usd or 0,
            'total_value_brl': self.total_value_brl or 0,
            'status': self.status,
            'expected_completion_date': _iso(self.expected_completion_date),
            'notes': self.notes or '',
            'display_order': self.display_order or 0,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class MarketingContent(Base):
    __tablename__ = 'marketing_content'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title_en = Column(String(255), default='')
    title_pt = Column(String(255), default='')
    subtitle_en = Column(String(255), default='')
    subtitle_pt = Column(String(255), default='')
    image_url = Column(Text, nullable=False)
    boat_model = Column(String(255), default='All Models')
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title_en': self.title_en or '',
            'title_pt': self.title_pt or '',
            'subtitle_en': self.subtitle_en or '',
            'subtitle_pt': self.subtitle_pt or '',
            'image_url': self.image_url,
            'boat_model': self.boat_model or 'All Models',
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class MarketingDocumentMixin:
    """Downloadable document (manual or warranty) with a cover image."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    name_en = Column(String(255), nullable=False)
    name_pt = Column(String(255), nullable=False)
    url = Column(Text, nullable=False)
    image_url = Column(Text, default='')
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name_en': self.name_en,
            'name_pt': self.name_pt,
            'url': self.url,
            'image_url': self.image_url or '',
            'display_order': self.display_order or 0,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at)
        }


class MarketingManual(MarketingDocumentMixin, Base):
    __tablename__ = 'marketing_manuals'


class MarketingWarranty(MarketingDocumentMixin, Base):
    __tablename__ = 'marketing_warranties'


# =============================================================================
# ADMIN SETTINGS
# =============================================================================

class AdminSetting(Base):
    """Key/value settings: admin_password, notification_email."""
    __tablename__ = 'admin_settings'

    setting_key = Column(String(100), primary_key=True)
    setting_value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
