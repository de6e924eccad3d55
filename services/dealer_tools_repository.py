"""
Dealer Tools Repository - per-dealer pricing, stock inventory and MSRP sheets.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from database.models import BoatSale, DealerInventory, DealerPricing
from validators import (
    MAX_MARGIN, ValidationError, is_blank, parse_date, parse_price, sanitize_string, to_float
)

logger = logging.getLogger(__name__)

REQUIRED_INVENTORY_FIELDS = ('dealer_name', 'boat_model', 'boat_color', 'engine_package')


def _int_id(value, field: str = 'id') -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value}", field)


class DealerToolsRepository:
    """Repository for dealer pricing, inventory and boat sale records."""

    def __init__(self, session: Session):
        self.session = session

    # =========================================================================
    # DEALER PRICING
    # =========================================================================

    def list_pricing(self, dealer_id: Optional[str] = None) -> List[Dict]:
        query = self.session.query(DealerPricing)
        if dealer_id:
            query = query.filter(DealerPricing.dealer_id == dealer_id)
        rows = query.order_by(DealerPricing.item_type, DealerPricing.item_name).all()
        return [r.to_dict() for r in rows]

    def save_pricing(self, data: Dict) -> Dict:
        """
        Upsert one dealer price on (dealer_id, item_type, item_id).
        Prices are capped at 99,999,999.99 and margins at 999.99.
        """
        item_id = str(data.get('item_id') if data.get('item_id') is not None else '').strip()
        if not item_id:
            raise ValidationError("item_id is required", 'item_id')
        for field in ('dealer_id', 'item_type', 'item_name'):
            if is_blank(data.get(field)):
                raise ValidationError(f"{field} is required", field)

        dealer_id = data['dealer_id'].strip()
        item_type = data['item_type'].strip()
        values = {
            'item_name': data['item_name'].strip(),
            'sale_price_usd': parse_price(data.get('sale_price_usd'), 'sale_price_usd'),
            'sale_price_brl': parse_price(data.get('sale_price_brl'), 'sale_price_brl'),
            'margin_percentage': parse_price(data.get('margin_percentage'), 'margin_percentage', MAX_MARGIN),
        }

        row = self.session.query(DealerPricing).filter(
            DealerPricing.dealer_id == dealer_id,
            DealerPricing.item_type == item_type,
            DealerPricing.item_id == item_id
        ).first()
        if row is None:
            row = DealerPricing(dealer_id=dealer_id, item_type=item_type, item_id=item_id, **values)
            self.session.add(row)
        else:
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Saved {item_type} price {item_id} for dealer {dealer_id}")
        return row.to_dict()

    def delete_pricing(self, pricing_id, dealer_id: Optional[str] = None) -> bool:
        if is_blank(pricing_id):
            raise ValidationError("ID is required", 'id')
        query = self.session.query(DealerPricing).filter(DealerPricing.id == _int_id(pricing_id))
        if dealer_id:
            query = query.filter(DealerPricing.dealer_id == dealer_id)
        row = query.first()
        if not row:
            return False
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Deleted dealer pricing: {pricing_id}")
        return True

    # =========================================================================
    # DEALER INVENTORY
    # =========================================================================

    def list_inventory(self, dealer_id: Optional[str] = None, dealer_name: Optional[str] = None) -> List[Dict]:
        query = self.session.query(DealerInventory)
        if dealer_id:
            query = query.filter(DealerInventory.dealer_id == dealer_id)
        elif dealer_name:
            query = query.filter(DealerInventory.dealer_name == dealer_name)
        rows = query.order_by(DealerInventory.created_at.desc(), DealerInventory.id.desc()).all()
        return [r.to_dict() for r in rows]

    def _inventory_values(self, data: Dict) -> Dict:
        """Accept either snake_case or camelCase keys from the dealer screens."""
        def pick(snake, camel):
            value = data.get(snake)
            return data.get(camel) if value is None else value

        return {
            'dealer_id': sanitize_string(pick('dealer_id', 'dealerId'), 36),
            'dealer_name': sanitize_string(pick('dealer_name', 'dealerName'), 255),
            'boat_model': sanitize_string(pick('boat_model', 'boatModel'), 255),
            'boat_color': sanitize_string(pick('boat_color', 'boatColor'), 255),
            'engine_package': sanitize_string(pick('engine_package', 'enginePackage'), 255),
            'cost_price': to_float(pick('cost_price', 'costPrice')),
            'sale_price': to_float(pick('sale_price', 'salePrice')),
            'status': sanitize_string(data.get('status'), 50) or 'available',
            'date_added': parse_date(pick('date_added', 'dateAdded'), 'date_added') or date.today(),
            'notes': sanitize_string(data.get('notes'), 5000),
        }

    def add_inventory(self, data: Dict) -> Dict:
        values = self._inventory_values(data)
        missing = [f for f in REQUIRED_INVENTORY_FIELDS if not values[f]]
        if missing:
            raise ValidationError("Dealer name, boat model, boat color, and engine package are required", missing[0])

        row = DealerInventory(**values)
        self.session.add(row)
        self.session.flush()
        logger.info(f"Added inventory item {row.id} for {row.dealer_name}")
        return row.to_dict()

    def update_inventory(self, item_id, data: Dict) -> Optional[Dict]:
        if is_blank(item_id):
            raise ValidationError("ID is required for update", 'id')
        row = self.session.get(DealerInventory, _int_id(item_id))
        if row is None:
            return None

        values = self._inventory_values(data)
        for key, value in values.items():
            # Keep existing identity fields when the update omits them
            if key in REQUIRED_INVENTORY_FIELDS + ('dealer_id',) and not value:
                continue
            setattr(row, key, value)
        row.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Updated inventory item: {item_id}")
        return row.to_dict()

    def delete_inventory(self, item_id) -> bool:
        if is_blank(item_id):
            raise ValidationError("ID is required for deletion", 'id')
        row = self.session.get(DealerInventory, _int_id(item_id))
        if not row:
            return False
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Deleted inventory item: {item_id}")
        return True

    # =========================================================================
    # BOAT SALES (dealer MSRP sheet)
    # =========================================================================

    def list_boat_sales(self, dealer_name: str) -> List[Dict]:
        rows = self.session.query(BoatSale).filter(
            BoatSale.dealer_name == dealer_name
        ).order_by(BoatSale.updated_at.desc(), BoatSale.id.desc()).all()
        return [r.to_dict() for r in rows]

    def save_boat_sale(self, data: Dict) -> Dict:
        """Upsert the MSRP row for (dealerName, boatModel)."""
        dealer_name = sanitize_string(data.get('dealerName'), 255)
        boat_model = sanitize_string(data.get('boatModel'), 255)
        if not dealer_name or not boat_model:
            raise ValidationError("Dealer name and boat model are required")

        values = {
            'sale_price_usd': to_float(data.get('salePriceUsd')),
            'sale_price_eur': to_float(data.get('salePriceEur')),
            'sale_price_brl': to_float(data.get('salePriceBrl')),
            'sale_price_gbp': to_float(data.get('salePriceGbp')),
            'currency': sanitize_string(data.get('currency'), 10) or 'USD',
            'margin_percentage': to_float(data.get('marginPercentage')),
            'notes': sanitize_string(data.get('notes'), 5000),
        }

        row = self.session.query(BoatSale).filter(
            BoatSale.dealer_name == dealer_name,
            BoatSale.boat_model == boat_model
        ).first()
        if row is None:
            row = BoatSale(dealer_name=dealer_name, boat_model=boat_model, **values)
            self.session.add(row)
        else:
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Saved boat sale {boat_model} for {dealer_name}")
        return row.to_dict()

    def delete_boat_sale(self, sale_id, dealer_name: str) -> bool:
        if is_blank(sale_id) or is_blank(dealer_name):
            raise ValidationError("ID and dealer name are required")
        row = self.session.query(BoatSale).filter(
            BoatSale.id == _int_id(sale_id),
            BoatSale.dealer_name == dealer_name
        ).first()
        if not row:
            return False
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Deleted boat sale: {sale_id}")
        return True
