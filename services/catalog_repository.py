"""
Catalog Repository - engine packages, hull colors, upholstery packages,
additional options and boat models, plus display ordering for every
admin-sortable table.
"""

import logging
from datetime import datetime
from typing import Dict, List

from sqlalchemy.orm import Session

from database.models import (
    AdditionalOption, BoatModel, Dealer, EnginePackage, FactoryProduction,
    HullColor, MarketingManual, MarketingWarranty, UpholsteryPackage
)
from validators import ValidationError, is_blank, sanitize_string, to_float

logger = logging.getLogger(__name__)

CATALOG_MODELS = {
    'engine_packages': EnginePackage,
    'hull_colors': HullColor,
    'upholstery_packages': UpholsteryPackage,
    'additional_options': AdditionalOption,
    'boat_models': BoatModel,
}

# Tables whose rows the admin can drag into order
SORTABLE_MODELS = dict(CATALOG_MODELS, **{
    'dealers': Dealer,
    'factory_production': FactoryProduction,
    'marketing_manuals': MarketingManual,
    'marketing_warranties': MarketingWarranty,
})


def _catalog_model(table: str):
    model = CATALOG_MODELS.get(table)
    if model is None:
        raise ValidationError(f"Invalid catalog type: {table}", 'type')
    return model


def _int_id(value, field: str = 'id') -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value}", field)


class CatalogRepository:
    """Repository for the admin-managed product catalogs."""

    def __init__(self, session: Session):
        self.session = session

    def list_items(self, table: str) -> List[Dict]:
        """List a catalog ordered by display position."""
        model = _catalog_model(table)
        rows = self.session.query(model).order_by(model.display_order, model.id).all()
        return [row.to_dict() for row in rows]

    def list_all(self) -> Dict[str, List[Dict]]:
        return {table: self.list_items(table) for table in CATALOG_MODELS}

    def _values(self, model, item: Dict, is_new: bool) -> Dict:
        if is_blank(item.get('name')):
            raise ValidationError(f"Name is required for {model.__tablename__} items", 'name')

        values = {
            'name': sanitize_string(item.get('name'), 255),
            'name_pt': sanitize_string(item.get('name_pt'), 255),
            'usd': to_float(item.get('usd')),
            'brl': to_float(item.get('brl')),
            'display_order': int(to_float(item.get('display_order'))),
        }
        if 'compatible_models' in model.extra_fields:
            models = item.get('compatible_models')
            values['compatible_models'] = models if isinstance(models, list) else []
        if 'countries' in model.extra_fields:
            countries = item.get('countries')
            if not isinstance(countries, list):
                countries = []
            # New items with no country restriction are sold everywhere
            if is_new and not countries:
                countries = ['All']
            values['countries'] = countries
        if 'category' in model.extra_fields:
            values['category'] = sanitize_string(item.get('category'), 100)
        return values

    def save_items(self, table: str, items: List[Dict]) -> int:
        """
        Upsert catalog items: rows with an id are updated in place, rows
        without one are inserted. Returns the number of rows written.
        """
        model = _catalog_model(table)
        if not isinstance(items, list):
            raise ValidationError(f"{table} must be a list", table)

        written = 0
        for item in items:
            row = None
            if item.get('id'):
                row = self.session.get(model, _int_id(item['id']))

            if row is None:
                row = model(**self._values(model, item, is_new=True))
                self.session.add(row)
            else:
                for key, value in self._values(model, item, is_new=False).items():
                    setattr(row, key, value)
                row.updated_at = datetime.utcnow()
            written += 1

        self.session.flush()
        logger.info(f"Saved {written} {table} items")
        return written

    def delete_item(self, table: str, item_id) -> bool:
        model = _catalog_model(table)
        row = self.session.get(model, _int_id(item_id))
        if not row:
            return False
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Deleted {table} item: {item_id}")
        return True

    def update_display_order(self, table: str, items: List[Dict]) -> int:
        """Apply [{id, display_order}] to any sortable table."""
        model = SORTABLE_MODELS.get(table)
        if model is None:
            raise ValidationError(f"Invalid type: {table}", 'type')

        updated = 0
        for item in items:
            if not isinstance(item, dict) or is_blank(item.get('id')):
                raise ValidationError("Each item needs an id and display_order", 'items')
            # Dealers use UUID keys, every other sortable table uses integers
            key = str(item['id']) if model is Dealer else _int_id(item['id'])
            row = self.session.get(model, key)
            if row is None:
                continue
            row.display_order = int(to_float(item.get('display_order')))
            updated += 1

        self.session.flush()
        logger.info(f"Updated display order for {updated} {table} rows")
        return updated
