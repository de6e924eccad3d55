"""
Content Repository - factory production line and marketing material
(banner content, owner manuals, warranty documents).
"""

import logging
from datetime import datetime
from typing import Dict, List, Union

from sqlalchemy.orm import Session

from database.models import FactoryProduction, MarketingContent, MarketingManual, MarketingWarranty
from validators import (
    ValidationError, is_blank, parse_date, sanitize_string, to_float, validate_required_fields
)

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = {
    'manuals': MarketingManual,
    'warranties': MarketingWarranty,
}

DEFAULT_BOAT_MODEL = 'All Models'


def _int_id(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid id: {value}", 'id')


class ContentRepository:
    """Repository for factory production and marketing tables."""

    def __init__(self, session: Session):
        self.session = session

    def _delete(self, model, item_id) -> bool:
        if is_blank(item_id):
            raise ValidationError("ID is required", 'id')
        row = self.session.get(model, _int_id(item_id))
        if not row:
            return False
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Deleted {model.__tablename__} row: {item_id}")
        return True

    # =========================================================================
    # FACTORY PRODUCTION
    # =========================================================================

    def list_factory_production(self) -> List[Dict]:
        rows = self.session.query(FactoryProduction).order_by(
            FactoryProduction.display_order, FactoryProduction.id
        ).all()
        return [r.to_dict() for r in rows]

    def save_factory_production(self, payload: Union[Dict, List[Dict]]) -> List[Dict]:
        """Upsert one item or a list of items; rows with an id are updated."""
        items = payload if isinstance(payload, list) else [payload]
        saved = []
        for item in items:
            if not isinstance(item, dict):
                raise ValidationError("Factory production items must be objects")

            options = item.get('additional_options')
            values = {
                'boat_model': sanitize_string(item.get('boat_model'), 255),
                'engine_package': sanitize_string(item.get('engine_package'), 255),
                'hull_color': sanitize_string(item.get('hull_color'), 255),
                'upholstery_package': sanitize_string(item.get('upholstery_package'), 255),
                'additional_options': options if isinstance(options, list) else [],
                'total_value_usd': to_float(item.get('total_value_usd')),
                'total_value_brl': to_float(item.get('total_value_brl')),
                'status': sanitize_string(item.get('status'), 50) or 'planning',
                # Blank dates arrive as "" from the admin form
                'expected_completion_date': parse_date(item.get('expected_completion_date'), 'expected_completion_date'),
                'notes': sanitize_string(item.get('notes'), 5000),
                'display_order': int(to_float(item.get('display_order'))),
            }

            row = self.session.get(FactoryProduction, _int_id(item['id'])) if item.get('id') else None
            if row is None:
                row = FactoryProduction(**values)
                self.session.add(row)
            else:
                for key, value in values.items():
                    setattr(row, key, value)
                row.updated_at = datetime.utcnow()
            self.session.flush()
            saved.append(row.to_dict())

        logger.info(f"Saved {len(saved)} factory production items")
        return saved

    def delete_factory_production(self, item_id) -> bool:
        return self._delete(FactoryProduction, item_id)

    def remove_factory_production_if_present(self, item_id) -> bool:
        """Drop a line item once it has been sold as an order."""
        row = self.session.get(FactoryProduction, _int_id(item_id))
        if not row:
            logger.warning(f"Factory production item {item_id} not found for removal")
            return False
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Removed factory production item {item_id} after sale")
        return True

    # =========================================================================
    # MARKETING CONTENT
    # =========================================================================

    def list_marketing_content(self) -> List[Dict]:
        rows = self.session.query(MarketingContent).order_by(
            MarketingContent.created_at.desc(), MarketingContent.id.desc()
        ).all()
        return [r.to_dict() for r in rows]

    def save_marketing_content(self, item: Dict) -> Dict:
        """
        Insert or update (when id is given) a marketing banner. At least one
        title and an image URL are required; the missing title borrows the other.
        """
        title_en = sanitize_string(item.get('title_en'), 255)
        title_pt = sanitize_string(item.get('title_pt'), 255)
        image_url = sanitize_string(item.get('image_url'), 2048)

        if not title_en and not title_pt:
            raise ValidationError("At least one title (English or Portuguese) is required", 'title_en')
        if not image_url:
            raise ValidationError("Image URL is required", 'image_url')

        values = {
            'title_en': title_en or title_pt or 'Untitled',
            'title_pt': title_pt or title_en or 'Sem título',
            'subtitle_en': sanitize_string(item.get('subtitle_en'), 255),
            'subtitle_pt': sanitize_string(item.get('subtitle_pt'), 255),
            'image_url': image_url,
            'boat_model': sanitize_string(item.get('boat_model'), 255) or DEFAULT_BOAT_MODEL,
        }

        row = self.session.get(MarketingContent, _int_id(item['id'])) if item.get('id') else None
        if row is None:
            row = MarketingContent(**values)
            self.session.add(row)
        else:
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Saved marketing content: {row.id}")
        return row.to_dict()

    def delete_marketing_content(self, item_id) -> bool:
        return self._delete(MarketingContent, item_id)

    # =========================================================================
    # MANUALS & WARRANTIES
    # =========================================================================

    def list_documents(self, kind: str) -> List[Dict]:
        model = DOCUMENT_MODELS[kind]
        rows = self.session.query(model).order_by(model.display_order, model.id).all()
        return [r.to_dict() for r in rows]

    def save_document(self, kind: str, item: Dict) -> Dict:
        model = DOCUMENT_MODELS[kind]
        is_valid, error = validate_required_fields(item, ['name_en', 'name_pt', 'url'])
        if not is_valid:
            raise ValidationError(error)

        values = {
            'name_en': sanitize_string(item['name_en'], 255),
            'name_pt': sanitize_string(item['name_pt'], 255),
            'url': sanitize_string(item['url'], 2048),
            'image_url': sanitize_string(item.get('image_url'), 2048),
            'display_order': int(to_float(item.get('display_order'))),
        }

        row = self.session.get(model, _int_id(item['id'])) if item.get('id') else None
        if row is None:
            row = model(**values)
            self.session.add(row)
        else:
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Saved marketing {kind} item: {row.id}")
        return row.to_dict()

    def delete_document(self, kind: str, item_id) -> bool:
        return self._delete(DOCUMENT_MODELS[kind], item_id)
