"""
Sales Repository - quotes and orders.

Quotes are created by dealers and only ever change status; orders are
created directly or by accepting a quote.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from database.models import Order, Quote
from services.errors import NotFoundError
from services.identifiers import generate_order_id
from services.quote_mapper import quote_to_order_record

logger = logging.getLogger(__name__)

QUOTE_ACCEPTED = 'accepted'


class SalesRepository:
    """Repository for quote and order database operations."""

    def __init__(self, session: Session):
        self.session = session

    # =========================================================================
    # QUOTES
    # =========================================================================

    def create_quote(self, record: Dict) -> Dict:
        quote = Quote(**record)
        self.session.add(quote)
        self.session.flush()
        logger.info(f"Created quote: {quote.quote_id} for dealer {quote.dealer_id}")
        return quote.to_dict()

    def get_quote(self, quote_id: str) -> Optional[Quote]:
        return self.session.query(Quote).filter(Quote.quote_id == quote_id).first()

    def list_quotes(self, dealer_id: Optional[str] = None) -> List[Dict]:
        """Quotes newest first, optionally for a single dealer."""
        query = self.session.query(Quote)
        if dealer_id:
            query = query.filter(Quote.dealer_id == dealer_id)
        quotes = query.order_by(Quote.created_at.desc(), Quote.id.desc()).all()
        return [q.to_dict() for q in quotes]

    def accept_quote(self, quote_id: str) -> Dict:
        """
        Convert a quote into a new pending order and mark the quote accepted.
        Both writes land in the caller's transaction.
        """
        quote = self.get_quote(quote_id)
        if quote is None:
            raise NotFoundError("Quote not found")

        order = self.create_order(quote_to_order_record(quote.to_dict(), generate_order_id()))

        quote.status = QUOTE_ACCEPTED
        quote.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Quote {quote_id} accepted as order {order['order_id']}")
        return order

    # =========================================================================
    # ORDERS
    # =========================================================================

    def create_order(self, record: Dict) -> Dict:
        order = Order(**record)
        self.session.add(order)
        self.session.flush()
        logger.info(f"Created order: {order.order_id} for dealer {order.dealer_id}")
        return order.to_dict()

    def list_orders(self, dealer_id: Optional[str] = None) -> List[Dict]:
        """Orders newest first, optionally for a single dealer."""
        query = self.session.query(Order)
        if dealer_id:
            query = query.filter(Order.dealer_id == dealer_id)
        orders = query.order_by(Order.created_at.desc(), Order.id.desc()).all()
        return [o.to_dict() for o in orders]

    def save_order_statuses(self, orders: List[Dict]) -> int:
        """Admin bulk edit: only the status of existing orders may change."""
        updated = 0
        for item in orders or []:
            order = self.session.query(Order).filter(Order.order_id == item.get('order_id')).first()
            if order is None or not item.get('status'):
                continue
            order.status = item['status']
            order.updated_at = datetime.utcnow()
            updated += 1
        self.session.flush()
        logger.info(f"Updated status for {updated} orders")
        return updated

    def delete_order(self, order_id: str) -> bool:
        order = self.session.query(Order).filter(Order.order_id == order_id).first()
        if not order:
            return False
        self.session.delete(order)
        self.session.flush()
        logger.info(f"Deleted order: {order_id}")
        return True
