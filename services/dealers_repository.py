"""
Dealers Repository - Database access layer for dealer accounts.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from database.models import Dealer
from services.passwords import hash_password
from validators import ValidationError, is_blank, sanitize_string, to_float, validate_email, validate_uuid

logger = logging.getLogger(__name__)

# Payload key -> column, for fields the admin screen may edit
FIELD_MAPPING = {
    'name': 'name',
    'phone': 'phone',
    'address': 'address',
    'city': 'city',
    'state': 'state',
    'zip_code': 'zip_code',
    'country': 'country',
}


def _normalize_email(email: Optional[str]) -> str:
    if not isinstance(email, str):
        return ''
    return email.strip().lower()


class DealersRepository:
    """Repository for dealer database operations."""

    def __init__(self, session: Session):
        self.session = session

    def list_dealers(self) -> List[Dict]:
        """List dealers in display order (passwords excluded)."""
        dealers = self.session.query(Dealer).order_by(Dealer.display_order, Dealer.name).all()
        return [d.to_dict() for d in dealers]

    def get_dealer(self, dealer_id: str) -> Optional[Dealer]:
        """Get a dealer by ID (returns model)."""
        if is_blank(dealer_id):
            return None
        return self.session.get(Dealer, str(dealer_id))

    def get_dealer_by_email(self, email: str) -> Optional[Dealer]:
        """Case-insensitive email lookup (returns model for auth)."""
        return self.session.query(Dealer).filter(
            func.lower(Dealer.email) == _normalize_email(email)
        ).first()

    def find_dealer_by_name(self, name: str) -> Optional[Dealer]:
        """Trimmed, case-insensitive name lookup."""
        if is_blank(name):
            return None
        return self.session.query(Dealer).filter(
            func.lower(func.trim(Dealer.name)) == name.strip().lower()
        ).first()

    def resolve_dealer(self, dealer_id: Optional[str] = None, dealer_name: Optional[str] = None) -> Optional[Dealer]:
        """Find a dealer by id first, then by name."""
        dealer = self.get_dealer(dealer_id) if dealer_id else None
        if dealer is None and dealer_name:
            dealer = self.find_dealer_by_name(dealer_name)
        return dealer

    def save_dealers(self, dealers: List[Dict]) -> int:
        """
        Upsert dealers keyed by lowercased email. Later entries with the same
        email win. Returns the number of dealers written.
        """
        if not isinstance(dealers, list):
            raise ValidationError("dealers must be a list", 'dealers')

        unique_by_email = {}
        for item in dealers:
            email = _normalize_email(item.get('email'))
            is_valid, error = validate_email(email)
            if not is_valid:
                raise ValidationError(f"Dealer {item.get('name') or ''}: {error}", 'email')
            unique_by_email[email] = item

        for email, item in unique_by_email.items():
            dealer = self.get_dealer_by_email(email)
            values = {column: sanitize_string(item.get(key), 255)
                      for key, column in FIELD_MAPPING.items() if key in item}
            if 'country' in values and not values['country']:
                values['country'] = 'All'
            if 'display_order' in item:
                values['display_order'] = int(to_float(item.get('display_order')))

            if dealer is None:
                if is_blank(item.get('name')) or is_blank(item.get('password')):
                    raise ValidationError(f"New dealer {email} needs a name and password")
                dealer_id = item.get('id')
                dealer = Dealer(email=email, password=hash_password(item['password']), **values)
                if dealer_id and validate_uuid(dealer_id)[0]:
                    dealer.id = dealer_id
                self.session.add(dealer)
                logger.info(f"Created dealer: {email}")
            else:
                for column, value in values.items():
                    setattr(dealer, column, value)
                if not is_blank(item.get('password')):
                    dealer.password = hash_password(item['password'])
                dealer.updated_at = datetime.utcnow()
                logger.info(f"Updated dealer: {dealer.id}")

        self.session.flush()
        return len(unique_by_email)

    def set_password(self, dealer: Dealer, password_hash: str) -> None:
        dealer.password = password_hash
        dealer.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Password changed for dealer: {dealer.id}")

    def delete_dealer(self, dealer_id: str) -> bool:
        dealer = self.get_dealer(dealer_id)
        if not dealer:
            return False
        self.session.delete(dealer)
        self.session.flush()
        logger.info(f"Deleted dealer: {dealer_id}")
        return True
