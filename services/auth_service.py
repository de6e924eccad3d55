"""
Portal authentication.

Dealers log in with email + password against one of three language
portals; each portal only admits dealers from its countries. The admin area
is guarded by a single shared password kept in admin_settings.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from services.dealers_repository import DealersRepository
from services.errors import AccessDeniedError, AuthenticationError, NotFoundError
from services.passwords import hash_password, verify_password
from services.settings_repository import ADMIN_PASSWORD_KEY, SettingsRepository
from validators import ValidationError, is_blank

logger = logging.getLogger(__name__)

WILDCARD_COUNTRY = 'All'

PORTAL_COUNTRIES = {
    'pt': ('Brazil',),
    'en': ('USA', 'Australia'),
    'es': ('Spain',),
}


def can_access_portal(country: Optional[str], lang: str) -> bool:
    """
    Language gate: 'All' dealers pass every portal, everyone else only the
    portal whose country list contains theirs. A dealer with no country is
    refused everywhere, and unknown languages admit only 'All' dealers.
    """
    if country == WILDCARD_COUNTRY:
        return True
    return bool(country) and country in PORTAL_COUNTRIES.get(lang, ())


def authenticate_dealer(session: Session, email: str, password: str, lang: str) -> Dict:
    """
    Returns {id, name, email} for a dealer allowed into the `lang` portal.

    Raises:
        ValidationError: a field is missing
        AuthenticationError: unknown email or wrong password
        AccessDeniedError: dealer's country is not served by this portal
    """
    if is_blank(email) or is_blank(password) or is_blank(lang):
        raise ValidationError("Email, password and language are required")

    dealer = DealersRepository(session).get_dealer_by_email(email)
    if dealer is None or not verify_password(dealer.password, password):
        logger.warning(f"Failed dealer login for {email}")
        raise AuthenticationError("Invalid credentials")

    if not can_access_portal(dealer.country, lang):
        logger.warning(f"Dealer {dealer.id} ({dealer.country}) refused on '{lang}' portal")
        raise AccessDeniedError("Restricted access to this portal")

    logger.info(f"Dealer logged in: {dealer.id}")
    return {'id': dealer.id, 'name': dealer.name, 'email': dealer.email}


def change_dealer_password(session: Session, dealer_id: str, current_password: str, new_password: str) -> None:
    if is_blank(dealer_id) or is_blank(current_password) or is_blank(new_password):
        raise ValidationError("Dealer ID, current password and new password are required")
    if not isinstance(new_password, str):
        raise ValidationError("New password must be text", 'newPassword')

    repo = DealersRepository(session)
    dealer = repo.get_dealer(dealer_id)
    if dealer is None:
        raise NotFoundError("Dealer not found")

    if not verify_password(dealer.password, current_password):
        raise AuthenticationError("Current password is incorrect")

    repo.set_password(dealer, hash_password(new_password))


def _admin_password(session: Session, default_password: str) -> str:
    return SettingsRepository(session).get(ADMIN_PASSWORD_KEY) or default_password


def verify_admin_password(session: Session, password: str, default_password: str) -> None:
    if is_blank(password):
        raise ValidationError("Password is required", 'password')

    if not verify_password(_admin_password(session, default_password), password):
        logger.warning("Failed admin login")
        raise AuthenticationError("Invalid password")


def change_admin_password(session: Session, current_password: str, new_password: str, default_password: str) -> None:
    if is_blank(current_password) or is_blank(new_password):
        raise ValidationError("Current password and new password are required")
    if not isinstance(new_password, str):
        raise ValidationError("New password must be text", 'newPassword')

    if not verify_password(_admin_password(session, default_password), current_password):
        raise AuthenticationError("Current password is incorrect")

    SettingsRepository(session).set(ADMIN_PASSWORD_KEY, hash_password(new_password))
    logger.info("Admin password changed")
