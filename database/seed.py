"""
Database seeding for the Boat Dealer Portal.
Creates the admin settings, a sample catalog and a demo dealer when missing.
Safe to run repeatedly.
"""

import logging
import os

from database.connection import get_db_session
from database.models import (
    AdditionalOption, AdminSetting, BoatModel, Dealer, EnginePackage,
    HullColor, UpholsteryPackage
)
from services.passwords import hash_password
from services.settings_repository import ADMIN_PASSWORD_KEY, NOTIFICATION_EMAIL_KEY

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = "drakkar"
DEFAULT_NOTIFICATION_EMAIL = "orders@drakkarboats.com"

DEMO_DEALER = {
    'name': 'Demo Marine',
    'email': 'demo@dealer.com',
    'password': 'demo123',
    'country': 'All',
    'city': 'Miami',
    'state': 'FL',
}

SAMPLE_CATALOG = {
    BoatModel: [
        {'name': 'Drakkar 180', 'name_pt': 'Drakkar 180', 'usd': 45000, 'brl': 225000},
        {'name': 'Drakkar 240', 'name_pt': 'Drakkar 240', 'usd': 78000, 'brl': 390000},
    ],
    EnginePackage: [
        {'name': 'Mercury 150HP', 'name_pt': 'Mercury 150HP', 'usd': 12000, 'brl': 60000,
         'compatible_models': ['Drakkar 180'], 'countries': ['All']},
        {'name': 'Mercury 300HP', 'name_pt': 'Mercury 300HP', 'usd': 26000, 'brl': 130000,
         'compatible_models': ['Drakkar 240'], 'countries': ['USA', 'Australia']},
    ],
    HullColor: [
        {'name': 'Arctic White', 'name_pt': 'Branco Ártico', 'usd': 0, 'brl': 0,
         'compatible_models': ['Drakkar 180', 'Drakkar 240']},
        {'name': 'Navy Blue', 'name_pt': 'Azul Marinho', 'usd': 1500, 'brl': 7500,
         'compatible_models': ['Drakkar 240']},
    ],
    UpholsteryPackage: [
        {'name': 'Standard', 'name_pt': 'Padrão', 'usd': 0, 'brl': 0,
         'compatible_models': ['Drakkar 180', 'Drakkar 240']},
    ],
    AdditionalOption: [
        {'name': 'Bimini Top', 'name_pt': 'Capota Bimini', 'usd': 1800, 'brl': 9000,
         'category': 'Comfort', 'compatible_models': ['Drakkar 180', 'Drakkar 240'], 'countries': ['All']},
    ],
}


def seed_admin_settings(session, admin_password=None):
    """Create the admin password and notification address if absent."""
    defaults = {
        ADMIN_PASSWORD_KEY: hash_password(admin_password or DEFAULT_ADMIN_PASSWORD),
        NOTIFICATION_EMAIL_KEY: DEFAULT_NOTIFICATION_EMAIL,
    }
    created = 0
    for key, value in defaults.items():
        if session.get(AdminSetting, key) is None:
            session.add(AdminSetting(setting_key=key, setting_value=value))
            created += 1
    session.flush()
    logger.info(f"Admin settings seeded ({created} created)")
    return created


def seed_catalog(session):
    """Insert the sample catalog into any catalog table that is still empty."""
    created = 0
    for model, items in SAMPLE_CATALOG.items():
        if session.query(model).first() is not None:
            logger.info(f"{model.__tablename__} already has rows, skipping")
            continue
        for position, item in enumerate(items):
            session.add(model(display_order=position, **item))
            created += 1
    session.flush()
    logger.info(f"Sample catalog seeded ({created} items)")
    return created


def seed_demo_dealer(session):
    """Create the demo dealer account if its email is unused."""
    dealer = session.query(Dealer).filter_by(email=DEMO_DEALER['email']).first()
    if dealer:
        logger.info(f"Demo dealer already exists: {dealer.id}")
        return dealer

    values = dict(DEMO_DEALER)
    values['password'] = hash_password(values['password'])
    dealer = Dealer(**values)
    session.add(dealer)
    session.flush()
    logger.info(f"Created demo dealer: {dealer.id}")
    return dealer


def seed_database(admin_password=None):
    """
    Seed the database with default data where missing.
    """
    try:
        with get_db_session() as session:
            seed_admin_settings(session, admin_password)
            seed_catalog(session)
            seed_demo_dealer(session)
        logger.info("Database seeding completed successfully")
        return True
    except Exception as e:
        logger.error(f"Database seeding failed: {e}")
        raise


if __name__ == '__main__':
    from config import get_config
    from database.connection import configure_database, init_db

    logging.basicConfig(level=logging.INFO)
    configure_database(get_config().DATABASE_URL)
    init_db()
    seed_database(os.environ.get('DEFAULT_ADMIN_PASSWORD'))
