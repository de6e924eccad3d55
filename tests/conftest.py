"""
Pytest configuration and shared fixtures
"""
import os
import sys
import uuid
import pytest
from io import BytesIO
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def app_config():
    """Fixture providing test configuration"""
    from config import TestingConfig
    return TestingConfig


@pytest.fixture
def test_env_vars():
    """Fixture providing test environment variables"""
    original_env = os.environ.copy()

    os.environ['FLASK_ENV'] = 'testing'
    os.environ['SECRET_KEY'] = 'a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6e7f8a9b0'

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def app(app_config):
    """Flask app backed by a fresh in-memory SQLite database"""
    from app_init import create_app
    return create_app(app_config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_dealer(app):
    """Factory creating a dealer; returns its id, email and plaintext password"""
    from database.connection import get_db_session
    from services.dealers_repository import DealersRepository

    def _make_dealer(name='Harbor Boats', email=None, password='secret123', country='All'):
        email = email or f"{uuid.uuid4().hex[:8]}@dealer.com"
        with get_db_session() as session:
            repo = DealersRepository(session)
            repo.save_dealers([{
                'name': name,
                'email': email,
                'password': password,
                'country': country,
            }])
            dealer = repo.get_dealer_by_email(email)
            return {'id': dealer.id, 'name': name, 'email': email, 'password': password, 'country': country}

    return _make_dealer


@pytest.fixture
def dealer(make_dealer):
    return make_dealer()


@pytest.fixture
def quote_payload(dealer):
    """A complete save-quote payload for the default dealer"""
    return {
        'customer': {
            'name': 'Ana Souza',
            'email': 'ana@example.com',
            'phone': '+55 11 99999-0000',
            'city': 'Santos',
            'country': 'Brazil',
        },
        'model': 'Drakkar 240',
        'engine': 'Mercury 300HP',
        'hull_color': 'Navy Blue',
        'upholstery_package': 'Standard',
        'options': ['Bimini Top', 'Swim Ladder'],
        'payment_method': 'cash',
        'deposit_amount': '5000',
        'additional_notes': 'Deliver in spring',
        'totalUsd': 105500,
        'totalBrl': 527500,
        'dealerId': dealer['id'],
    }


@pytest.fixture
def png_bytes():
    """A small, real PNG image"""
    from PIL import Image

    buffer = BytesIO()
    Image.new('RGB', (4, 4), color=(30, 58, 138)).save(buffer, format='PNG')
    return buffer.getvalue()
