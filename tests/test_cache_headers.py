"""
Tests for response headers and error envelopes shared by every endpoint
"""
import pytest
from unittest.mock import patch
from database.connection import configure_database
from security import NO_CACHE_HEADERS


def _assert_no_cache(response):
    for header, value in NO_CACHE_HEADERS.items():
        assert response.headers.get(header) == value


@pytest.mark.integration
class TestAntiCacheHeaders:
    """Every /api/ response must be uncacheable"""

    @pytest.mark.parametrize('method, path', [
        ('get', '/api/health'),
        ('get', '/api/get-dealer-config'),
        ('get', '/api/get-dealer-quotes'),
        ('get', '/api/get-admin-data'),
        ('post', '/api/accept-quote'),
        ('get', '/api/no-such-endpoint'),
    ])
    def test_api_responses(self, client, method, path):
        """Test success, validation error and 404 responses all carry the headers"""
        response = getattr(client, method)(path, json={})
        _assert_no_cache(response)

    def test_security_headers(self, client):
        """Test the baseline security headers are set"""
        response = client.get('/api/ping')
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert response.headers['X-Content-Type-Options'] == 'nosniff'


@pytest.mark.integration
class TestErrorEnvelopes:
    """Tests for Flask-level errors rendered as JSON"""

    def test_unknown_route(self, client):
        """Test unknown routes answer the JSON envelope"""
        response = client.get('/api/no-such-endpoint')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Not found'}

    def test_wrong_method(self, client):
        """Test wrong methods answer 405 in the envelope"""
        response = client.delete('/api/save-quote')
        assert response.status_code == 405
        assert response.get_json()['success'] is False

    def test_oversized_request(self, client):
        """Test bodies above MAX_CONTENT_LENGTH are refused with 413"""
        response = client.post('/api/save-quote', data=b'x' * (11 * 1024 * 1024),
                               content_type='application/json')
        assert response.status_code == 413

    def test_unexpected_error_surfaces_message(self, client, dealer):
        """Test unexpected failures answer 500 with the error text"""
        with patch('portal.api.quotes.SalesRepository.list_quotes', side_effect=RuntimeError('disk full')):
            response = client.get(f"/api/get-dealer-quotes?dealerId={dealer['id']}")

        assert response.status_code == 500
        assert response.get_json() == {'success': False, 'error': 'disk full'}

    def test_database_not_configured(self, client):
        """Test data routes answer 503 without a database"""
        configure_database(None)
        response = client.get('/api/get-admin-data')
        assert response.status_code == 503
        assert response.get_json()['error'] == 'Database not configured'
        _assert_no_cache(response)
