"""
Tests for service requests and their message threads
"""
import pytest
from unittest.mock import patch


def _request_payload(**overrides):
    payload = {
        'customer_name': 'Carlos Lima',
        'customer_email': 'carlos@example.com',
        'boat_model': 'Drakkar 180',
        'hull_id': 'DRK18-0042',
        'purchase_date': '2023-11-02',
        'engine_hours': '120',
        'request_type': 'Warranty',
        'issues': [{'text': 'Bilge pump not starting'}],
        'status': 'Open',
    }
    payload.update(overrides)
    return payload


def _save_request(client, **overrides):
    response = client.post('/api/save-service-request', json=_request_payload(**overrides))
    assert response.status_code == 200, response.get_json()
    return response.get_json()['serviceRequest']


@pytest.mark.integration
class TestServiceRequests:
    """Tests for creating and listing service requests"""

    def test_save_by_dealer_id(self, client, dealer):
        """Test a request is stored against the dealer id"""
        saved = _save_request(client, dealer_id=dealer['id'])

        assert saved['request_id'].startswith('SR-')
        assert saved['dealer_id'] == dealer['id']
        assert saved['status'] == 'open'
        assert saved['purchase_date'] == '2023-11-02'

    def test_save_by_dealer_name(self, client, make_dealer):
        """Test the dealer name is a fallback, trimmed and case-insensitive"""
        dealer = make_dealer(name='Harbor Boats')
        saved = _save_request(client, dealerName='  harbor boats ')
        assert saved['dealer_id'] == dealer['id']

    def test_unknown_dealer(self, client):
        """Test an unresolvable dealer is 404"""
        response = client.post('/api/save-service-request', json=_request_payload(dealerName='Nobody'))
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Dealer not found'

    def test_notification_failure_ignored(self, client, dealer):
        """Test a failed notification does not fail the request"""
        with patch('portal.utils.notifications.deliver_notification', side_effect=OSError('smtp down')):
            response = client.post('/api/save-service-request', json=_request_payload(dealer_id=dealer['id']))
        assert response.status_code == 200

    def test_list_for_dealer(self, client, dealer):
        """Test the dealer list uses the screen's field names"""
        saved = _save_request(client, dealer_id=dealer['id'])

        response = client.get(f"/api/get-dealer-service-requests?dealerId={dealer['id']}")

        requests = response.get_json()['data']
        assert len(requests) == 1
        assert requests[0]['id'] == saved['request_id']
        assert requests[0]['customer'] == 'Carlos Lima'
        assert requests[0]['hullId'] == 'DRK18-0042'
        assert requests[0]['dealer'] == dealer['name']

    def test_list_unknown_dealer(self, client):
        """Test an unknown dealer gets an empty list"""
        body = client.get('/api/get-dealer-service-requests?dealerId=missing').get_json()
        assert body['data'] == []
        assert body['message'] == 'Dealer not found'

    def test_invalid_purchase_date(self, client, dealer):
        """Test a malformed purchase date is 400"""
        response = client.post('/api/save-service-request',
                               json=_request_payload(dealer_id=dealer['id'], purchase_date='yesterday'))
        assert response.status_code == 400
        assert response.get_json()['field'] == 'purchase_date'


@pytest.mark.integration
class TestServiceMessages:
    """Tests for the admin/dealer conversation"""

    def _post(self, client, request_id, sender_type='dealer', message='Any update?'):
        return client.post('/api/service-messages', json={
            'serviceRequestId': request_id,
            'senderType': sender_type,
            'senderName': 'Harbor Boats' if sender_type == 'dealer' else 'Factory',
            'message': message,
        })

    def test_thread_in_order(self, client, dealer):
        """Test messages come back oldest first"""
        request_id = _save_request(client, dealer_id=dealer['id'])['request_id']
        self._post(client, request_id, 'dealer', 'Any update?')
        self._post(client, request_id, 'admin', 'Part shipped')

        body = client.get(f'/api/service-messages?serviceRequestId={request_id}').get_json()

        assert [m['message'] for m in body['messages']] == ['Any update?', 'Part shipped']
        assert body['data'] == body['messages']

    def test_requires_service_request_id(self, client):
        """Test listing needs a service request id"""
        response = client.get('/api/service-messages')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Service request ID is required'

    def test_invalid_sender_type(self, client):
        """Test only admin and dealer may post"""
        response = self._post(client, 'SR-1', sender_type='customer')
        assert response.status_code == 400

    def test_message_too_long(self, client):
        """Test messages are capped at 2000 characters"""
        response = self._post(client, 'SR-1', message='x' * 2001)
        assert response.status_code == 400
        assert response.get_json()['field'] == 'message'

    def test_non_text_message(self, client):
        """Test a number sent as the message is a validation error"""
        response = self._post(client, 'SR-1', message=42)
        assert response.status_code == 400
        assert response.get_json()['field'] == 'message'

    def test_non_text_sender_name(self, client):
        """Test a number sent as the sender name is a validation error"""
        response = client.post('/api/service-messages', json={
            'serviceRequestId': 'SR-1', 'senderType': 'dealer', 'senderName': 7, 'message': 'Hello',
        })
        assert response.status_code == 400

    def test_dealer_cannot_delete(self, client):
        """Test dealers are refused with 403"""
        message_id = self._post(client, 'SR-1').get_json()['data']['id']
        response = client.delete(f'/api/service-messages?messageId={message_id}&senderType=dealer')
        assert response.status_code == 403

    def test_admin_deletes(self, client):
        """Test the admin can delete a message"""
        message_id = self._post(client, 'SR-1').get_json()['data']['id']

        response = client.delete(f'/api/service-messages?messageId={message_id}&senderType=admin')

        assert response.status_code == 200
        assert response.get_json()['message'] == 'Message deleted successfully'
        assert client.get('/api/service-messages?serviceRequestId=SR-1').get_json()['messages'] == []

    def test_delete_missing_message(self, client):
        """Test deleting a missing message is 404"""
        response = client.delete('/api/service-messages?messageId=999&senderType=admin')
        assert response.status_code == 404
