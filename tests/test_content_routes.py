"""
Tests for factory production and marketing content endpoints
"""
import pytest


@pytest.mark.integration
class TestFactoryProduction:
    """Tests for /api/factory-production"""

    def test_save_single_item(self, client):
        """Test one item is stored with defaults and a blank date as null"""
        response = client.post('/api/factory-production', json={
            'boat_model': 'Drakkar 240',
            'total_value_usd': '98000',
            'expected_completion_date': '',
        })

        assert response.status_code == 200
        item = response.get_json()['data'][0]
        assert item['status'] == 'planning'
        assert item['total_value_usd'] == 98000
        assert item['expected_completion_date'] is None

    def test_save_list_and_update(self, client):
        """Test a list is upserted and ids update in place"""
        saved = client.post('/api/factory-production', json=[
            {'boat_model': 'Drakkar 180'},
            {'boat_model': 'Drakkar 240', 'expected_completion_date': '2024-09-01'},
        ]).get_json()['data']

        client.post('/api/factory-production', json=dict(saved[0], status='in_production'))

        items = client.get('/api/factory-production').get_json()['data']
        assert len(items) == 2
        assert next(i for i in items if i['id'] == saved[0]['id'])['status'] == 'in_production'

    def test_delete(self, client):
        """Test an item is deleted by id"""
        item_id = client.post('/api/factory-production', json={'boat_model': 'Drakkar 180'}).get_json()['data'][0]['id']

        assert client.delete(f'/api/factory-production?id={item_id}').status_code == 200
        assert client.get('/api/factory-production').get_json()['data'] == []

    def test_delete_requires_id(self, client):
        """Test the id query parameter is required"""
        response = client.delete('/api/factory-production')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'ID is required'

    def test_delete_missing(self, client):
        """Test deleting a missing item is 404"""
        assert client.delete('/api/factory-production?id=404').status_code == 404


@pytest.mark.integration
class TestMarketingContent:
    """Tests for /api/marketing-content"""

    def test_missing_title_borrows_other_language(self, client):
        """Test one title is enough and fills the other"""
        response = client.post('/api/marketing-content', json={
            'title_en': 'Spring Show', 'image_url': 'https://ucarecdn.com/abc/'
        })

        assert response.status_code == 200
        item = response.get_json()['data']
        assert item['title_pt'] == 'Spring Show'
        assert item['boat_model'] == 'All Models'

    def test_requires_title(self, client):
        """Test at least one title is required"""
        response = client.post('/api/marketing-content', json={'image_url': 'https://ucarecdn.com/abc/'})
        assert response.status_code == 400

    def test_requires_image(self, client):
        """Test an image URL is required"""
        response = client.post('/api/marketing-content', json={'title_en': 'Spring Show'})
        assert response.status_code == 400
        assert response.get_json()['field'] == 'image_url'

    def test_list_and_delete(self, client):
        """Test content is listed and can be deleted"""
        item = client.post('/api/marketing-content', json={
            'title_pt': 'Lançamento', 'image_url': 'https://ucarecdn.com/abc/'
        }).get_json()['data']

        assert len(client.get('/api/marketing-content').get_json()['data']) == 1
        assert client.delete(f"/api/marketing-content?id={item['id']}").status_code == 200
        assert client.get('/api/marketing-content').get_json()['data'] == []


@pytest.mark.integration
@pytest.mark.parametrize('path', ['/api/marketing-manuals', '/api/marketing-warranties'])
class TestMarketingDocuments:
    """Tests for manuals and warranties"""

    def test_save_and_list(self, client, path):
        """Test a document is stored and listed"""
        response = client.post(path, json={
            'name_en': 'Owner Manual', 'name_pt': 'Manual do Proprietário', 'url': 'https://cdn.example.com/m.pdf'
        })
        assert response.status_code == 200

        items = client.get(path).get_json()['data']
        assert items[0]['name_en'] == 'Owner Manual'

    def test_requires_both_names_and_url(self, client, path):
        """Test all of name_en, name_pt and url are required"""
        response = client.post(path, json={'name_en': 'Owner Manual', 'url': 'https://cdn.example.com/m.pdf'})
        assert response.status_code == 400

    def test_delete(self, client, path):
        """Test a document is deleted and a second delete is 404"""
        item = client.post(path, json={
            'name_en': 'Warranty', 'name_pt': 'Garantia', 'url': 'https://cdn.example.com/w.pdf'
        }).get_json()['data']

        assert client.delete(f"{path}?id={item['id']}").status_code == 200
        assert client.delete(f"{path}?id={item['id']}").status_code == 404

    def test_manuals_and_warranties_are_separate(self, client, path):
        """Test documents only appear under their own kind"""
        other = '/api/marketing-warranties' if path.endswith('manuals') else '/api/marketing-manuals'
        client.post(path, json={'name_en': 'Doc', 'name_pt': 'Doc', 'url': 'https://cdn.example.com/d.pdf'})
        assert client.get(other).get_json()['data'] == []
