"""
Tests for image upload validation and the Uploadcare client
"""
import pytest
import requests
from io import BytesIO
from unittest.mock import Mock, patch
from portal.utils.image_utils import inspect_image
from services.image_upload import ImageUploadError, UploadcareClient
from werkzeug.datastructures import FileStorage

FILE_UUID = '0c1d2e3f-4a5b-4c6d-8e7f-9a0b1c2d3e4f'


def _ok_response():
    response = Mock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {'file': FILE_UUID}
    return response


def _upload(client, content, filename, content_type):
    return client.post(
        '/api/upload-image',
        data={'file': (BytesIO(content), filename, content_type)},
        content_type='multipart/form-data'
    )


@pytest.mark.unit
class TestInspectImage:
    """Tests for Pillow-based image inspection"""

    def test_real_png(self, png_bytes):
        """Test a real PNG is recognized with its size"""
        stream = BytesIO(png_bytes)
        is_image, error, info = inspect_image(stream)
        assert is_image is True
        assert info == {'format': 'PNG', 'width': 4, 'height': 4}
        assert stream.tell() == 0

    def test_garbage_bytes(self):
        """Test bytes that are not an image are rejected"""
        is_image, error, info = inspect_image(BytesIO(b'definitely not an image'))
        assert is_image is False
        assert error == 'File is not a valid image'
        assert info is None


@pytest.mark.integration
class TestUploadImageEndpoint:
    """Tests for /api/upload-image"""

    @patch('services.image_upload.requests.post')
    def test_rejects_large_file_before_upstream(self, mock_post, client):
        """Test a 6MB file is refused without calling Uploadcare"""
        response = _upload(client, b'\x00' * (6 * 1024 * 1024), 'big.jpg', 'image/jpeg')

        assert response.status_code == 400
        assert 'Maximum size is 5MB' in response.get_json()['error']
        mock_post.assert_not_called()

    @patch('services.image_upload.requests.post')
    def test_rejects_text_file_before_upstream(self, mock_post, client):
        """Test a .txt file is refused without calling Uploadcare"""
        response = _upload(client, b'hello', 'notes.txt', 'text/plain')

        assert response.status_code == 400
        assert response.get_json()['success'] is False
        mock_post.assert_not_called()

    @patch('services.image_upload.requests.post')
    def test_rejects_fake_image(self, mock_post, client):
        """Test bytes that only claim to be a PNG are refused"""
        response = _upload(client, b'not really a png', 'boat.png', 'image/png')

        assert response.status_code == 400
        assert response.get_json()['error'] == 'File is not a valid image'
        mock_post.assert_not_called()

    def test_missing_file(self, client):
        """Test a request without a file is 400"""
        response = client.post('/api/upload-image', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No file provided'

    @patch('services.image_upload.requests.post')
    def test_successful_upload(self, mock_post, client, png_bytes):
        """Test a valid image returns its CDN URL"""
        mock_post.return_value = _ok_response()

        response = _upload(client, png_bytes, 'my boat.png', 'image/png')

        assert response.status_code == 200
        body = response.get_json()
        assert body['success'] is True
        assert body['url'] == f'https://ucarecdn.com/{FILE_UUID}/'
        assert body['filename'] == 'my_boat.png'
        assert body['originalFilename'] == 'my boat.png'
        assert body['data']['url'] == body['url']

        _, kwargs = mock_post.call_args
        assert kwargs['data']['UPLOADCARE_PUB_KEY'] == 'test-public-key'
        assert kwargs['data']['UPLOADCARE_STORE'] == 'auto'

    @patch('services.image_upload.requests.post')
    def test_upstream_timeout(self, mock_post, client, png_bytes):
        """Test an Uploadcare timeout becomes 503"""
        mock_post.side_effect = requests.Timeout()
        response = _upload(client, png_bytes, 'boat.png', 'image/png')
        assert response.status_code == 503


def _file(png_bytes):
    return FileStorage(stream=BytesIO(png_bytes), filename='boat.png', content_type='image/png')


@pytest.mark.unit
class TestUploadcareClient:
    """Tests for upstream error mapping"""

    def _client(self, **overrides):
        settings = {
            'public_key': 'pub-key',
            'upload_url': 'https://upload.example.com/base/',
            'cdn_url': 'https://cdn.example.com/',
        }
        settings.update(overrides)
        return UploadcareClient(**settings)

    def test_not_configured(self, png_bytes):
        """Test a missing public key is a 500 configuration error"""
        with pytest.raises(ImageUploadError) as exc_info:
            self._client(public_key=None).upload(_file(png_bytes), 'boat.png')
        assert exc_info.value.status_code == 500

    @patch('services.image_upload.requests.post')
    def test_cdn_url_trailing_slash(self, mock_post, png_bytes):
        """Test the CDN base is joined without a double slash"""
        mock_post.return_value = _ok_response()
        result = self._client().upload(_file(png_bytes), 'boat.png')
        assert result['url'] == f'https://cdn.example.com/{FILE_UUID}/'

    @patch('services.image_upload.requests.post')
    def test_quota_exceeded(self, mock_post, png_bytes):
        """Test a quota refusal maps to 507"""
        mock_post.return_value = Mock(ok=False, status_code=400, text='Account quota exceeded', reason='Bad Request')
        with pytest.raises(ImageUploadError) as exc_info:
            self._client().upload(_file(png_bytes), 'boat.png')
        assert exc_info.value.status_code == 507

    @patch('services.image_upload.requests.post')
    def test_upstream_rate_limit(self, mock_post, png_bytes):
        """Test an upstream 429 is passed through"""
        mock_post.return_value = Mock(ok=False, status_code=429, text='', reason='Too Many Requests')
        with pytest.raises(ImageUploadError) as exc_info:
            self._client().upload(_file(png_bytes), 'boat.png')
        assert exc_info.value.status_code == 429

    @patch('services.image_upload.requests.post')
    def test_connection_error(self, mock_post, png_bytes):
        """Test network failures map to 503"""
        mock_post.side_effect = requests.ConnectionError('refused')
        with pytest.raises(ImageUploadError) as exc_info:
            self._client().upload(_file(png_bytes), 'boat.png')
        assert exc_info.value.status_code == 503

    @patch('services.image_upload.requests.post')
    def test_response_without_file_id(self, mock_post, png_bytes):
        """Test a malformed success response is a 500"""
        response = _ok_response()
        response.json.return_value = {}
        mock_post.return_value = response
        with pytest.raises(ImageUploadError) as exc_info:
            self._client().upload(_file(png_bytes), 'boat.png')
        assert exc_info.value.status_code == 500
