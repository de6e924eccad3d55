"""
Tests for input validation utilities
"""
import pytest
from datetime import date
from io import BytesIO
from werkzeug.datastructures import FileStorage
from validators import (
    ValidationError,
    validate_required_fields,
    validate_email,
    validate_uuid,
    validate_number_range,
    to_float,
    parse_price,
    parse_date,
    sanitize_string,
    sanitize_filename,
    validate_file_extension,
    validate_image_upload,
    ALLOWED_IMAGE_EXTENSIONS,
    MAX_MARGIN,
)


@pytest.mark.unit
class TestRequiredFields:
    """Tests for required fields validation"""

    def test_validate_all_fields_present(self):
        """Test validation passes when all fields present"""
        data = {'name': 'Harbor Boats', 'email': 'sales@harbor.com'}
        is_valid, error = validate_required_fields(data, ['name', 'email'])
        assert is_valid is True
        assert error is None

    def test_validate_missing_field(self):
        """Test validation fails when field missing"""
        is_valid, error = validate_required_fields({'name': 'Harbor Boats'}, ['name', 'email'])
        assert is_valid is False
        assert 'email' in error

    def test_validate_whitespace_field(self):
        """Test whitespace-only strings count as missing"""
        is_valid, error = validate_required_fields({'name': '   '}, ['name'])
        assert is_valid is False


@pytest.mark.unit
class TestEmailValidation:
    """Tests for email validation"""

    def test_valid_email(self):
        """Test valid email passes"""
        is_valid, error = validate_email('dealer@example.com')
        assert is_valid is True
        assert error is None

    def test_invalid_email_no_at(self):
        """Test invalid email without @ fails"""
        is_valid, error = validate_email('dealer.example.com')
        assert is_valid is False

    def test_invalid_email_with_space(self):
        """Test email containing whitespace fails"""
        is_valid, error = validate_email('deal er@example.com')
        assert is_valid is False

    def test_email_too_long(self):
        """Test email over 254 characters fails"""
        is_valid, error = validate_email('a' * 250 + '@example.com')
        assert is_valid is False
        assert 'too long' in error

    def test_empty_email(self):
        """Test empty email fails"""
        is_valid, error = validate_email('')
        assert is_valid is False


@pytest.mark.unit
class TestUUIDValidation:
    """Tests for dealer identifier validation"""

    def test_canonical_uuid(self):
        """Test the 8-4-4-4-12 hex form passes"""
        is_valid, error = validate_uuid('3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0b')
        assert is_valid is True
        assert error is None

    def test_uppercase_uuid(self):
        """Test hex digits are matched case-insensitively"""
        is_valid, _ = validate_uuid('3F2B8C1E-9A4D-4E6F-8B2A-1C3D5E7F9A0B')
        assert is_valid is True

    @pytest.mark.parametrize('value', [
        'not-a-uuid',
        '3f2b8c1e9a4d4e6f8b2a1c3d5e7f9a0b',
        '3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0',
        '',
        None,
        12345,
    ])
    def test_invalid_uuid(self, value):
        """Test malformed identifiers are rejected"""
        is_valid, error = validate_uuid(value)
        assert is_valid is False
        assert error == 'Invalid dealer ID format'


@pytest.mark.unit
class TestNumbers:
    """Tests for number range validation and coercion"""

    def test_number_in_range(self):
        """Test number in range passes"""
        is_valid, _ = validate_number_range(5, 0, 10)
        assert is_valid is True

    def test_boolean_is_not_a_number(self):
        """Test booleans are rejected"""
        is_valid, _ = validate_number_range(True, 0, 10)
        assert is_valid is False

    def test_to_float_lenient(self):
        """Test blanks and garbage fall back to the default"""
        assert to_float('12.5') == 12.5
        assert to_float('') == 0.0
        assert to_float(None) == 0.0
        assert to_float('abc', default=1.0) == 1.0


@pytest.mark.unit
class TestParsePrice:
    """Tests for dealer price parsing"""

    def test_rounds_to_cents(self):
        """Test prices are rounded to two decimals"""
        assert parse_price('1999.999', 'sale_price_usd') == 2000.0
        assert parse_price(10.123, 'sale_price_usd') == 10.12

    def test_blank_is_zero(self):
        """Test blank values count as zero"""
        assert parse_price('', 'sale_price_usd') == 0.0
        assert parse_price(None, 'sale_price_usd') == 0.0

    def test_negative_rejected(self):
        """Test negative prices raise with the field name"""
        with pytest.raises(ValidationError) as exc_info:
            parse_price(-1, 'sale_price_usd')
        assert exc_info.value.field == 'sale_price_usd'

    def test_above_cap_rejected(self):
        """Test prices above 99,999,999.99 raise"""
        with pytest.raises(ValidationError):
            parse_price(100000000, 'sale_price_brl')

    def test_margin_cap(self):
        """Test margins above 999.99 raise"""
        assert parse_price(999.99, 'margin_percentage', MAX_MARGIN) == 999.99
        with pytest.raises(ValidationError):
            parse_price(1000, 'margin_percentage', MAX_MARGIN)

    def test_non_numeric_rejected(self):
        """Test garbage raises instead of silently becoming zero"""
        with pytest.raises(ValidationError) as exc_info:
            parse_price('ten', 'sale_price_usd')
        assert 'valid number' in exc_info.value.message


@pytest.mark.unit
class TestParseDate:
    """Tests for date parsing"""

    def test_plain_date(self):
        """Test YYYY-MM-DD parses"""
        assert parse_date('2024-03-15') == date(2024, 3, 15)

    def test_iso_timestamp(self):
        """Test a full ISO timestamp keeps only the date"""
        assert parse_date('2024-03-15T10:30:00Z') == date(2024, 3, 15)

    def test_blank_is_none(self):
        """Test blank dates from forms become None"""
        assert parse_date('') is None
        assert parse_date(None) is None

    def test_invalid_date(self):
        """Test garbage raises with the field name"""
        with pytest.raises(ValidationError) as exc_info:
            parse_date('15/03/2024', 'purchase_date')
        assert exc_info.value.field == 'purchase_date'


@pytest.mark.unit
class TestSanitization:
    """Tests for sanitization functions"""

    def test_sanitize_string_strips_null_bytes(self):
        """Test null bytes are removed and whitespace trimmed"""
        assert sanitize_string('  Hull\x00 42 ') == 'Hull 42'

    def test_sanitize_string_caps_length(self):
        """Test long values are truncated"""
        assert len(sanitize_string('x' * 100, max_length=10)) == 10

    def test_sanitize_string_none(self):
        """Test None becomes an empty string"""
        assert sanitize_string(None) == ''

    def test_sanitize_filename_traversal(self):
        """Test directory traversal is removed"""
        assert '..' not in sanitize_filename('../../etc/passwd')

    def test_sanitize_filename_empty(self):
        """Test unusable names fall back to 'file'"""
        assert sanitize_filename('../') == 'file'


@pytest.mark.unit
class TestFileExtension:
    """Tests for file extension validation"""

    def test_allowed_image(self):
        """Test allowed image extension passes"""
        is_valid, _ = validate_file_extension('boat.JPG', ALLOWED_IMAGE_EXTENSIONS)
        assert is_valid is True

    def test_disallowed_extension(self):
        """Test disallowed extension fails"""
        is_valid, error = validate_file_extension('notes.txt', ALLOWED_IMAGE_EXTENSIONS)
        assert is_valid is False
        assert 'not allowed' in error

    def test_missing_extension(self):
        """Test filename without extension fails"""
        is_valid, _ = validate_file_extension('boat', ALLOWED_IMAGE_EXTENSIONS)
        assert is_valid is False


def _file(content: bytes, filename: str, content_type: str) -> FileStorage:
    return FileStorage(stream=BytesIO(content), filename=filename, content_type=content_type)


@pytest.mark.unit
class TestImageUpload:
    """Tests for image upload validation"""

    def test_valid_image(self, png_bytes):
        """Test a small PNG passes and keeps its sanitized name"""
        is_valid, error, safe_name = validate_image_upload(_file(png_bytes, 'my boat.png', 'image/png'))
        assert is_valid is True
        assert error is None
        assert safe_name == 'my_boat.png'

    def test_no_file(self):
        """Test missing file fails"""
        is_valid, error, _ = validate_image_upload(None)
        assert is_valid is False
        assert error == 'No file provided'

    def test_text_file_rejected(self):
        """Test a .txt upload is rejected on content type"""
        is_valid, error, _ = validate_image_upload(_file(b'hello', 'notes.txt', 'text/plain'))
        assert is_valid is False
        assert 'Invalid file type' in error

    def test_wrong_extension_with_image_type(self):
        """Test an image content type cannot smuggle a .txt name"""
        is_valid, error, _ = validate_image_upload(_file(b'hello', 'notes.txt', 'image/png'))
        assert is_valid is False
        assert 'not allowed' in error

    def test_too_large(self):
        """Test files above 5MB are rejected"""
        big = b'\x00' * (6 * 1024 * 1024)
        is_valid, error, _ = validate_image_upload(_file(big, 'big.jpg', 'image/jpeg'))
        assert is_valid is False
        assert 'Maximum size is 5MB' in error

    def test_empty_file(self):
        """Test zero-byte files are rejected"""
        is_valid, error, _ = validate_image_upload(_file(b'', 'empty.png', 'image/png'))
        assert is_valid is False
        assert error == 'File is empty'

    def test_stream_rewound(self, png_bytes):
        """Test the stream is left at the start after measuring"""
        file = _file(png_bytes, 'boat.png', 'image/png')
        validate_image_upload(file)
        assert file.stream.tell() == 0
