"""
Input Validation & Sanitization Utilities
Provides validation for API payloads, dealer identifiers, prices and image uploads
"""
import re
import os
from datetime import date, datetime
from typing import Dict, Any, List, Optional, Tuple
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename
import logging

logger = logging.getLogger(__name__)

# Image uploads
ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
ALLOWED_IMAGE_CONTENT_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/gif', 'image/webp'}
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB

# Dealer pricing bounds
MAX_PRICE = 99999999.99
MAX_MARGIN = 999.99

# Regex patterns
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
UUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE)


class ValidationError(Exception):
    """Custom exception for validation errors"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    return False


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate that all required fields are present in the data

    Args:
        data: Dictionary of input data
        required_fields: List of required field names

    Returns:
        Tuple of (is_valid, error_message)
    """
    missing_fields = [field for field in required_fields if is_blank(data.get(field))]

    if missing_fields:
        return False, f"Missing required fields: {', '.join(missing_fields)}"

    return True, None


def validate_email(email: str) -> Tuple[bool, Optional[str]]:
    """
    Validate email format

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not email or not isinstance(email, str):
        return False, "Email must be a non-empty string"

    if not EMAIL_PATTERN.match(email):
        return False, "Invalid email format"

    if len(email) > 254:  # RFC 5321
        return False, "Email address too long"

    return True, None


def validate_uuid(value: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate the canonical 8-4-4-4-12 hex UUID text form

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(value, str) or not UUID_PATTERN.match(value):
        return False, "Invalid dealer ID format"
    return True, None


def validate_number_range(value: float, min_value: Optional[float] = None, max_value: Optional[float] = None) -> Tuple[bool, Optional[str]]:
    """
    Validate number is within acceptable range

    Args:
        value: Number to validate
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False, "Value must be a number"

    if min_value is not None and value < min_value:
        return False, f"Value too small (minimum {min_value})"

    if max_value is not None and value > max_value:
        return False, f"Value too large (maximum {max_value})"

    return True, None


def to_float(value: Any, default: float = 0.0) -> float:
    """Lenient numeric coercion: blanks and garbage become the default."""
    if value is None or value == '' or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_price(value: Any, field: str, max_value: float = MAX_PRICE) -> float:
    """
    Parse a dealer price or margin, rounded to two decimals.
    Blank values count as zero; anything negative, non-numeric or above max_value raises.
    """
    if value is None or value == '':
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a valid number", field)

    is_valid, error = validate_number_range(number, 0, max_value)
    if not is_valid:
        raise ValidationError(f"{field}: {error}", field)

    return round(number, 2)


def parse_date(value: Any, field: str = 'date') -> Optional[date]:
    """
    Parse YYYY-MM-DD or a full ISO timestamp into a date; blank means None.
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"Invalid date for {field}: {text}", field)


def sanitize_string(value: Any, max_length: int = 1000) -> str:
    """
    Sanitize string input: drop null bytes, trim, cap length

    Args:
        value: String to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    if value is None:
        return ''
    if not isinstance(value, str):
        value = str(value)

    sanitized = value.replace('\x00', '').strip()

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent directory traversal attacks

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    safe_name = secure_filename(filename)

    if not safe_name:
        safe_name = 'file'

    return safe_name


def validate_file_extension(filename: str, allowed_extensions: set) -> Tuple[bool, Optional[str]]:
    """
    Validate file has an allowed extension

    Args:
        filename: Filename to check
        allowed_extensions: Set of allowed extensions (without dots)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not filename or '.' not in filename:
        return False, "File must have an extension"

    extension = filename.rsplit('.', 1)[1].lower()

    if extension not in allowed_extensions:
        return False, f"File type not allowed. Allowed types: {', '.join(sorted(allowed_extensions))}"

    return True, None


def validate_image_upload(file: Optional[FileStorage], max_size: int = MAX_IMAGE_SIZE) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Validate an uploaded image before it is forwarded anywhere

    Checks, in order: presence, filename, content type, extension, size.

    Returns:
        Tuple of (is_valid, error_message, sanitized_filename)
    """
    if file is None:
        return False, "No file provided", None

    if not file.filename or not file.filename.strip():
        return False, "Invalid filename", None

    content_type = (file.mimetype or '').lower()
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        return False, "Invalid file type. Only JPEG, PNG, GIF, and WebP images are allowed.", None

    safe_filename = sanitize_filename(file.filename)
    is_valid, error = validate_file_extension(safe_filename, ALLOWED_IMAGE_EXTENSIONS)
    if not is_valid:
        return False, error, None

    # Measure the stream without loading it
    file.stream.seek(0, os.SEEK_END)
    file_size = file.stream.tell()
    file.stream.seek(0)

    if file_size > max_size:
        max_mb = max_size / (1024 * 1024)
        return False, f"File too large. Maximum size is {max_mb:.0f}MB.", None

    if file_size == 0:
        return False, "File is empty", None

    logger.info(f"Image validation successful: {safe_filename} ({file_size} bytes)")
    return True, None, safe_filename
