"""
Image helpers for uploads: confirm the bytes really decode as an image.
"""

import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Pillow format names accepted for upload
ALLOWED_IMAGE_FORMATS = {'JPEG', 'PNG', 'GIF', 'WEBP'}


def inspect_image(stream) -> Tuple[bool, Optional[str], Optional[dict]]:
    """
    Open the stream with Pillow and verify it without decoding every pixel.

    The stream is rewound afterwards so it can be forwarded as-is.

    Returns:
        Tuple of (is_valid, error_message, info) where info carries
        format, width and height.
    """
    try:
        stream.seek(0)
        with Image.open(stream) as img:
            image_format = img.format
            width, height = img.size
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning(f"Rejected upload that is not a readable image: {e}")
        return False, "File is not a valid image", None
    finally:
        stream.seek(0)

    if image_format not in ALLOWED_IMAGE_FORMATS:
        return False, f"Unsupported image format: {image_format}", None

    return True, None, {'format': image_format, 'width': width, 'height': height}
