"""
Image Upload Routes Blueprint

- /api/upload-image: Validate an image and store it on Uploadcare

Every check runs before the upstream call; only a file that passes them all
is forwarded.
"""

import logging

from flask import Blueprint, current_app, request

from extensions import limiter
from portal.utils.image_utils import inspect_image
from portal.utils.responses import api_errors, error_response, success_response
from services.image_upload import UploadcareClient
from validators import MAX_IMAGE_SIZE, validate_image_upload

logger = logging.getLogger(__name__)

uploads_bp = Blueprint('uploads_bp', __name__, url_prefix='/api')


def _upload_limit():
    return current_app.config.get('UPLOAD_RATE_LIMIT', '30 per minute')


@uploads_bp.route('/upload-image', methods=['POST'])
@limiter.limit(_upload_limit)
@api_errors
def upload_image():
    file = request.files.get('file')
    max_size = current_app.config.get('MAX_IMAGE_SIZE', MAX_IMAGE_SIZE)

    is_valid, error, safe_name = validate_image_upload(file, max_size)
    if not is_valid:
        logger.info(f"Rejected upload: {error}")
        return error_response(error, 400)

    is_image, error, info = inspect_image(file.stream)
    if not is_image:
        return error_response(error, 400)

    client = UploadcareClient.from_config(current_app.config)
    result = client.upload(file, safe_name)
    logger.info(f"Image uploaded ({info['format']} {info['width']}x{info['height']}): {result['url']}")
    return success_response(result, **result)
