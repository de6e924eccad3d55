"""
Image Upload Service - forwards validated images to Uploadcare and returns
the public CDN URL.
"""

import logging
from typing import Dict, Mapping, Any

import requests
from werkzeug.datastructures import FileStorage

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    """Upload failed; status_code is the HTTP status to answer with."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UploadcareClient:
    """Minimal client for Uploadcare's direct upload endpoint."""

    def __init__(self, public_key: str, upload_url: str, cdn_url: str, timeout: int = 30):
        self.public_key = public_key
        self.upload_url = upload_url
        self.cdn_url = cdn_url.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'UploadcareClient':
        return cls(
            public_key=config.get('UPLOADCARE_PUBLIC_KEY'),
            upload_url=config.get('UPLOADCARE_UPLOAD_URL', 'https://upload.uploadcare.com/base/'),
            cdn_url=config.get('UPLOADCARE_CDN_URL', 'https://ucarecdn.com'),
            timeout=int(config.get('UPLOAD_TIMEOUT', 30)),
        )

    def upload(self, file: FileStorage, filename: str) -> Dict[str, str]:
        """
        Upload one file.

        Returns:
            {url, filename, originalFilename}

        Raises:
            ImageUploadError: with 500 for configuration or malformed responses,
                503 for network failures, the upstream status (507 for quota)
                when Uploadcare refuses the file
        """
        if not self.public_key:
            logger.error("Uploadcare public key is not configured")
            raise ImageUploadError("Upload service not configured", 500)

        file.stream.seek(0)
        try:
            response = requests.post(
                self.upload_url,
                data={
                    'UPLOADCARE_PUB_KEY': self.public_key,
                    'UPLOADCARE_STORE': 'auto',
                },
                files={'file': (filename, file.stream, file.mimetype)},
                timeout=self.timeout
            )
        except requests.Timeout:
            logger.error(f"Uploadcare timed out after {self.timeout}s")
            raise ImageUploadError("Upload timed out. Please try again.", 503)
        except requests.ConnectionError as e:
            logger.error(f"Uploadcare unreachable: {e}")
            raise ImageUploadError("Network error. Please check your connection and try again.", 503)
        except requests.RequestException as e:
            logger.error(f"Uploadcare request failed: {e}")
            raise ImageUploadError(f"Upload failed: {e}", 500)

        if not response.ok:
            detail = response.text.strip() or response.reason or 'Unknown error'
            logger.error(f"Uploadcare rejected upload ({response.status_code}): {detail}")
            if 'quota' in detail.lower():
                raise ImageUploadError("Storage quota exceeded. Please contact support.", 507)
            if response.status_code == 429:
                raise ImageUploadError("Too many uploads. Please wait and try again.", 429)
            raise ImageUploadError(f"Upload failed: {detail}", response.status_code)

        try:
            payload = response.json()
        except ValueError:
            raise ImageUploadError("Invalid response from upload service", 500)

        file_uuid = payload.get('file') if isinstance(payload, dict) else None
        if not file_uuid:
            logger.error(f"Uploadcare response without file id: {payload}")
            raise ImageUploadError("Invalid response from upload service", 500)

        url = f"{self.cdn_url}/{file_uuid}/"
        logger.info(f"Uploaded {filename} to {url}")
        return {
            'url': url,
            'filename': filename,
            'originalFilename': file.filename,
        }
