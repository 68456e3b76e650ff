"""
Client for submitting grid screenshots to the extraction relay.
"""
import base64
import logging
from pathlib import Path

import requests

from .exceptions import SubmissionError, TransportError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:8000'
EXTRACT_PATH = '/api/extractGrid'
DEFAULT_TIMEOUT = 120
COMMUNICATION_FAILURE_MESSAGE = 'Failed to communicate with the backend service.'

MIME_TYPES_BY_EXTENSION = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
}
RECOGNIZED_MIME_TYPES = frozenset(MIME_TYPES_BY_EXTENSION.values())


def encode_image(image_data: bytes) -> str:
    """Encode image bytes as base64 text."""
    return base64.b64encode(image_data).decode('ascii')


def guess_mime_type(path) -> str:
    """Map an image file extension to its MIME type."""
    ext = Path(path).suffix.lower()
    try:
        return MIME_TYPES_BY_EXTENSION[ext]
    except KeyError:
        raise ValidationError(f"Unsupported image type: {ext or path}") from None


class GridClient:
    """
    Submits one image per call to the relay; never retries.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: requests.Session = None):
        self.url = base_url.rstrip('/') + EXTRACT_PATH
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit(self, image_data: bytes, mime_type: str) -> str:
        """
        Send an image to the relay and return the extracted grid text.

        Args:
            image_data: Raw image bytes.
            mime_type: One of RECOGNIZED_MIME_TYPES.

        Returns:
            The relay's ``text`` field, verbatim.

        Raises:
            ValidationError: if the image is empty or the MIME type unknown.
            SubmissionError: if the relay answers with a non-success status.
            TransportError: if the relay cannot be reached or its reply is unusable.
        """
        if not image_data:
            raise ValidationError('Image data is empty')
        if mime_type not in RECOGNIZED_MIME_TYPES:
            raise ValidationError(f"Unsupported image type: {mime_type}")

        payload = {'imageBase64': encode_image(image_data), 'mimeType': mime_type}
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error calling API: {e}")
            raise TransportError(COMMUNICATION_FAILURE_MESSAGE) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"API returned an error: {response.status_code}")
            raise SubmissionError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from API: {e}")
            raise TransportError(COMMUNICATION_FAILURE_MESSAGE) from e

        text = data.get('text') if isinstance(data, dict) else None
        if not isinstance(text, str) or not text:
            logger.error('Invalid response from API: no text field')
            raise TransportError(COMMUNICATION_FAILURE_MESSAGE)
        return text

    def submit_file(self, path) -> str:
        """Read an image file and submit it."""
        mime_type = guess_mime_type(path)
        return self.submit(Path(path).read_bytes(), mime_type)


def submit(image_data: bytes, mime_type: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Submit one image with a throwaway client."""
    with requests.Session() as session:
        return GridClient(base_url, session=session).submit(image_data, mime_type)
