"""
Relay endpoint and single-page client views.
"""
import base64
import binascii
import json
import logging

from django.http import HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .ai_service import get_recognizer
from .exceptions import UpstreamError, ValidationError
from .prompts import get_grid_prompt

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('imageBase64', 'mimeType')
UPSTREAM_FAILURE_MESSAGE = 'Failed to process the image with the AI model.'


def _plain_text(message: str, status: int) -> HttpResponse:
    return HttpResponse(message, status=status, content_type='text/plain; charset=utf-8')


def parse_extraction_request(body: bytes) -> tuple[bytes, str]:
    """
    Validate an extraction request body.

    Returns:
        The decoded image bytes and the declared MIME type.

    Raises:
        ValidationError: describing what is missing or malformed.
    """
    try:
        payload = json.loads(body or b'null')
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError('Request body must be a JSON object.') from None

    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object.')

    missing = [
        field for field in REQUIRED_FIELDS
        if not isinstance(payload.get(field), str) or not payload[field].strip()
    ]
    if missing:
        raise ValidationError(f"Missing {' or '.join(missing)} in request body.")

    try:
        image_data = base64.b64decode(payload['imageBase64'], validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError('imageBase64 is not valid base64.') from None

    return image_data, payload['mimeType']


@csrf_exempt
@require_POST
def extract_grid_view(request):
    """
    Forward an uploaded image to the recognizer and return its text.
    """
    try:
        image_data, mime_type = parse_extraction_request(request.body)
    except ValidationError as e:
        logger.warning(f"Rejected extraction request: {e}")
        return _plain_text(str(e), status=400)

    try:
        text = get_recognizer().recognize(image_data, mime_type, get_grid_prompt())
    except UpstreamError:
        logger.exception('Error calling Gemini API')
        return _plain_text(UPSTREAM_FAILURE_MESSAGE, status=500)
    except Exception:
        logger.exception('Unexpected error during grid extraction')
        return _plain_text(UPSTREAM_FAILURE_MESSAGE, status=500)

    logger.info(f"Extracted grid from {len(image_data)} bytes of {mime_type}")
    return JsonResponse({'text': text.strip()}, json_dumps_params={'ensure_ascii': False})


@require_GET
def index_view(request):
    """
    Single-page client, served for every non-API path.
    """
    return render(request, 'flaggrid/index.html')
