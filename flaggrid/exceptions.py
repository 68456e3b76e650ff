"""
Error taxonomy for the flag grid reader.

Nothing here is retried: each layer either raises one of these to its
caller or logs and masks it (the relay never exposes upstream detail).
"""
from django.core.exceptions import ImproperlyConfigured


class ConfigurationError(ImproperlyConfigured):
    """A required setting (the Gemini credential) is missing."""


class ValidationError(ValueError):
    """A malformed or incomplete extraction request."""


class UpstreamError(Exception):
    """The external recognition service failed or returned nothing usable."""


class TransportError(Exception):
    """The client could not reach the relay or could not read its reply."""


class SubmissionError(TransportError):
    """The relay answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API returned an error: {status_code} {body}")
        self.status_code = status_code
        self.body = body


class MalformedGridError(ValueError):
    """A grid that is not exactly 3 rows of 3 cells."""
