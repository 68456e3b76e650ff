"""Shared fixtures for the flag grid tests."""
import pytest

from flaggrid import views
from flaggrid.exceptions import UpstreamError
from flaggrid.grid_format import EMPTY, Country


@pytest.fixture
def sample_grid():
    """The grid from the extraction prompt's worked example."""
    return [
        [Country('🇬🇧', 'UK'), Country('🇨🇦', 'Canada'), Country('🇯🇵', 'Japan')],
        [Country('🇺🇸', 'United States'), EMPTY, Country('🇫🇷', 'France')],
        [Country('🇮🇹', 'Italy'), Country('🇩🇪', 'Germany'), Country('🇲🇽', 'Mexico')],
    ]


class FakeRecognizer:
    """Recognizer double returning canned text or raising."""

    def __init__(self, text='', error=None):
        self.text = text
        self.error = error
        self.calls = []

    def recognize(self, image_data, mime_type, instruction):
        self.calls.append((image_data, mime_type, instruction))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_recognizer(monkeypatch):
    """Install a FakeRecognizer behind the relay view."""
    recognizer = FakeRecognizer()
    monkeypatch.setattr(views, 'get_recognizer', lambda: recognizer)
    return recognizer


@pytest.fixture
def failing_recognizer(monkeypatch):
    recognizer = FakeRecognizer(error=UpstreamError('quota exceeded for key test-gemini-key'))
    monkeypatch.setattr(views, 'get_recognizer', lambda: recognizer)
    return recognizer
