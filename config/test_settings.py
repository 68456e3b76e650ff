"""
Settings for the test suite: fake credentials, no HTTPS redirect.
"""
import os

os.environ.setdefault('GEMINI_API_KEY', 'test-gemini-key')
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

from .settings import *  # noqa: E402,F401,F403

SECURE_SSL_REDIRECT = False
WHITENOISE_AUTOREFRESH = True
