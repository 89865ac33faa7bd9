"""Configuration settings and environment variables.

This module loads values from environment variables (including a .env file)
and provides small helpers to safely parse integers and booleans while
stripping inline comments. This avoids crashes when a .env value contains
an inline comment like:

    REGISTRATION_WEBHOOK_TIMEOUT_SECONDS=15 # seconds

The helpers fall back to defaults and emit warnings when parsing fails.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_logger = logging.getLogger(__name__)


def _strip_inline_comment(val: str) -> str:
    """Strip an inline comment from a string and trim whitespace/quotes.

    Example: "15 # seconds" -> "15"
    """
    if val is None:
        return ''
    # Split on first ' #' so URL fragments survive
    if val.lstrip().startswith('#'):
        return ''
    val = val.split(' #', 1)[0]
    val = val.strip()
    # Remove surrounding single/double quotes if present
    if (val.startswith('"') and val.endswith('"')) or (
        val.startswith("'") and val.endswith("'")
    ):
        val = val[1:-1]
    return val


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    stripped = _strip_inline_comment(raw)
    return stripped if stripped != '' else default


def _get_int_env(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except (ValueError, TypeError):
        _logger.warning("Invalid integer for %s: %r, falling back to %s", name, raw, default)
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = _get_env(name)
    if raw is None:
        return default
    return raw.lower() in ['true', '1', 'on', 'yes']


class Config:
    """Base configuration class with default settings."""

    # Flask settings
    SECRET_KEY = _get_env('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Outbound webhook that actually processes registrations
    REGISTRATION_WEBHOOK_URL = _get_env(
        'REGISTRATION_WEBHOOK_URL',
        'https://aviadigitalmind.app.n8n.cloud/webhook/AI-BUDDY-MAIN',
    )
    REGISTRATION_WEBHOOK_TIMEOUT_SECONDS = _get_int_env('REGISTRATION_WEBHOOK_TIMEOUT_SECONDS', 15)

    # Relay endpoint the registration page submits to
    REGISTRATION_RELAY_URL = _get_env(
        'REGISTRATION_RELAY_URL',
        'http://127.0.0.1:8000/api/submit-registration',
    )
    REGISTRATION_RELAY_TIMEOUT_SECONDS = _get_int_env('REGISTRATION_RELAY_TIMEOUT_SECONDS', 15)

    # Diagnostic endpoint that posts a sample registration to the webhook.
    # Off unless explicitly enabled since it creates real upstream records.
    ENABLE_WEBHOOK_TEST = _get_bool_env('ENABLE_WEBHOOK_TEST', False)

    LOG_LEVEL = (_get_env('LOG_LEVEL') or 'INFO').upper()


class DevelopmentConfig(Config):
    """Development configuration with debug mode enabled."""
    DEBUG = True
    TESTING = False
    ENABLE_WEBHOOK_TEST = _get_bool_env('ENABLE_WEBHOOK_TEST', True)
    LOG_LEVEL = (_get_env('LOG_LEVEL') or 'DEBUG').upper()


class ProductionConfig(Config):
    """Production configuration with security settings."""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration pointing at a local mock webhook."""
    TESTING = True
    REGISTRATION_WEBHOOK_URL = 'http://webhook.test/registration'
    REGISTRATION_RELAY_URL = 'http://relay.test/api/submit-registration'
    ENABLE_WEBHOOK_TEST = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
