"""Application extensions: logging setup and the registration webhook relay.

The relay is built once from config and kept in `app.extensions` so routes
share it and tests can swap in a relay pointed at a mock endpoint.
"""
import logging

from backend.app.services.registration.webhook_relay import create_relay_from_config


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    root.setLevel(level)
    app.logger.setLevel(level)


def init_extensions(app):
    """Initialize extensions with app context.

    Args:
        app: Flask application instance
    """
    _configure_logging(app)

    try:
        relay = create_relay_from_config(app.config)
    except ValueError as e:
        app.logger.error(f"Registration relay not configured: {e}")
        raise

    app.extensions['registration_relay'] = relay
    app.logger.info(
        "Registration relay ready (timeout=%ss, webhook=%s)",
        relay.timeout,
        relay.webhook_url,
    )
