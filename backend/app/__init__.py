"""Flask application factory and initialization."""
from flask import Flask, jsonify
from backend.app.config import Config
from backend.app.extensions import init_extensions


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize logging and the webhook relay
    init_extensions(app)

    # Register health check endpoint
    @app.route('/api/health')
    def health_check():
        """Health check endpoint; does not call the webhook."""
        relay = app.extensions.get('registration_relay')
        return jsonify({
            "status": "ok",
            "service": "registration-relay",
            "webhook_configured": bool(relay and relay.webhook_url),
        })

    # Register blueprints
    register_blueprints(app)

    return app


def register_blueprints(app):
    """Register Flask blueprints with the application.

    Args:
        app: Flask application instance
    """
    # Import blueprints here to avoid circular imports
    from backend.app.blueprints.api.registration.routes import registration_bp
    from backend.app.blueprints.web.routes import web_bp

    app.register_blueprint(registration_bp, url_prefix='/api')

    # Register Web blueprint (no prefix for main web routes)
    app.register_blueprint(web_bp)
