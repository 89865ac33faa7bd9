"""WSGI entrypoint for development and production (project root).

This file creates the Flask application by calling create_app() from
the `backend.app` package. Placing the entrypoint at the repository root
makes it straightforward to reference as `wsgi:app` from Gunicorn or other
WSGI servers.

Set APP_CONFIG to one of development/production/testing to pick a config
class (defaults to development).

Usage examples:
  - Development: python -m flask --app wsgi:app run --debug
  - Gunicorn:   gunicorn -c gunicorn.conf.py wsgi:app
"""
import os

from dotenv import load_dotenv
from backend.app import create_app
from backend.app.config import config

# Load environment variables from .env (if present)
load_dotenv()

# Create the Flask application
app = create_app(config.get(os.environ.get('APP_CONFIG', 'default'), config['default']))

if __name__ == '__main__':
    # Run development server when executed directly
    app.run(debug=True)
