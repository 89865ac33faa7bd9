"""Post the sample registration to the configured webhook and print the outcome.

Same check as GET /api/test-webhook, usable without starting the server.
When executed directly from the repository root Python may not be able to
import the `backend` package, so the repo root is added to sys.path.

Usage:
    python scripts/check_webhook.py
"""
import json
import os
import sys

# Ensure repo root is on sys.path so `backend` package can be imported
repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from backend.app import create_app

app = create_app()

with app.app_context():
    relay = app.extensions['registration_relay']
    print(f"Posting sample registration to {relay.webhook_url} ...")
    status, body = relay.test_connection()
    print(json.dumps(body, indent=2, default=str))
    sys.exit(0 if status == 200 else 1)
