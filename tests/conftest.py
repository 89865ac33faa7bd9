"""Shared fixtures: a testing app and a fake HTTP session standing in for the webhook."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests
from flask import Flask

from backend.app import create_app
from backend.app.config import TestingConfig
from backend.app.services.registration.webhook_relay import WebhookRelay

_REASONS = {200: 'OK', 201: 'Created', 400: 'Bad Request', 404: 'Not Found',
            418: "I'm a Teapot", 500: 'Internal Server Error', 503: 'Service Unavailable'}


def make_response(status: int = 200, body: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real `requests.Response` without touching the network."""
    response = requests.Response()
    response.status_code = status
    response.reason = _REASONS.get(status, '')
    response.url = 'http://webhook.test/registration'
    if text is not None:
        response._content = text.encode('utf-8')
        response.headers['Content-Type'] = 'text/plain'
    else:
        response._content = json.dumps(body).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    response.encoding = 'utf-8'
    return response


class FakeSession:
    """Minimal `requests.Session` stand-in recording every POST."""

    def __init__(self, response: Optional[requests.Response] = None, error: Optional[Exception] = None):
        self.response = response if response is not None else make_response(200, {'ok': True})
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, json=None, headers=None, timeout=None, **kwargs):
        self.calls.append({'url': url, 'json': json, 'headers': headers, 'timeout': timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def valid_form() -> Dict[str, str]:
    return {
        'fullName': 'Asha Verma',
        'guardianName': 'Ravi Verma',
        'classGrade': '10th Grade',
        'language': 'Hindi',
        'location': 'Pune',
        'emailAddress': 'asha@example.com',
        'password': 'secret1',
        'confirmPassword': 'secret1',
    }


@pytest.fixture
def valid_payload(valid_form) -> Dict[str, str]:
    payload = dict(valid_form)
    payload.pop('confirmPassword')
    return payload


@pytest.fixture
def webhook_session() -> FakeSession:
    return FakeSession()


@pytest.fixture(name="app")
def fixture_app(webhook_session) -> Flask:
    app = create_app(TestingConfig)
    app.extensions['registration_relay'] = WebhookRelay(
        webhook_url=app.config['REGISTRATION_WEBHOOK_URL'],
        timeout=app.config['REGISTRATION_WEBHOOK_TIMEOUT_SECONDS'],
        session=webhook_session,
    )
    return app


@pytest.fixture(name="client")
def fixture_client(app: Flask):
    return app.test_client()
