"""Client-side registration form state and submission lifecycle.

A `FormController` holds one form instance: field values, per-field errors,
the submission phase and the status message shown to the user. `submit()`
validates locally and only then posts the registration to the relay endpoint.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional

import requests

from backend.app.services.registration.validation import (
    empty_registration,
    to_payload,
    validate_registration,
)

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = 'Registration successful! Your account has been created.'
NETWORK_ERROR_MESSAGE = 'Network error. Please check your connection and try again.'


class SubmissionPhase(str, Enum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'
    ERROR = 'error'


def classify_client_error(error: requests.exceptions.RequestException) -> str:
    """Turn a failed relay call into the message shown under the form."""
    if isinstance(error, requests.exceptions.Timeout):
        return 'Request timeout. Please try again.'

    response = getattr(error, 'response', None)
    if response is None:
        return NETWORK_ERROR_MESSAGE

    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get('error'), str) and body['error']:
        return body['error']

    if response.status_code == 400:
        return 'Invalid data submitted. Please check your information.'
    if response.status_code >= 500:
        return 'Server error. Please try again later.'
    return 'Registration failed. Please try again.'


class FormController:
    """State holder for a single registration form."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.data: Dict[str, str] = empty_registration()
        self.errors: Dict[str, str] = {}
        self.phase = SubmissionPhase.IDLE
        self.message = ''

    @property
    def is_submitting(self) -> bool:
        return self.phase is SubmissionPhase.SUBMITTING

    def update_field(self, name: str, value: str) -> None:
        """Set one field and drop its stale error, leaving other errors alone."""
        if name not in self.data:
            raise KeyError(f"Unknown registration field: {name}")
        self.data[name] = value
        self.errors.pop(name, None)

    def load(self, values: Dict[str, Any]) -> None:
        """Apply several known fields at once (e.g. from a posted HTML form)."""
        for name in self.data:
            if name in values:
                self.update_field(name, values[name] or '')

    def validate(self) -> Dict[str, str]:
        return validate_registration(self.data)

    def reset(self) -> None:
        self.data = empty_registration()
        self.errors = {}
        self.phase = SubmissionPhase.IDLE
        self.message = ''

    def submit(self) -> bool:
        """Validate and send the registration.

        Returns True only when the relay accepted the registration. A call
        made while a submission is in flight is ignored.
        """
        if self.is_submitting:
            logger.debug("Submit ignored: a submission is already in flight")
            return False

        errors = self.validate()
        self.errors = errors
        if errors:
            self.phase = SubmissionPhase.IDLE
            self.message = ''
            return False

        self.phase = SubmissionPhase.SUBMITTING
        self.message = ''
        payload = to_payload(self.data)

        try:
            response = self.session.post(
                self.endpoint,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Registration submit failed: {e}")
            self.phase = SubmissionPhase.ERROR
            self.message = classify_client_error(e)
            return False
        except Exception as e:
            logger.error(f"Registration submit failed unexpectedly: {e}")
            self.phase = SubmissionPhase.ERROR
            self.message = NETWORK_ERROR_MESSAGE
            return False

        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get('message') if isinstance(body, dict) else None

        self.data = empty_registration()
        self.errors = {}
        self.phase = SubmissionPhase.SUCCESS
        self.message = message or DEFAULT_SUCCESS_MESSAGE
        return True
