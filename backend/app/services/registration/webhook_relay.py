"""
Registration webhook relay.
Forwards validated registration payloads to the external workflow webhook and
translates its outcome into the client-facing status/body pair.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from backend.app.services.registration.validation import redact_payload, to_payload

SUCCESS_MESSAGE = 'Registration submitted successfully'

# Fixed sample used by the webhook connectivity check
SAMPLE_REGISTRATION = {
    'fullName': 'Test User',
    'guardianName': 'Test Guardian',
    'classGrade': '10th Grade',
    'language': 'English',
    'location': 'Test Location',
    'emailAddress': 'test@example.com',
    'password': 'testpass123',
}


class RelayError(Exception):
    """Base exception for relay failures."""
    pass


class RelayTimeoutError(RelayError):
    """The webhook did not answer within the timeout."""
    pass


class RelayConnectionError(RelayError):
    """The webhook could not be reached (DNS, refused, reset)."""
    pass


class UpstreamStatusError(RelayError):
    """The webhook answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = '', body: Any = None):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"HTTP error! status: {status_code}")


def _is_status(predicate: Callable[[int], bool]) -> Callable[[Exception], bool]:
    def check(error: Exception) -> bool:
        return isinstance(error, UpstreamStatusError) and predicate(error.status_code)
    return check


# Ordered failure mapping; the first matching predicate decides the response.
ERROR_RESPONSES: List[Tuple[Callable[[Exception], bool], int, str]] = [
    (lambda e: isinstance(e, RelayTimeoutError), 408,
     'Request timeout. Please try again.'),
    (lambda e: isinstance(e, RelayConnectionError), 503,
     'Unable to connect to registration service. Please try again later.'),
    (_is_status(lambda s: s == 400), 400,
     'Invalid data submitted. Please check your information.'),
    (_is_status(lambda s: s == 404), 502,
     'Registration service not found. Please contact support.'),
    (_is_status(lambda s: s >= 500), 502,
     'External server error. Please try again later.'),
]


def classify_error(error: Exception) -> Tuple[int, Dict[str, str]]:
    """Map a forwarding failure to an HTTP status and `{"error": ...}` body."""
    for matches, status, message in ERROR_RESPONSES:
        if matches(error):
            return status, {'error': message}
    return 500, {'error': f"Registration failed: {error}. Please try again."}


def _response_body(response: requests.Response) -> Any:
    """Parsed JSON body when the webhook sent JSON, else its text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _loggable_body(body: Any, payload: Dict[str, Any]) -> Any:
    """Upstream body with credentials masked, including a password echoed in plain text."""
    body = redact_payload(body)
    password = payload.get('password')
    if isinstance(body, str) and password:
        body = body.replace(password, '***')
    return body


class WebhookRelay:
    """
    Client for the external registration webhook.

    One POST per call, no retries. Transport failures and non-2xx answers
    are raised as `RelayError` subclasses for the caller to classify.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the relay.

        Args:
            webhook_url: Endpoint receiving the registration JSON
            timeout: Request timeout in seconds
            session: Optional pre-built session (tests inject a fake)
        """
        if not webhook_url:
            raise ValueError("webhook_url is required")
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._session = session
        self._local = threading.local()
        self.logger = logging.getLogger(__name__)

    @property
    def session(self) -> requests.Session:
        """Injected session, else one `requests.Session` per thread (gthread workers)."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        self.logger.debug(f"Posting registration to {self.webhook_url}: {redact_payload(payload)}")
        try:
            response = self.session.post(
                self.webhook_url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise RelayTimeoutError(f"Request timeout after {self.timeout} seconds")
        except requests.exceptions.ConnectionError as e:
            raise RelayConnectionError(f"Connection error: {e}")
        except requests.exceptions.RequestException as e:
            raise RelayError(str(e))
        return response

    def forward(self, registration: Dict[str, Any]) -> Any:
        """
        Forward a registration to the webhook.

        Args:
            registration: Registration fields; anything beyond the seven
                transmitted fields is dropped

        Returns:
            The webhook's response body (JSON-decoded when possible)

        Raises:
            RelayTimeoutError, RelayConnectionError, UpstreamStatusError, RelayError
        """
        payload = to_payload(registration)
        response = self._post(payload)
        body = _response_body(response)

        if not response.ok:
            self.logger.warning(
                f"Webhook rejected registration: status={response.status_code} "
                f"body={_loggable_body(body, payload)!r}"
            )
            raise UpstreamStatusError(response.status_code, response.reason or '', body)

        self.logger.info(f"Webhook accepted registration (status={response.status_code})")
        return body

    def relay(self, registration: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        """Forward and build the client-facing (status, body) pair."""
        try:
            data = self.forward(registration)
        except Exception as e:
            self.logger.error(
                f"Registration relay failed: {e} (payload={redact_payload(registration)})"
            )
            return classify_error(e)
        return 200, {'success': True, 'message': SUCCESS_MESSAGE, 'data': data}

    def test_connection(self) -> Tuple[int, Dict[str, Any]]:
        """Post the fixed sample registration and report raw webhook details."""
        self.logger.info(f"Testing webhook with data: {redact_payload(SAMPLE_REGISTRATION)}")
        try:
            response = self._post(dict(SAMPLE_REGISTRATION))
        except RelayError as e:
            cause = e.__cause__ or e.__context__
            return 500, {
                'success': False,
                'error': 'Webhook test failed',
                'details': {
                    'code': type(cause or e).__name__,
                    'message': str(e),
                    'status': None,
                    'statusText': None,
                    'data': None,
                },
            }

        body = _response_body(response)
        if not response.ok:
            self.logger.error(
                f"Webhook test failed: status={response.status_code} reason={response.reason}"
            )
            return 500, {
                'success': False,
                'error': 'Webhook test failed',
                'details': {
                    'code': 'HTTPError',
                    'message': f"HTTP error! status: {response.status_code}",
                    'status': response.status_code,
                    'statusText': response.reason,
                    'data': body,
                },
            }

        self.logger.info(f"Webhook test successful: status={response.status_code}")
        return 200, {
            'success': True,
            'message': 'Webhook test successful',
            'webhookStatus': response.status_code,
            'webhookData': body,
        }


def create_relay_from_config(config: Dict[str, Any], session: Optional[requests.Session] = None) -> WebhookRelay:
    """
    Create a relay from a Flask config mapping.

    Raises:
        ValueError: If REGISTRATION_WEBHOOK_URL is not set
    """
    return WebhookRelay(
        webhook_url=config.get('REGISTRATION_WEBHOOK_URL'),
        timeout=config.get('REGISTRATION_WEBHOOK_TIMEOUT_SECONDS', 15),
        session=session
    )
