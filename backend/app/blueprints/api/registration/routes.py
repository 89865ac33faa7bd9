"""Registration relay blueprint: validate and forward submissions to the webhook."""
from flask import Blueprint, request, jsonify, current_app
import logging

from backend.app.services.registration.validation import find_missing_fields, redact_payload
from backend.app.services.registration.webhook_relay import classify_error

logger = logging.getLogger(__name__)

registration_bp = Blueprint('registration', __name__)

# Registered for every common verb (OPTIONS included, with Flask's automatic
# OPTIONS reply disabled) so the method gate answers all of them in JSON
_ALL_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def _get_relay():
    return current_app.extensions['registration_relay']


@registration_bp.route('/submit-registration', methods=_ALL_METHODS, provide_automatic_options=False)
def submit_registration():
    """Relay a registration to the external webhook.

    Responses:
    - 200 {success, message, data} when the webhook accepts it
    - 400 {error, missingFields} when required fields are absent
    - 405 for anything but POST
    - 408/503/400/502/500 {error} for forwarding failures
    """
    if request.method != 'POST':
        return jsonify({"error": "Method not allowed"}), 405

    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        missing = find_missing_fields(data)
        if missing:
            logger.info(f"Registration rejected, missing fields: {missing}")
            return jsonify({
                "error": "Missing required fields",
                "missingFields": missing
            }), 400

        logger.info(f"Relaying registration: {redact_payload(data)}")
        status, body = _get_relay().relay(data)
        return jsonify(body), status
    except Exception as e:
        logger.exception("Registration API error")
        status, body = classify_error(e)
        return jsonify(body), status


@registration_bp.route('/test-webhook', methods=['GET'])
def test_webhook():
    """Post a fixed sample registration to the webhook and report what came back.

    Only available when ENABLE_WEBHOOK_TEST is set.
    """
    if not current_app.config.get('ENABLE_WEBHOOK_TEST'):
        return jsonify({"error": "Not found"}), 404

    status, body = _get_relay().test_connection()
    return jsonify(body), status
