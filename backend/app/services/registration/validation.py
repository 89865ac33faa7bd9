"""Registration field rules shared by the form controller and the relay.

`validate_registration` applies the full client-side rule set and returns a
field -> message mapping. `find_missing_fields` is the lighter presence check
the relay runs before forwarding. `redact_payload` masks credentials before a
payload is written to any log.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

# Canonical order of the fields sent over the wire
REQUIRED_FIELDS = (
    'fullName',
    'guardianName',
    'classGrade',
    'language',
    'location',
    'emailAddress',
    'password',
)

# Client-only field, never transmitted
CONFIRM_FIELD = 'confirmPassword'

FORM_FIELDS = REQUIRED_FIELDS + (CONFIRM_FIELD,)

SENSITIVE_FIELDS = frozenset({'password', CONFIRM_FIELD})

GRADE_OPTIONS = (
    '1st Grade', '2nd Grade', '3rd Grade', '4th Grade', '5th Grade', '6th Grade',
    '7th Grade', '8th Grade', '9th Grade', '10th Grade', '11th Grade', '12th Grade',
)

LANGUAGE_OPTIONS = (
    'English', 'Hindi', 'Spanish', 'French', 'German', 'Chinese', 'Japanese', 'Other',
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def empty_registration() -> Dict[str, str]:
    """Return a blank form state with every field present."""
    return {name: '' for name in FORM_FIELDS}


def _text(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    return value if isinstance(value, str) else ''


def _validate_name(value: str, label: str) -> str | None:
    if not value.strip():
        return f'{label} is required'
    if len(value.strip()) < MIN_NAME_LENGTH:
        return f'{label} must be at least {MIN_NAME_LENGTH} characters'
    return None


def validate_registration(data: Mapping[str, Any]) -> Dict[str, str]:
    """Validate a full registration form.

    Every field is checked independently so all problems are reported at
    once. Returns an empty dict when the input is valid.
    """
    errors: Dict[str, str] = {}

    msg = _validate_name(_text(data, 'fullName'), 'Full name')
    if msg:
        errors['fullName'] = msg

    msg = _validate_name(_text(data, 'guardianName'), 'Guardian name')
    if msg:
        errors['guardianName'] = msg

    if not _text(data, 'classGrade').strip():
        errors['classGrade'] = 'Class/Grade is required'

    if not _text(data, 'language').strip():
        errors['language'] = 'Language is required'

    if not _text(data, 'location').strip():
        errors['location'] = 'Location is required'

    email = _text(data, 'emailAddress')
    if not email.strip():
        errors['emailAddress'] = 'Email address is required'
    elif not EMAIL_RE.match(email):
        errors['emailAddress'] = 'Please enter a valid email address'

    password = _text(data, 'password')
    if not password:
        errors['password'] = 'Password is required'
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors['password'] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters'

    confirm = _text(data, CONFIRM_FIELD)
    if not confirm:
        errors[CONFIRM_FIELD] = 'Please confirm your password'
    elif confirm != password:
        errors[CONFIRM_FIELD] = 'Passwords do not match'

    return errors


def find_missing_fields(data: Any) -> List[str]:
    """Return the required fields that are absent or blank, in canonical order."""
    if not isinstance(data, Mapping):
        return list(REQUIRED_FIELDS)
    missing = []
    for name in REQUIRED_FIELDS:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            missing.append(name)
    return missing


def to_payload(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Project form data onto the transmitted fields (drops confirmPassword)."""
    return {name: data.get(name) for name in REQUIRED_FIELDS}


def redact_payload(data: Any) -> Any:
    """Copy of `data` safe for logging, with credential values masked.

    Nested mappings and lists are walked, so a webhook echoing the request
    back (e.g. `{"received": {...}}`) is masked too.
    """
    if isinstance(data, Mapping):
        return {k: ('***' if k in SENSITIVE_FIELDS else redact_payload(v)) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [redact_payload(item) for item in data]
    return data
