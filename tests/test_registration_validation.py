"""Tests for the registration field rules."""
import pytest

from backend.app.services.registration.validation import (
    FORM_FIELDS,
    REQUIRED_FIELDS,
    GRADE_OPTIONS,
    LANGUAGE_OPTIONS,
    empty_registration,
    find_missing_fields,
    redact_payload,
    to_payload,
    validate_registration,
)


def test_valid_form_has_no_errors(valid_form):
    assert validate_registration(valid_form) == {}


def test_empty_form_reports_every_field():
    errors = validate_registration(empty_registration())
    assert set(errors) == set(FORM_FIELDS)
    assert errors['fullName'] == 'Full name is required'
    assert errors['confirmPassword'] == 'Please confirm your password'


@pytest.mark.parametrize('field', ['fullName', 'guardianName', 'classGrade', 'language', 'location', 'emailAddress'])
def test_whitespace_only_is_required_error(valid_form, field):
    valid_form[field] = '   '
    errors = validate_registration(valid_form)
    assert field in errors
    assert errors[field].endswith('is required')


@pytest.mark.parametrize('value,ok', [('A', False), (' B ', False), ('Al', True), ('  Jo  ', True)])
def test_name_min_length_after_trim(valid_form, value, ok):
    valid_form['fullName'] = value
    valid_form['guardianName'] = value
    errors = validate_registration(valid_form)
    assert ('fullName' not in errors) is ok
    assert ('guardianName' not in errors) is ok
    if not ok:
        assert errors['guardianName'] == 'Guardian name must be at least 2 characters'


@pytest.mark.parametrize('email,ok', [
    ('a@b.c', True),
    ('abc', False),
    ('a@b', False),
    ('@b.c', False),
    ('a b@c.d', False),
])
def test_email_pattern(valid_form, email, ok):
    valid_form['emailAddress'] = email
    errors = validate_registration(valid_form)
    assert ('emailAddress' not in errors) is ok
    if not ok:
        assert errors['emailAddress'] == 'Please enter a valid email address'


def test_password_length_boundary(valid_form):
    valid_form['password'] = valid_form['confirmPassword'] = '12345'
    assert validate_registration(valid_form)['password'] == 'Password must be at least 6 characters'

    valid_form['password'] = valid_form['confirmPassword'] = '123456'
    assert validate_registration(valid_form) == {}


def test_confirm_mismatch_always_errors(valid_form):
    valid_form['password'] = 'longenoughpassword'
    valid_form['confirmPassword'] = 'longenoughpassworD'
    errors = validate_registration(valid_form)
    assert errors == {'confirmPassword': 'Passwords do not match'}


def test_validation_is_idempotent(valid_form):
    valid_form['emailAddress'] = 'nope'
    valid_form['location'] = ''
    assert validate_registration(valid_form) == validate_registration(valid_form)


def test_non_string_values_count_as_empty(valid_form):
    valid_form['location'] = None
    valid_form['fullName'] = 42
    errors = validate_registration(valid_form)
    assert errors['location'] == 'Location is required'
    assert errors['fullName'] == 'Full name is required'


def test_option_lists():
    assert len(GRADE_OPTIONS) == 12
    assert GRADE_OPTIONS[0] == '1st Grade' and GRADE_OPTIONS[-1] == '12th Grade'
    assert 'Other' in LANGUAGE_OPTIONS and len(LANGUAGE_OPTIONS) == 8


def test_find_missing_fields_keeps_canonical_order(valid_payload):
    del valid_payload['password']
    valid_payload['fullName'] = '  '
    del valid_payload['emailAddress']
    assert find_missing_fields(valid_payload) == ['fullName', 'emailAddress', 'password']


def test_find_missing_fields_non_mapping():
    assert find_missing_fields(None) == list(REQUIRED_FIELDS)
    assert find_missing_fields(['fullName']) == list(REQUIRED_FIELDS)


def test_to_payload_drops_confirm_password(valid_form):
    payload = to_payload(valid_form)
    assert 'confirmPassword' not in payload
    assert list(payload) == list(REQUIRED_FIELDS)


def test_redact_payload_masks_credentials(valid_form):
    redacted = redact_payload(valid_form)
    assert redacted['password'] == '***'
    assert redacted['confirmPassword'] == '***'
    assert redacted['emailAddress'] == valid_form['emailAddress']
    assert valid_form['password'] == 'secret1'


def test_redact_payload_walks_nested_structures():
    echoed = {'received': {'emailAddress': 'a@b.c', 'password': 'secret1'},
              'items': [{'confirmPassword': 'secret1'}, 'plain']}
    assert redact_payload(echoed) == {
        'received': {'emailAddress': 'a@b.c', 'password': '***'},
        'items': [{'confirmPassword': '***'}, 'plain'],
    }
