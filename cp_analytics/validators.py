"""Request payload validation and sanitizing.

Each ``validate_*`` function returns a cleaned dict or raises
``ValidationError`` with one ``{field, message}`` entry per problem.
"""
from __future__ import annotations

import re

from cp_analytics.errors import ValidationError

DIFFICULTIES = ('Easy', 'Medium', 'Hard')

MAX_PROBLEM_NAME = 255
MAX_TOPIC = 100
MAX_TIME_TAKEN = 10000
MAX_SANITIZED_LENGTH = 500
MAX_BULK_ITEMS = 100

MAX_EMAIL = 255
MIN_PASSWORD = 8
MAX_PASSWORD = 128

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
_PASSWORD_CLASSES_RE = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)')


def sanitize_string(value):
    """Trim, drop angle brackets, and cap length. Non-strings pass through."""
    if not isinstance(value, str):
        return value
    return value.replace('<', '').replace('>', '').strip()[:MAX_SANITIZED_LENGTH]


def _require_mapping(payload):
    if not isinstance(payload, dict):
        raise ValidationError(
            [{'field': 'body', 'message': 'Request body must be a JSON object'}]
        )


def _parse_int(value):
    # bool is an int subclass; reject it along with floats like 1.5
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r'\s*-?\d+\s*', value):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def submission_errors(payload) -> tuple[dict, list[dict]]:
    """Validate one submission payload without raising.

    Returns:
        ``(cleaned, errors)``; ``cleaned`` is only meaningful when
        ``errors`` is empty.
    """
    if not isinstance(payload, dict):
        return {}, [{'field': 'body', 'message': 'Submission must be an object'}]

    errors = []
    cleaned = {}

    problem_name = payload.get('problem_name')
    if not isinstance(problem_name, str) or not sanitize_string(problem_name):
        errors.append({'field': 'problem_name', 'message': 'Problem name is required'})
    elif len(problem_name.strip()) > MAX_PROBLEM_NAME:
        errors.append({
            'field': 'problem_name',
            'message': f'Problem name must be less than {MAX_PROBLEM_NAME} characters',
        })
    else:
        cleaned['problem_name'] = sanitize_string(problem_name)

    difficulty = payload.get('difficulty')
    if difficulty not in DIFFICULTIES:
        errors.append({
            'field': 'difficulty',
            'message': 'Difficulty must be Easy, Medium, or Hard',
        })
    else:
        cleaned['difficulty'] = difficulty

    topic = payload.get('topic')
    if not isinstance(topic, str) or not sanitize_string(topic):
        errors.append({'field': 'topic', 'message': 'Topic is required'})
    elif len(topic.strip()) > MAX_TOPIC:
        errors.append({
            'field': 'topic',
            'message': f'Topic must be less than {MAX_TOPIC} characters',
        })
    else:
        cleaned['topic'] = sanitize_string(topic)

    time_taken = _parse_int(payload.get('time_taken'))
    if time_taken is None or not 0 <= time_taken <= MAX_TIME_TAKEN:
        errors.append({
            'field': 'time_taken',
            'message': (
                'Time taken must be a positive integer between 0 and '
                f'{MAX_TIME_TAKEN} minutes'
            ),
        })
    else:
        cleaned['time_taken'] = time_taken

    return cleaned, errors


def validate_submission(payload) -> dict:
    cleaned, errors = submission_errors(payload)
    if errors:
        raise ValidationError(errors)
    return cleaned


def validate_bulk(payload) -> list:
    """Check the bulk envelope; items are validated one by one later."""
    _require_mapping(payload)
    items = payload.get('submissions')
    if not isinstance(items, list) or not 1 <= len(items) <= MAX_BULK_ITEMS:
        raise ValidationError(
            [{
                'field': 'submissions',
                'message': f'Submissions must be an array with 1-{MAX_BULK_ITEMS} items',
            }],
            message='Submissions must be a non-empty array',
        )
    return items


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _email_errors(email):
    if not isinstance(email, str) or not _EMAIL_RE.match(email.strip()):
        return [{'field': 'email', 'message': 'Please provide a valid email address'}]
    if len(email.strip()) > MAX_EMAIL:
        return [{
            'field': 'email',
            'message': f'Email must be less than {MAX_EMAIL} characters',
        }]
    return []


def validate_register(payload) -> dict:
    _require_mapping(payload)
    email = payload.get('email')
    password = payload.get('password')

    errors = _email_errors(email)
    if not isinstance(password, str) or len(password) < MIN_PASSWORD:
        errors.append({
            'field': 'password',
            'message': f'Password must be at least {MIN_PASSWORD} characters',
        })
    elif len(password) > MAX_PASSWORD:
        errors.append({
            'field': 'password',
            'message': f'Password must be less than {MAX_PASSWORD} characters',
        })
    elif not _PASSWORD_CLASSES_RE.match(password):
        errors.append({
            'field': 'password',
            'message': (
                'Password must contain at least one uppercase letter, '
                'one lowercase letter, and one number'
            ),
        })

    if errors:
        raise ValidationError(errors)
    return {'email': normalize_email(email), 'password': password}


def validate_login(payload) -> dict:
    _require_mapping(payload)
    email = payload.get('email')
    password = payload.get('password')

    errors = _email_errors(email)
    if not isinstance(password, str) or not password:
        errors.append({'field': 'password', 'message': 'Password is required'})

    if errors:
        raise ValidationError(errors)
    return {'email': normalize_email(email), 'password': password}
