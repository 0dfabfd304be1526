"""Tests for payload validation helpers."""

import pytest

from cp_analytics.errors import ValidationError
from cp_analytics.validators import (
    sanitize_string,
    submission_errors,
    validate_bulk,
    validate_login,
    validate_register,
    validate_submission,
)


class TestSanitize:
    def test_strips_and_removes_brackets(self):
        assert sanitize_string('< x >') == 'x'
        assert sanitize_string('  <script>x</script> ') == 'scriptx/script'

    def test_caps_length(self):
        assert len(sanitize_string('a' * 600)) == 500

    def test_non_string_passthrough(self):
        assert sanitize_string(5) == 5


class TestSubmissionValidation:
    def test_valid(self):
        cleaned = validate_submission({
            'problem_name': ' LRU Cache ',
            'difficulty': 'Medium',
            'topic': 'Design',
            'time_taken': 0,
            'ignored': 'field',
        })
        assert cleaned == {
            'problem_name': 'LRU Cache',
            'difficulty': 'Medium',
            'topic': 'Design',
            'time_taken': 0,
        }

    def test_collects_every_error(self):
        with pytest.raises(ValidationError) as exc:
            validate_submission({})
        fields = [e['field'] for e in exc.value.errors]
        assert fields == ['problem_name', 'difficulty', 'topic', 'time_taken']
        assert exc.value.status_code == 422

    def test_long_fields(self):
        _, errors = submission_errors({
            'problem_name': 'x' * 256,
            'difficulty': 'Easy',
            'topic': 'y' * 101,
            'time_taken': 1,
        })
        assert [e['field'] for e in errors] == ['problem_name', 'topic']

    def test_difficulty_is_case_sensitive(self):
        _, errors = submission_errors({
            'problem_name': 'A', 'difficulty': 'easy', 'topic': 'B', 'time_taken': 1,
        })
        assert [e['field'] for e in errors] == ['difficulty']

    def test_float_minutes(self):
        cleaned, errors = submission_errors({
            'problem_name': 'A', 'difficulty': 'Easy', 'topic': 'B', 'time_taken': 3.0,
        })
        assert not errors
        assert cleaned['time_taken'] == 3
        _, errors = submission_errors({
            'problem_name': 'A', 'difficulty': 'Easy', 'topic': 'B', 'time_taken': 3.5,
        })
        assert errors

    def test_non_mapping(self):
        _, errors = submission_errors(['not', 'a', 'dict'])
        assert errors[0]['field'] == 'body'

    def test_markup_only_fields_are_empty(self):
        _, errors = submission_errors({
            'problem_name': '<>', 'difficulty': 'Easy', 'topic': ' <<>> ', 'time_taken': 1,
        })
        assert [e['field'] for e in errors] == ['problem_name', 'topic']
        assert errors[0]['message'] == 'Problem name is required'


class TestBulkValidation:
    def test_returns_items(self):
        assert validate_bulk({'submissions': [{}]}) == [{}]

    def test_rejects_missing(self):
        with pytest.raises(ValidationError):
            validate_bulk({})


class TestAccountValidation:
    def test_register_normalizes_email(self):
        data = validate_register({'email': ' Foo@Bar.COM ', 'password': 'Abcdefg1'})
        assert data == {'email': 'foo@bar.com', 'password': 'Abcdefg1'}

    def test_register_password_too_long(self):
        with pytest.raises(ValidationError) as exc:
            validate_register({'email': 'a@b.co', 'password': 'Aa1' + 'x' * 126})
        assert 'less than 128' in exc.value.errors[0]['message']

    def test_register_long_email(self):
        with pytest.raises(ValidationError):
            validate_register({'email': 'a' * 250 + '@b.com', 'password': 'Abcdefg1'})

    def test_login_requires_password(self):
        with pytest.raises(ValidationError) as exc:
            validate_login({'email': 'a@b.co', 'password': ''})
        assert [e['field'] for e in exc.value.errors] == ['password']
