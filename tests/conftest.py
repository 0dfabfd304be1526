"""Shared test fixtures for the CP Analytics test suite."""

from datetime import datetime, timedelta

import pytest
from flask import g

from cp_analytics import create_app
from cp_analytics.extensions import db as _db
from cp_analytics.models import User, Submission
from cp_analytics.services.token_service import generate_token

TEST_PASSWORD = 'Password123'


@pytest.fixture()
def app():
    """Create a Flask application configured for testing."""
    application = create_app('testing')
    yield application


@pytest.fixture()
def db(app):
    """Provide a clean database for each test."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def client(app, db):
    """Provide a Flask test client."""

    # The ``db`` fixture keeps an app context open, which test-client
    # requests reuse; drop Flask-Login's per-context user cache after each
    # request so every request authenticates from its own headers.
    @app.teardown_request
    def _reset_login_cache(exc=None):
        g.pop('_login_user', None)

    return app.test_client()


def make_user(db, email, password=TEST_PASSWORD):
    user = User(email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def bearer(user_id):
    return {'Authorization': f'Bearer {generate_token(user_id)}'}


@pytest.fixture()
def user(db):
    """A registered user; returns plain values safe across request contexts."""
    u = make_user(db, 'alice@example.com')
    return {'id': u.id, 'email': u.email, 'headers': bearer(u.id)}


@pytest.fixture()
def other_user(db):
    u = make_user(db, 'mallory@example.com')
    return {'id': u.id, 'email': u.email, 'headers': bearer(u.id)}


@pytest.fixture()
def sample_data(db, user):
    """Four submissions for ``user`` matching the documented scenario.

    Topics Arrays, Arrays, DP, Graphs with difficulties Easy, Easy, Hard,
    Medium. Rows are inserted oldest first.
    """
    now = datetime.utcnow()
    rows = [
        ('Two Sum', 'Easy', 'Arrays', 10),
        ('Contains Duplicate', 'Easy', 'Arrays', 5),
        ('Edit Distance', 'Hard', 'DP', 45),
        ('Clone Graph', 'Medium', 'Graphs', 30),
    ]
    submissions = []
    for offset, (name, difficulty, topic, minutes) in enumerate(rows):
        submissions.append(Submission(
            user_id=user['id'],
            problem_name=name,
            difficulty=difficulty,
            topic=topic,
            time_taken=minutes,
            created_at=now - timedelta(minutes=len(rows) - offset),
        ))
    db.session.add_all(submissions)
    db.session.commit()

    return {
        'user': user,
        'submission_ids': [s.id for s in submissions],
    }
