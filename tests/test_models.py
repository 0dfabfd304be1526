"""Tests for database models: CRUD, relationships, constraints."""

import pytest
from sqlalchemy.exc import IntegrityError

from cp_analytics.models import User, Submission


# ──────────────────────────────────────────────
# User model
# ──────────────────────────────────────────────

class TestUser:
    def test_set_and_check_password(self, app, db):
        user = User(email='alice@test.com')
        user.set_password('Secret123')
        db.session.add(user)
        db.session.commit()

        assert user.check_password('Secret123')
        assert not user.check_password('wrong')

    def test_unique_email(self, app, db):
        u1 = User(email='same@test.com')
        u1.set_password('pw')
        db.session.add(u1)
        db.session.commit()

        u2 = User(email='same@test.com')
        u2.set_password('pw')
        db.session.add(u2)
        with pytest.raises(IntegrityError):
            db.session.commit()

    def test_find_by_email_normalizes(self, app, db):
        user = User(email='bob@test.com')
        user.set_password('pw')
        db.session.add(user)
        db.session.commit()

        assert User.find_by_email('  BOB@test.com ') is user
        assert User.find_by_email('') is None
        assert User.find_by_email('nobody@test.com') is None

    def test_repr_and_dict(self, app, db):
        user = User(email='c@test.com')
        assert 'c@test.com' in repr(user)
        assert user.to_dict() == {'id': None, 'email': 'c@test.com'}


# ──────────────────────────────────────────────
# Submission model
# ──────────────────────────────────────────────

class TestSubmission:
    def test_to_dict(self, app, db, sample_data):
        sub = db.session.get(Submission, sample_data['submission_ids'][2])
        data = sub.to_dict()
        assert data['problem_name'] == 'Edit Distance'
        assert data['difficulty'] == 'Hard'
        assert data['topic'] == 'DP'
        assert data['time_taken'] == 45
        assert data['user_id'] == sample_data['user']['id']
        assert 'T' in data['created_at']

    def test_user_relationship(self, app, db, sample_data):
        user = db.session.get(User, sample_data['user']['id'])
        assert user.submissions.count() == 4
        assert db.session.get(Submission, sample_data['submission_ids'][0]).user is user

    def test_deleting_user_removes_submissions(self, app, db, sample_data):
        user = db.session.get(User, sample_data['user']['id'])
        db.session.delete(user)
        db.session.commit()
        assert Submission.query.count() == 0

    def test_nullable_labels(self, app, db, user):
        sub = Submission(user_id=user['id'], problem_name='Mystery', time_taken=1)
        db.session.add(sub)
        db.session.commit()
        assert sub.difficulty is None
        assert sub.topic is None
        assert 'Mystery' in repr(sub)
