from __future__ import annotations

from datetime import datetime

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from cp_analytics.extensions import db


class User(UserMixin, db.Model):
    """Account that owns a log of practice submissions."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    submissions = db.relationship(
        'Submission',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )

    def set_password(self, password: str) -> None:
        """Hash and store the user's password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a plaintext password against the stored hash."""
        return check_password_hash(self.password_hash, password)

    @classmethod
    def find_by_email(cls, email: str) -> User | None:
        if not email:
            return None
        return cls.query.filter_by(email=email.strip().lower()).first()

    def to_dict(self) -> dict:
        return {'id': self.id, 'email': self.email}

    def __repr__(self) -> str:
        return f'<User {self.email!r}>'
