from datetime import datetime

from cp_analytics.extensions import db


class Submission(db.Model):
    """A single logged practice attempt."""

    __tablename__ = 'submissions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    problem_name = db.Column(db.String(255), nullable=False)
    difficulty = db.Column(db.String(20), nullable=True, index=True)
    topic = db.Column(db.String(100), nullable=True, index=True)
    time_taken = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    user = db.relationship('User', back_populates='submissions')

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'problem_name': self.problem_name,
            'difficulty': self.difficulty,
            'topic': self.topic,
            'time_taken': self.time_taken,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return (
            f'<Submission {self.problem_name!r} '
            f'difficulty={self.difficulty!r} topic={self.topic!r}>'
        )
