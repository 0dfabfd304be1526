"""Seed a demo account with a practice log.
Run with: python seed_data.py
"""
import os
import sys
from datetime import datetime, timedelta

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from cp_analytics import create_app
from cp_analytics.extensions import db
from cp_analytics.models import User, Submission

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "DemoPass123"

SUBMISSIONS = [
    {"problem_name": "Two Sum", "difficulty": "Easy", "topic": "Arrays", "time_taken": 12},
    {"problem_name": "Best Time to Buy and Sell Stock", "difficulty": "Easy", "topic": "Arrays", "time_taken": 15},
    {"problem_name": "Product of Array Except Self", "difficulty": "Medium", "topic": "Arrays", "time_taken": 30},
    {"problem_name": "Container With Most Water", "difficulty": "Medium", "topic": "Two Pointers", "time_taken": 25},
    {"problem_name": "3Sum", "difficulty": "Medium", "topic": "Two Pointers", "time_taken": 40},
    {"problem_name": "Climbing Stairs", "difficulty": "Easy", "topic": "Dynamic Programming", "time_taken": 10},
    {"problem_name": "Number of Islands", "difficulty": "Medium", "topic": "Graphs", "time_taken": 35},
    {"problem_name": "Valid Parentheses", "difficulty": "Easy", "topic": "Stack", "time_taken": 8},
    {"problem_name": "Median of Two Sorted Arrays", "difficulty": "Hard", "topic": "Binary Search", "time_taken": 60},
]


def seed():
    app = create_app()
    with app.app_context():
        user = User.query.filter_by(email=DEMO_EMAIL).first()
        if user is None:
            user = User(email=DEMO_EMAIL)
            user.set_password(DEMO_PASSWORD)
            db.session.add(user)
            db.session.flush()
            print(f"Created user {DEMO_EMAIL}")

        if user.submissions.count():
            print("Demo submissions already present, skipping")
            return

        now = datetime.utcnow()
        for offset, item in enumerate(SUBMISSIONS):
            db.session.add(Submission(
                user_id=user.id,
                created_at=now - timedelta(days=len(SUBMISSIONS) - offset),
                **item,
            ))
        db.session.commit()
        print(f"Seeded {len(SUBMISSIONS)} submissions for {DEMO_EMAIL}")


if __name__ == "__main__":
    seed()
