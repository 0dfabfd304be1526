from .user import User
from .submission import Submission

__all__ = [
    'User',
    'Submission',
]
