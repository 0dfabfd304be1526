from __future__ import annotations

import logging
import math

from cp_analytics.extensions import db
from cp_analytics.models import Submission
from cp_analytics.validators import submission_errors

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORTABLE_FIELDS = ('created_at', 'difficulty', 'topic', 'time_taken', 'problem_name')


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class SubmissionService:
    @staticmethod
    def create(user_id: int, data: dict) -> Submission:
        submission = Submission(user_id=user_id, **data)
        db.session.add(submission)
        db.session.commit()
        logger.info(f'User {user_id} logged submission {submission.id}')
        return submission

    @staticmethod
    def get(submission_id: int) -> Submission | None:
        return db.session.get(Submission, submission_id)

    @staticmethod
    def update(submission: Submission, data: dict) -> Submission:
        for key, value in data.items():
            setattr(submission, key, value)
        db.session.commit()
        return submission

    @staticmethod
    def delete(submission: Submission) -> None:
        db.session.delete(submission)
        db.session.commit()
        logger.info(f'User {submission.user_id} deleted submission {submission.id}')

    @staticmethod
    def list_for_user(
        user_id: int,
        page=1,
        limit=DEFAULT_PAGE_SIZE,
        difficulty: str | None = None,
        topic: str | None = None,
        search: str | None = None,
        sort_by: str | None = 'created_at',
        sort_order: str | None = 'DESC',
    ) -> dict:
        """One page of a user's submissions plus pagination metadata.

        Args:
            page: 1-based page number; invalid values fall back to 1.
            limit: Page size, capped at ``MAX_PAGE_SIZE``.
            difficulty, topic: Exact-match filters.
            search: Case-insensitive substring of ``problem_name``.
            sort_by: One of ``SORTABLE_FIELDS``; anything else sorts by
                ``created_at``.
            sort_order: ``ASC`` or ``DESC`` (default).

        Returns:
            Dict with ``items`` (Submission list) and ``pagination``
            (``page``, ``limit``, ``total``, ``totalPages``).
        """
        page = _positive_int(page, 1)
        limit = min(_positive_int(limit, DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)

        query = Submission.query.filter_by(user_id=user_id)
        if difficulty:
            query = query.filter(Submission.difficulty == difficulty)
        if topic:
            query = query.filter(Submission.topic == topic)
        if search:
            query = query.filter(Submission.problem_name.ilike(f'%{search}%'))

        column = getattr(
            Submission, sort_by if sort_by in SORTABLE_FIELDS else 'created_at'
        )
        if (sort_order or '').upper() == 'ASC':
            query = query.order_by(column.asc(), Submission.id.asc())
        else:
            query = query.order_by(column.desc(), Submission.id.desc())

        pagination = query.paginate(page=page, per_page=limit, error_out=False)
        return {
            'items': pagination.items,
            'pagination': {
                'page': page,
                'limit': limit,
                'total': pagination.total,
                'totalPages': math.ceil(pagination.total / limit),
            },
        }

    @staticmethod
    def all_for_user(user_id: int) -> list[Submission]:
        """Every submission of a user, newest first."""
        return (
            Submission.query.filter_by(user_id=user_id)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .all()
        )

    @staticmethod
    def bulk_create(user_id: int, items: list) -> tuple[list[Submission], list[dict]]:
        """Insert every valid item; invalid ones are skipped, not fatal.

        Returns:
            ``(created, skipped)`` where ``skipped`` holds ``{index, errors}``
            for each rejected item.
        """
        created = []
        skipped = []
        for index, item in enumerate(items):
            cleaned, errors = submission_errors(item)
            if errors:
                skipped.append({'index': index, 'errors': errors})
                continue
            submission = Submission(user_id=user_id, **cleaned)
            db.session.add(submission)
            created.append(submission)

        if created:
            db.session.commit()
        if skipped:
            logger.warning(
                f'Bulk import for user {user_id}: skipped {len(skipped)} '
                f'of {len(items)} item(s)'
            )
        return created, skipped
