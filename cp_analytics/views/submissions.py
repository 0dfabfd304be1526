from flask import Blueprint, request
from flask_login import login_required, current_user

from cp_analytics.errors import ForbiddenError, NotFoundError
from cp_analytics.responses import success_response
from cp_analytics.services.submission_service import SubmissionService
from cp_analytics.validators import validate_bulk, validate_submission

submissions_bp = Blueprint('submissions', __name__, url_prefix='/submissions')


def _owned_submission(submission_id):
    """Load a submission and verify the current user owns it."""
    submission = SubmissionService.get(submission_id)
    if submission is None:
        raise NotFoundError('Submission not found')
    if submission.user_id != current_user.id:
        raise ForbiddenError()
    return submission


@submissions_bp.route('', methods=['POST'])
@login_required
def create():
    data = validate_submission(request.get_json(silent=True))
    submission = SubmissionService.create(current_user.id, data)
    return success_response(
        submission.to_dict(), 'Submission created successfully', 201
    )


@submissions_bp.route('/bulk', methods=['POST'])
@login_required
def bulk_create():
    items = validate_bulk(request.get_json(silent=True))
    created, skipped = SubmissionService.bulk_create(current_user.id, items)
    return success_response(
        [s.to_dict() for s in created],
        f'{len(created)} submission(s) created successfully',
        201,
        details={'skipped': skipped},
    )


@submissions_bp.route('', methods=['GET'])
@login_required
def list_submissions():
    result = SubmissionService.list_for_user(
        current_user.id,
        page=request.args.get('page', 1),
        limit=request.args.get('limit', 10),
        difficulty=request.args.get('difficulty'),
        topic=request.args.get('topic'),
        search=request.args.get('search'),
        sort_by=request.args.get('sortBy', 'created_at'),
        sort_order=request.args.get('sortOrder', 'DESC'),
    )
    return success_response(
        [s.to_dict() for s in result['items']],
        'Submissions retrieved successfully',
        pagination=result['pagination'],
    )


@submissions_bp.route('/all', methods=['GET'])
@login_required
def list_all():
    submissions = SubmissionService.all_for_user(current_user.id)
    return success_response(
        [s.to_dict() for s in submissions],
        'All submissions retrieved successfully',
    )


@submissions_bp.route('/<int:submission_id>', methods=['GET'])
@login_required
def detail(submission_id):
    submission = _owned_submission(submission_id)
    return success_response(submission.to_dict(), 'Submission retrieved successfully')


@submissions_bp.route('/<int:submission_id>', methods=['PUT'])
@login_required
def update(submission_id):
    data = validate_submission(request.get_json(silent=True))
    submission = _owned_submission(submission_id)
    submission = SubmissionService.update(submission, data)
    return success_response(submission.to_dict(), 'Submission updated successfully')


@submissions_bp.route('/<int:submission_id>', methods=['DELETE'])
@login_required
def delete(submission_id):
    submission = _owned_submission(submission_id)
    SubmissionService.delete(submission)
    return success_response({}, 'Submission deleted successfully')
