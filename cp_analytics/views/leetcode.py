import logging

from flask import Blueprint, current_app, request

from cp_analytics.leetcode import LeetCodeAPIError, LeetCodeClient
from cp_analytics.responses import error_response, success_response

logger = logging.getLogger(__name__)

leetcode_bp = Blueprint('leetcode', __name__, url_prefix='/leetcode')


def _client():
    return LeetCodeClient.from_config(current_app.config)


@leetcode_bp.errorhandler(LeetCodeAPIError)
def handle_leetcode_error(e):
    logger.error(f'LeetCode proxy failed for {request.path}: {e}')
    return error_response('LEETCODE_API_ERROR', str(e), 502, {'upstream_status': e.status_code})


def _limit_arg(default=20):
    limit = request.args.get('limit', default, type=int)
    if limit is None or limit <= 0:
        return default
    return limit


@leetcode_bp.route('/<username>')
def profile(username):
    return success_response(
        _client().profile(username), 'LeetCode profile retrieved successfully'
    )


@leetcode_bp.route('/<username>/profile')
def full_profile(username):
    return success_response(
        _client().full_profile(username), 'LeetCode full profile retrieved successfully'
    )


@leetcode_bp.route('/<username>/badges')
def badges(username):
    return success_response(
        _client().badges(username), 'LeetCode badges retrieved successfully'
    )


@leetcode_bp.route('/<username>/solved')
def solved(username):
    return success_response(
        _client().solved(username), 'LeetCode solved count retrieved successfully'
    )


@leetcode_bp.route('/<username>/contest')
def contest(username):
    return success_response(
        _client().contest(username), 'LeetCode contest details retrieved successfully'
    )


@leetcode_bp.route('/<username>/contest/history')
def contest_history(username):
    return success_response(
        _client().contest_history(username),
        'LeetCode contest history retrieved successfully',
    )


@leetcode_bp.route('/<username>/submission')
def submissions(username):
    return success_response(
        _client().submissions(username, _limit_arg()),
        'LeetCode submissions retrieved successfully',
    )


@leetcode_bp.route('/<username>/acSubmission')
def ac_submissions(username):
    return success_response(
        _client().ac_submissions(username, _limit_arg()),
        'LeetCode accepted submissions retrieved successfully',
    )


@leetcode_bp.route('/<username>/calendar')
def calendar(username):
    year = request.args.get('year', type=int)
    return success_response(
        _client().calendar(username, year), 'LeetCode calendar retrieved successfully'
    )


@leetcode_bp.route('/<username>/skill')
def skills(username):
    return success_response(
        _client().skills(username), 'LeetCode skills retrieved successfully'
    )


@leetcode_bp.route('/<username>/language')
def languages(username):
    return success_response(
        _client().languages(username), 'LeetCode languages retrieved successfully'
    )


@leetcode_bp.route('/<username>/progress')
def progress(username):
    return success_response(
        _client().progress(username), 'LeetCode progress retrieved successfully'
    )


@leetcode_bp.route('/<username>/analytics')
def analytics(username):
    return success_response(
        _client().analytics(username), 'LeetCode analytics retrieved successfully'
    )
