from flask import Blueprint
from flask_login import login_required, current_user

from cp_analytics.analysis import AnalysisError
from cp_analytics.errors import ApiError, ForbiddenError
from cp_analytics.models import User
from cp_analytics.responses import error_response, success_response
from cp_analytics.services.analytics_service import AnalyticsService

analytics_bp = Blueprint('analytics', __name__, url_prefix='/analytics')


@analytics_bp.route('/<username>')
@login_required
def user_analytics(username):
    """Difficulty breakdown, weak topics and recommendations for a user.

    ``username`` is the account email; only the owner may read it.
    """
    user = User.find_by_email(username)
    if user is None:
        raise ApiError('User not found', code='USER_NOT_FOUND', status_code=404)
    if user.id != current_user.id:
        raise ForbiddenError()

    result, count = AnalyticsService.get_user_analytics(user.id)
    if isinstance(result, AnalysisError):
        return error_response('ANALYTICS_ERROR', result.message, 500)

    message = 'Analytics retrieved successfully' if count else 'No submissions found'
    return success_response(result.to_dict(), message)
