from __future__ import annotations

import logging

from cp_analytics.analysis import AnalysisError, AnalysisResult, SubmissionAnalyzer
from cp_analytics.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)


class AnalyticsService:
    @staticmethod
    def get_user_analytics(user_id: int) -> tuple[AnalysisResult | AnalysisError, int]:
        """Analyze every submission of a user.

        Returns:
            ``(result, submission_count)``. A user with no submissions gets
            an empty result without invoking the analyzer.
        """
        submissions = SubmissionService.all_for_user(user_id)
        if not submissions:
            return AnalysisResult.empty(), 0

        result = SubmissionAnalyzer().analyze(submissions)
        if isinstance(result, AnalysisError):
            logger.error(f'Analytics failed for user {user_id}: {result.message}')
        return result, len(submissions)
