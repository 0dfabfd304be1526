"""
Analysis module for CP Analytics.

Aggregates a user's practice log into difficulty breakdowns, weak-topic
detection and greedy topic recommendations.
"""
from .submission_analyzer import (
    AnalysisError,
    AnalysisResult,
    InvalidInputError,
    SubmissionAnalyzer,
    SubmissionRecord,
    analyze_submissions,
)

__all__ = [
    'AnalysisError',
    'AnalysisResult',
    'InvalidInputError',
    'SubmissionAnalyzer',
    'SubmissionRecord',
    'analyze_submissions',
]
