"""
Submission analyzer.

Folds a user's practice log into three aggregates: a count per difficulty
label, the topics practiced less often than the per-topic average, and a
short greedy ranking of which of those weak topics to practice next.

Everything here is pure: records go in, a result value comes out, and every
failure is returned as an ``AnalysisError`` value instead of being raised.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Rank used to break priority ties: easier topics are recommended first.
DIFFICULTY_RANK = {
    "Easy": 1,
    "Medium": 2,
    "Hard": 3,
}
DEFAULT_DIFFICULTY_RANK = 2

# Representative difficulty assumed for a record with no difficulty label.
FALLBACK_DIFFICULTY = "Medium"

MAX_RECOMMENDATIONS = 5


@dataclass(frozen=True)
class SubmissionRecord:
    """The two fields of a submission the analyzer reads."""

    difficulty: str | None = None
    topic: str | None = None

    @classmethod
    def coerce(cls, source) -> SubmissionRecord:
        """Build a record from a mapping row or an ORM-style object.

        Raises:
            TypeError: if ``source`` carries neither field.
        """
        if isinstance(source, cls):
            return source
        if isinstance(source, Mapping):
            return cls(source.get("difficulty"), source.get("topic"))
        if hasattr(source, "difficulty") or hasattr(source, "topic"):
            return cls(
                getattr(source, "difficulty", None),
                getattr(source, "topic", None),
            )
        raise TypeError(
            f"unsupported submission record of type {type(source).__name__}"
        )


@dataclass(frozen=True)
class AnalysisResult:
    difficulty_breakdown: dict[str, int] = field(default_factory=dict)
    weak_topics: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> AnalysisResult:
        return cls()

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys the frontend expects."""
        return {
            "difficultyBreakdown": dict(self.difficulty_breakdown),
            "weakTopics": list(self.weak_topics),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class AnalysisError:
    """Aggregation failed; ``message`` describes the cause."""

    message: str
    kind: str = "analysis_error"


@dataclass(frozen=True)
class InvalidInputError(AnalysisError):
    """The argument was not a sequence of records."""

    kind: str = "invalid_input"


def _is_sequence(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def difficulty_breakdown(records: Sequence[SubmissionRecord]) -> dict[str, int]:
    """Count records per difficulty label, in first-seen order."""
    result: dict[str, int] = {}
    for record in records:
        label = record.difficulty or ""
        result[label] = result.get(label, 0) + 1
    return result


def topic_weakness_detection(records: Sequence[SubmissionRecord]) -> list[str]:
    """Return topics practiced strictly less often than the average topic.

    The average is ``len(records) / number of distinct topics``. Topics are
    returned in the order they first appear in ``records``.
    """
    if not records:
        return []

    topic_count: dict[str, int] = {}
    for record in records:
        topic = record.topic or ""
        topic_count[topic] = topic_count.get(topic, 0) + 1

    num_topics = len(topic_count)
    average = len(records) / num_topics if num_topics else 0

    return [topic for topic, count in topic_count.items() if count < average]


def greedy_recommendations(
    records: Sequence[SubmissionRecord],
    weak_topics: Sequence[str],
    limit: int = MAX_RECOMMENDATIONS,
) -> list[str]:
    """Rank weak topics by how far they fall below the average.

    Each weak topic gets ``priority = average - count``. Higher priority
    comes first; equal priorities prefer the topic whose first recorded
    attempt was easier. At most ``limit`` topics are returned.
    """
    if not weak_topics:
        return []

    topic_count: dict[str, int] = {}
    topic_difficulty: dict[str, str] = {}
    for record in records:
        topic = record.topic or ""
        topic_count[topic] = topic_count.get(topic, 0) + 1
        # First record seen for a topic decides its representative difficulty
        topic_difficulty.setdefault(topic, record.difficulty or FALLBACK_DIFFICULTY)

    distinct_topics = len(topic_count)
    average = len(records) / distinct_topics if distinct_topics else 1

    ranked = []
    for topic in weak_topics:
        priority = average - topic_count.get(topic, 0)
        rank = DIFFICULTY_RANK.get(
            topic_difficulty.get(topic, FALLBACK_DIFFICULTY), DEFAULT_DIFFICULTY_RANK
        )
        ranked.append((priority, rank, topic))

    # sort() is stable, so full ties keep their first-seen order
    ranked.sort(key=lambda item: (-item[0], item[1]))
    return [topic for _, _, topic in ranked[:limit]]


class SubmissionAnalyzer:
    """Computes difficulty, weak-topic and recommendation aggregates.

    Args:
        max_recommendations: Upper bound on the recommendation list length.
    """

    def __init__(self, max_recommendations: int = MAX_RECOMMENDATIONS):
        self.max_recommendations = max_recommendations

    def analyze(self, records) -> AnalysisResult | AnalysisError:
        """Analyze one user's submissions.

        Args:
            records: A sequence of ``SubmissionRecord``, mapping rows, or
                objects with ``difficulty``/``topic`` attributes.

        Returns:
            An ``AnalysisResult`` on success. ``InvalidInputError`` when
            ``records`` is not a sequence, ``AnalysisError`` for any other
            failure. Nothing is raised.
        """
        if not _is_sequence(records):
            logger.warning(
                "Rejected analyzer input of type %s", type(records).__name__
            )
            return InvalidInputError(
                "Invalid input: submissions must be a sequence"
            )

        try:
            snapshot = tuple(SubmissionRecord.coerce(r) for r in records)
            breakdown = difficulty_breakdown(snapshot)
            weak_topics = topic_weakness_detection(snapshot)
            recommendations = greedy_recommendations(
                snapshot, weak_topics, self.max_recommendations
            )
        except Exception as e:
            logger.exception("Submission analysis failed")
            return AnalysisError(f"Analysis error: {e}")

        return AnalysisResult(
            difficulty_breakdown=breakdown,
            weak_topics=weak_topics,
            recommendations=recommendations,
        )


def analyze_submissions(records) -> AnalysisResult | AnalysisError:
    """Shortcut for ``SubmissionAnalyzer().analyze(records)``."""
    return SubmissionAnalyzer().analyze(records)
