"""
Performance Analytics Aggregation Engine.

Recomputes a user's analytics snapshot from their complete interview history.
The engine holds no state between calls: every counter it builds lives only
for the duration of one ``compute`` call, so the same history (and the same
``today``) always yields the same snapshot.
"""
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from practice_analytics.exceptions import MalformedFeedbackError
from practice_analytics.models.analytics_models import (
    AnalyticsSnapshot, CategoryStat, InterviewRecord
)
from practice_analytics.services.feedback_parser import parse_feedback_payload
from practice_analytics.utils.logger import get_logger

logger = get_logger(__name__)


class AnalyticsConstants:
    """Constants for analytics calculations."""
    DEFAULT_CATEGORY = "general"
    TOP_FEEDBACK_LIMIT = 5
    FEEDBACK_KEY_LENGTH = 50
    LOW_SCORE_THRESHOLD = 60
    HIGH_SCORE_THRESHOLD = 80

    FUNDAMENTALS_TIP = (
        "Focus on structured responses using the STAR method (Situation, Task, Action, Result) "
        "to improve your scores."
    )
    STRETCH_TIP = (
        "Great progress! Try practicing with higher difficulty levels to challenge yourself "
        "and reach 80%+."
    )
    BREADTH_TIP = (
        "Excellent work! Consider practicing different categories to become a well-rounded "
        "interviewee."
    )


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def round_score(total: int, count: int) -> int:
    """
    Average ``total`` over ``count`` rounding halves away from zero.

    70.5 -> 71 and 60.5 -> 61. Decimal arithmetic keeps the .5 boundary exact.
    """
    average = Decimal(total) / Decimal(count)
    return int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def normalize_category(category: Optional[str]) -> str:
    """Lowercase a category name; blank or missing names go to the default bucket."""
    if not category or not category.strip():
        return AnalyticsConstants.DEFAULT_CATEGORY
    return category.strip().lower()


class AnalyticsEngine:
    """Pure computation from an ordered interview history to one snapshot."""

    def __init__(
        self,
        top_limit: int = AnalyticsConstants.TOP_FEEDBACK_LIMIT,
        key_length: int = AnalyticsConstants.FEEDBACK_KEY_LENGTH,
        low_threshold: int = AnalyticsConstants.LOW_SCORE_THRESHOLD,
        high_threshold: int = AnalyticsConstants.HIGH_SCORE_THRESHOLD
    ):
        self.top_limit = top_limit
        self.key_length = key_length
        self.low_threshold = low_threshold
        self.high_threshold = high_threshold

    def compute(
        self,
        records: Sequence[InterviewRecord],
        today: Optional[date] = None
    ) -> Optional[AnalyticsSnapshot]:
        """
        Compute the snapshot for one user's history.

        Args:
            records: the user's interviews, ascending by creation time
            today: reference date for the streak (defaults to the current UTC date)

        Returns:
            The snapshot, or None when there is no history to summarise.
        """
        if not records:
            logger.info("No interviews found, skipping analytics snapshot")
            return None

        today = today or utc_today()
        scores = [self._score(record) for record in records]

        latest_score = scores[-1]
        previous_score = scores[-2] if len(scores) > 1 else latest_score
        avg_score = round_score(sum(scores), len(scores))

        top_strengths, top_weaknesses, skipped = self._rank_feedback(records)
        dates = self._distinct_dates_desc(records)

        snapshot = AnalyticsSnapshot(
            total_interviews=len(records),
            avg_score=avg_score,
            best_score=max(scores),
            latest_score=latest_score,
            score_improvement=latest_score - previous_score,
            current_streak=self._calculate_streak(dates, today),
            last_interview_date=dates[0] if dates else None,
            category_stats=self._calculate_category_stats(records),
            top_strengths=top_strengths,
            top_weaknesses=top_weaknesses,
            pro_tip=self._select_pro_tip(avg_score),
            skipped_feedback_count=skipped
        )

        if skipped:
            logger.warning(f"Skipped malformed feedback on {skipped} of {len(records)} interviews")
        return snapshot

    @staticmethod
    def _score(record: InterviewRecord) -> int:
        return record.score if record.score is not None else 0

    def _calculate_category_stats(self, records: Iterable[InterviewRecord]) -> Dict[str, CategoryStat]:
        """Running (sum, count) per normalised category, then rounded averages."""
        totals: Dict[str, List[int]] = defaultdict(lambda: [0, 0])

        for record in records:
            bucket = totals[normalize_category(record.category)]
            bucket[0] += self._score(record)
            bucket[1] += 1

        return {
            category: CategoryStat(avg_score=round_score(total, count), count=count)
            for category, (total, count) in totals.items()
        }

    def _rank_feedback(self, records: Iterable[InterviewRecord]) -> Tuple[List[str], List[str], int]:
        """Count truncated strengths/weaknesses across all parseable payloads."""
        strengths: Counter = Counter()
        weaknesses: Counter = Counter()
        skipped = 0

        for record in records:
            try:
                summary = parse_feedback_payload(record.feedback_payload)
            except MalformedFeedbackError as e:
                skipped += 1
                logger.debug(f"Ignoring feedback for interview {record.id}: {e}")
                continue

            strengths.update(text[:self.key_length] for text in summary.strengths)
            weaknesses.update(text[:self.key_length] for text in summary.weaknesses)

        return self._top(strengths), self._top(weaknesses), skipped

    def _top(self, counter: Counter) -> List[str]:
        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
        return [text for text, _ in ranked[:self.top_limit]]

    @staticmethod
    def _distinct_dates_desc(records: Iterable[InterviewRecord]) -> List[date]:
        return sorted({record.interview_date for record in records}, reverse=True)

    @staticmethod
    def _calculate_streak(dates: Sequence[date], today: date) -> int:
        """Consecutive practice days, anchored at today or yesterday."""
        if not dates:
            return 0

        yesterday = today - timedelta(days=1)
        if dates[0] not in (today, yesterday):
            return 0

        streak = 1
        for newer, older in zip(dates, dates[1:]):
            if (newer - older).days > 1:
                break
            streak += 1
        return streak

    def _select_pro_tip(self, avg_score: int) -> str:
        if avg_score < self.low_threshold:
            return AnalyticsConstants.FUNDAMENTALS_TIP
        if avg_score < self.high_threshold:
            return AnalyticsConstants.STRETCH_TIP
        return AnalyticsConstants.BREADTH_TIP
