"""
Agency Aggregation
==================

Rolls an agency's regulations up into the per-agency statistics that the
deregulation scorer and the API consume.

Version: 0.1.0
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from services.regulations_analyzer.metrics.text import round_half_up


class MeasuredRegulation(Protocol):
    """The fields of a regulation that aggregation reads."""

    word_count: int | None
    complexity: float | None
    last_updated: datetime | None


@dataclass(frozen=True)
class AgencyStats:
    """Aggregate statistics for one agency."""

    agency_id: int
    regulation_count: int
    total_words: int
    avg_words: float
    avg_complexity: float
    update_frequency_percent: float


class MetricName:
    """Names of the cached per-agency analysis metrics."""

    TOTAL_WORDS = "total_words"
    AVG_WORDS = "avg_words_per_regulation"
    AVG_COMPLEXITY = "avg_complexity_score"
    UPDATE_FREQUENCY = "update_frequency_percent"
    DEREGULATION_SCORE = "deregulation_opportunity_score"
    REGULATION_COUNT = "regulation_count"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class AgencyAggregator:
    """
    Computes count, word totals, average complexity and update frequency.

    Agencies without regulations produce no statistics at all.
    """

    def __init__(self, recent_days: int = 365) -> None:
        """
        Initialize the aggregator.

        Args:
            recent_days: Window (in days) counted as a recent update
        """
        self.recent_days = recent_days

    def is_recent(self, last_updated: datetime | None, now: datetime) -> bool:
        """Whether a timestamp falls inside the recent-update window."""
        if last_updated is None:
            return False
        return _as_utc(last_updated) > _as_utc(now) - timedelta(days=self.recent_days)

    def aggregate(
        self,
        agency_id: int,
        regulations: Sequence[MeasuredRegulation],
        now: datetime | None = None,
    ) -> AgencyStats | None:
        """
        Aggregate one agency's regulations.

        Args:
            agency_id: Agency the regulations belong to
            regulations: Every regulation of the agency
            now: Reference time for the recent-update window

        Returns:
            AgencyStats, or None when the agency has no regulations
        """
        count = len(regulations)
        if count == 0:
            return None

        now = now or datetime.now(UTC)

        total_words = sum(reg.word_count or 0 for reg in regulations)
        total_complexity = sum(reg.complexity or 0.0 for reg in regulations)
        recent = sum(1 for reg in regulations if self.is_recent(reg.last_updated, now))

        return AgencyStats(
            agency_id=agency_id,
            regulation_count=count,
            total_words=total_words,
            avg_words=round_half_up(total_words / count),
            avg_complexity=round_half_up(total_complexity / count),
            update_frequency_percent=round_half_up(recent / count * 100),
        )

    @staticmethod
    def to_metrics(stats: AgencyStats, deregulation_score: float) -> dict[str, float]:
        """Render statistics and score as the cached metric rows."""
        return {
            MetricName.TOTAL_WORDS: float(stats.total_words),
            MetricName.AVG_WORDS: stats.avg_words,
            MetricName.AVG_COMPLEXITY: stats.avg_complexity,
            MetricName.UPDATE_FREQUENCY: stats.update_frequency_percent,
            MetricName.DEREGULATION_SCORE: deregulation_score,
            MetricName.REGULATION_COUNT: float(stats.regulation_count),
        }
