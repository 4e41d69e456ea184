"""
Tests for Agency Aggregation and Deregulation Scoring
=====================================================

Version: 0.1.0
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest

from services.regulations_analyzer.metrics import (
    AgencyAggregator,
    AgencyStats,
    DeregulationScorer,
    DeregulationWeights,
    MetricName,
)


NOW = datetime(2025, 1, 1, tzinfo=UTC)


@dataclass
class FakeRegulation:
    word_count: int | None
    complexity: float | None
    last_updated: datetime | None


def make_stats(**overrides: float) -> AgencyStats:
    values = {
        "agency_id": 1,
        "regulation_count": 3,
        "total_words": 600,
        "avg_words": 200.0,
        "avg_complexity": 20.0,
        "update_frequency_percent": 33.3,
    }
    values.update(overrides)
    return AgencyStats(**values)  # type: ignore[arg-type]


# ============================================================================
# Aggregator Tests
# ============================================================================


class TestAgencyAggregator:
    """Tests for AgencyAggregator."""

    @pytest.fixture
    def aggregator(self) -> AgencyAggregator:
        return AgencyAggregator(recent_days=365)

    def test_aggregate(self, aggregator: AgencyAggregator) -> None:
        """Test counts, averages and update frequency."""
        regulations = [
            FakeRegulation(100, 10.0, NOW - timedelta(days=10)),
            FakeRegulation(200, 20.0, NOW - timedelta(days=400)),
            FakeRegulation(300, 30.0, None),
        ]

        stats = aggregator.aggregate(5, regulations, now=NOW)

        assert stats == AgencyStats(
            agency_id=5,
            regulation_count=3,
            total_words=600,
            avg_words=200.0,
            avg_complexity=20.0,
            update_frequency_percent=33.3,
        )

    def test_empty_agency_has_no_stats(self, aggregator: AgencyAggregator) -> None:
        """Test agencies without regulations are skipped, not zero-filled."""
        assert aggregator.aggregate(5, [], now=NOW) is None

    def test_missing_values_count_as_zero(self, aggregator: AgencyAggregator) -> None:
        stats = aggregator.aggregate(1, [FakeRegulation(None, None, None)], now=NOW)

        assert stats is not None
        assert stats.total_words == 0
        assert stats.avg_complexity == 0.0
        assert stats.update_frequency_percent == 0.0

    def test_recent_window_is_exclusive(self, aggregator: AgencyAggregator) -> None:
        """Test a timestamp exactly on the window edge is not recent."""
        assert aggregator.is_recent(NOW - timedelta(days=365), NOW) is False
        assert aggregator.is_recent(NOW - timedelta(days=364), NOW) is True
        assert aggregator.is_recent(None, NOW) is False

    def test_naive_timestamps_are_utc(self, aggregator: AgencyAggregator) -> None:
        """Test naive timestamps (as SQLite returns them) compare as UTC."""
        naive = (NOW - timedelta(days=1)).replace(tzinfo=None)
        assert aggregator.is_recent(naive, NOW) is True

    def test_to_metrics(self) -> None:
        """Test every cached metric name is emitted."""
        metrics = AgencyAggregator.to_metrics(make_stats(), 30.4)

        assert metrics == {
            MetricName.TOTAL_WORDS: 600.0,
            MetricName.AVG_WORDS: 200.0,
            MetricName.AVG_COMPLEXITY: 20.0,
            MetricName.UPDATE_FREQUENCY: 33.3,
            MetricName.DEREGULATION_SCORE: 30.4,
            MetricName.REGULATION_COUNT: 3.0,
        }


# ============================================================================
# Deregulation Scorer Tests
# ============================================================================


class TestDeregulationScorer:
    """Tests for DeregulationScorer."""

    @pytest.fixture
    def scorer(self) -> DeregulationScorer:
        return DeregulationScorer()

    def test_weighted_score(self, scorer: DeregulationScorer) -> None:
        """Test the weighted combination of the three factors."""
        # 24 * 0.4 + (200 / 75) * 0.3 + 66.7 * 0.3 = 30.41
        result = scorer.score(make_stats())

        assert result.agency_id == 1
        assert result.score == 30.4

    def test_floor(self, scorer: DeregulationScorer) -> None:
        """Test scores never drop below the floor."""
        stats = make_stats(total_words=0, avg_words=0.0, avg_complexity=0.0, update_frequency_percent=100.0)
        assert scorer.score(stats).score == 10.0

    def test_ceiling(self, scorer: DeregulationScorer) -> None:
        """Test every factor is capped so the score tops out at 100."""
        stats = make_stats(
            regulation_count=1,
            total_words=100_000,
            avg_words=100_000.0,
            avg_complexity=100.0,
            update_frequency_percent=0.0,
        )
        assert scorer.score(stats).score == 100.0

    def test_stale_agencies_score_higher(self, scorer: DeregulationScorer) -> None:
        fresh = scorer.score(make_stats(update_frequency_percent=100.0))
        stale = scorer.score(make_stats(update_frequency_percent=0.0))

        assert stale.score > fresh.score

    @pytest.mark.parametrize("avg_complexity", [0.0, 15.0, 100.0])
    @pytest.mark.parametrize("update_frequency", [0.0, 50.0, 100.0])
    @pytest.mark.parametrize("total_words", [0, 3_000, 10_000_000])
    def test_score_within_bounds(
        self,
        scorer: DeregulationScorer,
        avg_complexity: float,
        update_frequency: float,
        total_words: int,
    ) -> None:
        stats = make_stats(
            total_words=total_words,
            avg_complexity=avg_complexity,
            update_frequency_percent=update_frequency,
        )
        assert 10.0 <= scorer.score(stats).score <= 100.0

    def test_zero_regulations_rejected(self, scorer: DeregulationScorer) -> None:
        """Test scoring an empty agency is a caller error."""
        with pytest.raises(ValueError):
            scorer.score(make_stats(regulation_count=0, total_words=0))

    def test_custom_weights(self) -> None:
        """Test weights are configurable."""
        scorer = DeregulationScorer(DeregulationWeights(complexity=1.0, word_count=0.0, staleness=0.0))
        assert scorer.score(make_stats()).score == 24.0
