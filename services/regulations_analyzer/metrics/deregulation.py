"""
Deregulation Opportunity Scoring
================================

Heuristic 10-100 score of how much an agency's regulations invite
simplification or repeal. Higher complexity, longer regulations and fewer
recent updates each raise the score.

Version: 0.1.0
"""

from dataclasses import dataclass

from services.regulations_analyzer.metrics.aggregator import AgencyStats
from services.regulations_analyzer.metrics.text import round_half_up


@dataclass(frozen=True)
class DeregulationWeights:
    """Factor weights, scaling constants and output bounds."""

    complexity: float = 0.4
    word_count: float = 0.3
    staleness: float = 0.3

    complexity_scale: float = 1.2
    words_divisor: float = 75.0
    factor_cap: float = 100.0

    floor: float = 10.0
    ceiling: float = 100.0


@dataclass(frozen=True)
class DeregulationScore:
    """Opportunity score for one agency."""

    agency_id: int
    score: float


class DeregulationScorer:
    """Combines complexity, size and staleness into one opportunity score."""

    def __init__(self, weights: DeregulationWeights | None = None) -> None:
        self.weights = weights or DeregulationWeights()

    def score(self, stats: AgencyStats) -> DeregulationScore:
        """
        Score an agency from its aggregate statistics.

        Raises:
            ValueError: if the agency has no regulations
        """
        if stats.regulation_count <= 0:
            raise ValueError(f"Agency {stats.agency_id} has no regulations to score")

        w = self.weights
        avg_words = stats.total_words / stats.regulation_count

        complexity_factor = min(w.factor_cap, stats.avg_complexity * w.complexity_scale)
        word_count_factor = min(w.factor_cap, avg_words / w.words_divisor)
        stale_factor = max(0.0, 100.0 - stats.update_frequency_percent)

        raw = (
            complexity_factor * w.complexity
            + word_count_factor * w.word_count
            + stale_factor * w.staleness
        )
        clamped = max(w.floor, min(w.ceiling, raw))

        return DeregulationScore(agency_id=stats.agency_id, score=round_half_up(clamped))
