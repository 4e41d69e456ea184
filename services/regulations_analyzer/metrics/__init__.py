"""
Metrics & Scoring Engine
========================

Pure, side-effect-free computations over regulation text and per-agency
collections:

- text: word count, fingerprint, complexity score
- aggregator: per-agency statistics
- deregulation: opportunity score
"""

from services.regulations_analyzer.metrics.aggregator import (
    AgencyAggregator,
    AgencyStats,
    MetricName,
)
from services.regulations_analyzer.metrics.deregulation import (
    DeregulationScore,
    DeregulationScorer,
    DeregulationWeights,
)
from services.regulations_analyzer.metrics.text import (
    ComplexityWeights,
    TextMeasurement,
    complexity_score,
    extract_text,
    fingerprint,
    measure,
    word_count,
)

__all__ = [
    # Text
    "ComplexityWeights",
    "TextMeasurement",
    "complexity_score",
    "extract_text",
    "fingerprint",
    "measure",
    "word_count",
    # Aggregation
    "AgencyAggregator",
    "AgencyStats",
    "MetricName",
    # Scoring
    "DeregulationScore",
    "DeregulationScorer",
    "DeregulationWeights",
]
